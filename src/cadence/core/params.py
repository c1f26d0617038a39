import json
import numbers
from pathlib import Path
from pprint import pformat
from typing import Any, Dict, Iterator, List, Tuple

import numpy as np
from joblib import hash
from omegaconf import DictConfig, OmegaConf

from .metaclasses import PropVar
from .raises import BoundCheckError

__all__ = ['Arange', 'Choices', 'BaseParams']


class Arange:
    """A range of numeric values with a default, left and right boundaries.

    Attributes:
        default: The value which will be assigned.
        left: The left boundary of the range (inclusive). Defaults to negative infinity.
        right: The right boundary of the range (inclusive). Defaults to positive infinity.
        integral: Whether the value must also be an integer.
    """

    def __init__(self, default=None, left=float('-inf'), right=float('inf'), integral=False):
        self.default = default
        self.left = left
        self.right = right
        self.integral = integral

    def accept(self, value) -> bool:
        if self.integral and (isinstance(value, bool) or not isinstance(value, numbers.Integral)):
            return False
        return isinstance(value, numbers.Real) and self.left <= value <= self.right

    def __repr__(self):
        kind = 'int' if self.integral else 'real'
        return f"Arange: {self.default}, {kind} in [{self.left}, {self.right}]"


class Choices:
    """A list of choices with a default value.

    Attributes:
        default: The value which will be assigned.
        choices: The values which can be used.
    """

    def __init__(self, default=None, choices=None):
        if choices is None:
            choices = []
        self.default = default
        self.choices = choices

    def accept(self, value) -> bool:
        return value in self.choices

    def __repr__(self):
        return f"Choice: [{self.default}], {self.choices}"


def _safe_repr(value: Any) -> str:
    if callable(value) and not isinstance(value, BaseParams):
        return getattr(value, '__qualname__', None) or repr(value)
    return pformat(value, compact=True).replace('\n', ' ')


def to_primitive(value, by_identity=False):
    """
    Converts a configuration value into a plain python object that can be stored in a `DictConfig` or
    hashed by `joblib`.

    Nested params are converted by their own `to_dict()`, numpy values into python numbers or lists, and other
    callables into their qualified names.

    With `by_identity`, callables are also tagged with their `id()`, so two different functions sharing a name
    (e.g. two lambdas) are told apart.
    """
    if isinstance(value, BaseParams):
        return value._to_dict(by_identity)
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, (list, tuple)):
        return [to_primitive(i, by_identity) for i in value]
    if isinstance(value, dict):
        return {k: to_primitive(v, by_identity) for k, v in value.items()}
    if callable(value):
        module = getattr(value, '__module__', None)
        name = getattr(value, '__qualname__', None) or repr(value)
        name = f'{module}.{name}' if module else name
        return f'{name}@{id(value):x}' if by_identity else name
    return value


class BaseParams(metaclass=PropVar):
    """
    An immutable configuration object that supports parameter constraint validation.

    Public attributes assigned in `__init__` form the configuration, in assignment order. Assigning an
    `Arange` or `Choices` registers a constraint for that name and assigns its default, which is checked
    immediately. Once `__init__` returns, the object can not be changed anymore.

    Examples:
        class Warmup(BaseParams):
            def __init__(self, steps):
                self.steps = Arange(steps, 1, integral=True)

        Warmup(0)  # raise BoundCheckError
    """

    def __setattr__(self, key: str, value: Any) -> None:
        """
        Sets an attribute value for the specified key.

        Raises:
            AttributeError: If the object has finished its initialization.
            BoundCheckError: If the specified value is not within the specified bounds or choices.
        """
        if self._prop.get('frozen', False):
            raise AttributeError(f"{self.__class__.__name__} is immutable, can't set attribute '{key}'.")

        if isinstance(value, (Arange, Choices)):
            self._prop.setdefault('constrain', {})[key] = value
            value = value.default

        if key in self._prop.setdefault('constrain', {}):
            self._check(key, value)

        object.__setattr__(self, key, value)

    def __delattr__(self, key: str) -> None:
        raise AttributeError(f"{self.__class__.__name__} is immutable, can't delete attribute '{key}'.")

    def _check(self, name, value):
        """
        Checks if the specified parameter value is within the specified bounds or choices.

        Raises:
            BoundCheckError: If the specified value is not within the specified bounds or choices.
        """
        bound = self._prop['constrain'][name]
        if isinstance(bound, Arange) and not bound.accept(value):
            kind = 'an integer' if bound.integral else 'a number'
            raise BoundCheckError(
                f"value of param '{name}' should be {kind} in range [{bound.left}, {bound.right}], but got {value!r}")
        elif isinstance(bound, Choices) and not bound.accept(value):
            raise BoundCheckError(f"value of param '{name}' should in values {bound.choices}, but got {value!r}")

    def keys(self) -> List[str]:
        return [k for k in self.__dict__ if not k.startswith('_')]

    def items(self) -> Iterator[Tuple[str, Any]]:
        for k in self.keys():
            yield k, self.__dict__[k]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert this configuration to a dictionary, nested params are converted recursively.

        The class name is stored under the key `_type_`.
        """
        return self._to_dict()

    def _to_dict(self, by_identity=False):
        res = {'_type_': self.__class__.__name__}
        for k, v in self.items():
            res[k] = to_primitive(v, by_identity)
        return res

    def to_config(self) -> DictConfig:
        """Convert this configuration to a read-only `DictConfig`."""
        cfg = OmegaConf.create(self.to_dict())
        OmegaConf.set_readonly(cfg, True)
        return cfg

    def to_json(self, file=None):
        """
        Convert this configuration to a JSON string.

        Args:
            file (str or Path, optional): If specified, the JSON string will be written to a file at the given path.
        """
        info = json.dumps(self.to_dict(), ensure_ascii=False, indent=2)
        if file is None:
            return info
        return Path(file).write_text(info, encoding='utf-8')

    def to_yaml(self, file=None):
        """
        Convert this configuration to a YAML string.

        Args:
            file (str or Path, optional): If specified, the YAML string will be written to a file at the given path.
        """
        info = OmegaConf.to_yaml(self.to_config())
        if file is None:
            return info
        return Path(file).write_text(info, encoding='utf-8')

    def hash(self) -> str:
        """
        Calculate the hash value of this configuration.

        Callables only contribute their qualified names, so this hash is stable across processes. `==` and
        `hash()` of the builtin also take the identity of callables into account.
        """
        return hash(self.to_dict())

    def _identity(self) -> str:
        # callables are compared by identity, not by name
        return hash(self._to_dict(by_identity=True))

    def __hash__(self):
        return int(self._identity(), 16)

    def __eq__(self, other):
        if not isinstance(other, BaseParams) or type(self) is not type(other):
            return NotImplemented
        return self._identity() == other._identity()

    def __repr__(self):
        content = ', '.join(["{}={}".format(k, _safe_repr(v)) for k, v in self.items()])
        return "{}({})".format(self.__class__.__name__, content)
