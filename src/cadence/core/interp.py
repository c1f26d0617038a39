"""
This module provides the base of every schedule: a pure function from a 1-based iteration index to a value,
which can be used in applying learning rate of optimizer or scaling a loss value as weight.

A `Schedule` is called once per iteration:

    schedule = CosAnneal(0.1, 0.8, period=10)
    for t in range(1, 101):
        lr = schedule(t)

It holds no state between calls, so it can be evaluated at any index, in any order. All the state (the
current index) is supplied by the caller. If you drive a PyTorch optimizer, `schedule.apply(optimizer, t)` and
`schedule.scale(optimizer, t)` write the value into the optimizer's `param_groups`, and
`cadence.contrib.optim.Scheduler` keeps the counter for you.

Every schedule is also a lazy, restartable sequence of the values at t = 1, 2, 3, ..., see `ScheduleIterator`.
"""
import numbers
from itertools import count, islice
from typing import Any, Iterator, List

import numpy as np

from .params import BaseParams
from .raises import ConfigurationError, DomainError

__all__ = ['Schedule', 'ScheduleIterator', 'Constant', 'cycle', 'check_index']


def check_index(t):
    """
    Make sure `t` is a valid iteration index, i.e. an integer no less than 1.

    Raises:
        DomainError: If `t` is not an integer or is smaller than 1.
    """
    if isinstance(t, bool) or not isinstance(t, numbers.Integral):
        raise DomainError(f'iteration index should be an integer, but got {t!r}')
    if t < 1:
        raise DomainError(f'iteration index should be no less than 1, but got {t}')
    return t


def cycle(range0, range1, w):
    """
    Map a normalized waveform value `w` in [0, 1] into the range spanned by `range0` and `range1`.

    The order of the endpoints doesn't matter:

        abs(range0 - range1) * w + min(range0, range1)

    numpy arrays are mapped elementwise.
    """
    return np.abs(range0 - range1) * w + np.minimum(range0, range1)


def either(name, value, alias, alias_value):
    """Returns the parameter given by its name or by its keyword alias, exactly one of them must be given."""
    if value is None and alias_value is None:
        raise ConfigurationError(f"missing param '{name}' (or '{alias}').")
    if value is not None and alias_value is not None:
        raise ConfigurationError(f"param '{name}' and its alias '{alias}' are both given.")
    return alias_value if value is None else value


class Schedule(BaseParams):
    """
    Base class of all schedules.

    Subclasses assign their configuration in `__init__` and implement `interp(t)`, which is only called with a
    valid index.
    """

    def interp(self, t):
        """Compute the value at a valid index `t`. Must be implemented in a subclass."""
        raise NotImplementedError()

    def value_at(self, t):
        """
        Return the value at iteration `t`.

        Raises:
            DomainError: If `t` is not an integer no less than 1, or an inner schedule is evaluated out of its
                domain.
        """
        return self.interp(check_index(t))

    def __call__(self, t):
        return self.value_at(t)

    def sample(self):
        """
        A value of this schedule, used to find its `eltype`. Leaves return the value at t = 1, combinators build it
        from the samples of their children, as `t = 1` may be out of the domain of a shifted child.
        """
        return self.value_at(1)

    @property
    def eltype(self) -> type:
        """The type of values produced by this schedule."""
        return type(self.sample())

    def __iter__(self) -> Iterator[Any]:
        return iter(ScheduleIterator(self))

    def take(self, n: int) -> List[Any]:
        """Return the values at t = 1, ..., n."""
        return list(islice(self, n))

    def scale(self, optimizer, t, key='lr'):
        """
        Scale the learning rate by the current value.

        'Scale' means that the current schedule value will not be applied directly to the learning rate, but will be
        multiplied by the initial learning rate. You can use `schedule.apply()` to apply the schedule value directly.

        Notes:
            When `scale()` is first called, an initial learning rate `_raw_{key}` is stored in each `param_group`.
            Then, the learning rate (stored in `param_groups` with the key `key`) will be calculated as
            `_raw_{key} * schedule(t)`.

        Args:
            optimizer: A PyTorch optimizer instance, or anything with a list of dict `param_groups`.
            t: The current iteration index.
            key: The hyperparameter to be scaled.

        Returns:
            The current schedule value.
        """
        ratio = self(t)
        for param_group in optimizer.param_groups:  # type:dict
            raw = param_group.setdefault(f'_raw_{key}', param_group[key])
            param_group[key] = raw * ratio

        return ratio

    def apply(self, optimizer, t, key='lr'):
        """
        Apply the current schedule value to the optimizer.

        Args:
            optimizer: A PyTorch optimizer instance, or anything with a list of dict `param_groups`.
            t: The current iteration index.
            key: The hyperparameter to be set.

        Returns:
            The new value.
        """
        new_value = self(t)
        for param_group in optimizer.param_groups:  # type:dict
            param_group[key] = new_value

        return new_value


class ScheduleIterator:
    """
    A lazy view of `schedule` as the infinite sequence `schedule(1), schedule(2), ...`.

    Each `iter()` starts a new pass from t = 1. Values are not cached.
    """

    def __init__(self, schedule: Schedule):
        self.schedule = schedule

    def __iter__(self):
        for t in count(1):
            yield self.schedule.value_at(t)

    def __repr__(self):
        return f'ScheduleIterator({self.schedule!r})'


class Constant(Schedule):
    r"""
    A schedule representing a constant value
                |
    constant    |--------------
                |
                |________________
                  ... any ...
    """

    def __init__(self, value):
        self.value = value

    def interp(self, t):
        return self.value
