__all__ = ['PropVar']

from abc import ABCMeta


class PropVar(ABCMeta):
    """
    Metaclass of every schedule.

    Each instance gets a private `_prop` dict before its `__init__` runs, and is marked as frozen once the
    outermost `__init__` returns. Classes use `_prop['frozen']` to refuse later assignment.
    """

    def __call__(cls, *args, **kwargs):
        self = cls.__new__(cls)
        object.__setattr__(self, '_prop', {})
        self.__init__(*args, **kwargs)
        self._prop['frozen'] = True
        return self
