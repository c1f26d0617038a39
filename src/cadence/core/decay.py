"""
Monotonic, non-periodic schedules.

Every schedule here starts at its base value on the first iteration (t = 1) and, for decay rates in (0, 1)
and positive powers, never increases afterwards.

Powers are computed in float64 with numpy, so a growing schedule overflows to `inf` instead of raising.
"""
import bisect
import numbers
from itertools import accumulate

import numpy as np

from .interp import Schedule, either
from .params import Arange
from .raises import ConfigurationError

__all__ = ['Step', 'Exp', 'Poly', 'Inv']


class Step(Schedule):
    r"""
    Decay by `decay_rate` every `step_size` iterations, equal to `torch.optim.lr_scheduler.StepLR`.

    base  |----+
          |    |
          |    +----+
          |         |
          |         +----+
          |              +-------
          +-----------------------
           step  step  step

    The output conforms to

        base_value * decay_rate ** floor((t - 1) / step_size)

    If `step_size` is a list, it is the length of each stage. The value decays once at the end of every stage, and
    stays at `base_value * decay_rate ** len(step_size)` after the last one, like `MultiStepLR`.

    Args:
        base_value/λ: The value of the first stage.
        decay_rate/γ: The factor applied at the end of each stage.
        step_size: A positive integer, or a list of positive integers.
    """

    def __init__(self, base_value=None, decay_rate=None, step_size=None, *, λ=None, γ=None):
        self.base_value = either('base_value', base_value, 'λ', λ)
        self.decay_rate = either('decay_rate', decay_rate, 'γ', γ)
        if isinstance(step_size, (list, tuple)):
            if len(step_size) == 0:
                raise ConfigurationError("param 'step_size' should not be empty.")
            for size in step_size:
                if isinstance(size, bool) or not isinstance(size, numbers.Integral) or size < 1:
                    raise ConfigurationError(
                        f"every stage in 'step_size' should be a positive integer, but got {step_size!r}")
            self.step_size = tuple(step_size)
            self._ends = tuple(accumulate(step_size))
        else:
            self.step_size = Arange(step_size, 1, integral=True)

    def stage(self, t) -> int:
        """The number of decays applied at iteration `t`."""
        if isinstance(self.step_size, tuple):
            return bisect.bisect_right(self._ends, t - 1)
        return (t - 1) // self.step_size

    def interp(self, t):
        return self.base_value * np.float_power(self.decay_rate, self.stage(t))


class Exp(Schedule):
    """
    Unbounded geometric decay, equal to `torch.optim.lr_scheduler.ExponentialLR`.

        base_value * decay_rate ** (t - 1)

    Args:
        base_value/λ: The value at t = 1.
        decay_rate/γ: The factor applied every iteration.
    """

    def __init__(self, base_value=None, decay_rate=None, *, λ=None, γ=None):
        self.base_value = either('base_value', base_value, 'λ', λ)
        self.decay_rate = either('decay_rate', decay_rate, 'γ', γ)

    def interp(self, t):
        return self.base_value * np.float_power(self.decay_rate, t - 1)


class Poly(Schedule):
    """
    Polynomial decay, a positive `power` decays and a negative one grows.

        base_value * (1 + (t - 1)) ** (-power)

    Args:
        base_value/λ: The value at t = 1.
        power/p: The exponent.
    """

    def __init__(self, base_value=None, power=None, *, λ=None, p=None):
        self.base_value = either('base_value', base_value, 'λ', λ)
        self.power = either('power', power, 'p', p)

    def interp(self, t):
        return self.base_value * np.float_power(t, -self.power)


class Inv(Schedule):
    """
    Inverse decay.

        base_value / (1 + decay_rate * (t - 1)) ** power

    Args:
        base_value/λ: The value at t = 1.
        decay_rate/γ: How fast the denominator grows.
        power/p: The exponent of the denominator, 1 by default.
    """

    def __init__(self, base_value=None, decay_rate=None, power=1, *, λ=None, γ=None, p=None):
        self.base_value = either('base_value', base_value, 'λ', λ)
        self.decay_rate = either('decay_rate', decay_rate, 'γ', γ)
        self.power = power if p is None else p

    def interp(self, t):
        return self.base_value / np.float_power(1 + self.decay_rate * (t - 1), self.power)
