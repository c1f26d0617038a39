"""
Schedules built out of other schedules.

A combinator owns the schedules it is built with and recomputes its position from `t` on every call, so, like the
leaves, it holds no state and can be evaluated in any order.
"""
import bisect
import numbers
from itertools import accumulate
from typing import Callable

from .interp import Constant, Schedule
from .params import Arange
from .raises import ConfigurationError

__all__ = ['Sequence', 'Loop', 'Interpolator', 'Shifted', 'ComposedSchedule']


def _as_schedule(value, name='schedule'):
    if isinstance(value, Schedule):
        return value
    if isinstance(value, numbers.Number):
        return Constant(value)
    raise ConfigurationError(f"param '{name}' should be a Schedule or a number, but got {value!r}")


class Sequence(Schedule):
    r"""
    Concat schedules one after another.

    Each schedule runs for its number of steps, counting its own index from 1:

        Sequence([(Exp(1.0, 0.5), 3), (Constant(0.1), 5)])

          t     1    2     3     4    ...  8    9    ...
          value 1.0  0.5  0.25  0.1   ...  0.1  0.1  ...
                \---Exp----/    \---Constant-----------

    After the last step, the last schedule keeps going with an increasing index instead of restarting.

    Args:
        schedules: A list of schedules (or numbers, used as constants). Or a list of (schedule, step_size) pairs,
            in which case `step_sizes` must be omitted.
        step_sizes: The number of steps of each schedule, positive integers.
    """

    def __init__(self, schedules, step_sizes=None):
        schedules = list(schedules)
        if len(schedules) == 0:
            raise ConfigurationError('Sequence needs at least one schedule.')

        if step_sizes is None:
            if not all(isinstance(pair, (tuple, list)) and len(pair) == 2 for pair in schedules):
                raise ConfigurationError(
                    "Sequence should be built from a list of (schedule, step_size) pairs, "
                    "or from a list of schedules and a list of step sizes.")
            schedules, step_sizes = zip(*schedules)
        step_sizes = list(step_sizes)

        if len(schedules) != len(step_sizes):
            raise ConfigurationError(
                f'got {len(schedules)} schedules but {len(step_sizes)} step sizes, they should be equal.')
        for size in step_sizes:
            if isinstance(size, bool) or not isinstance(size, numbers.Integral) or size < 1:
                raise ConfigurationError(f'step sizes should be positive integers, but got {step_sizes!r}')

        self.schedules = tuple(_as_schedule(s, 'schedules') for s in schedules)
        self.step_sizes = tuple(step_sizes)
        self._starts = (0, *accumulate(self.step_sizes[:-1]))

    def locate(self, t):
        """Returns the index of the schedule evaluated at `t`, and its local index."""
        i = bisect.bisect_right(self._starts, t - 1) - 1
        return i, t - self._starts[i]

    def interp(self, t):
        i, local = self.locate(t)
        return self.schedules[i].value_at(local)

    def sample(self):
        return self.schedules[0].sample()

    @property
    def total_steps(self) -> int:
        """The number of iterations before the last schedule saturates."""
        return sum(self.step_sizes)


class Loop(Schedule):
    """
    Replay `schedule` from its first iteration every `period` iterations.

        schedule(((t - 1) % period) + 1)

    Any schedule can be looped, which turns a decay into a sawtooth, e.g. `Loop(Exp(1.0, 0.5), period=3)` gives
    1.0, 0.5, 0.25, 1.0, 0.5, 0.25, ...

    Args:
        schedule: the schedule to replay
        period: a positive integer
    """

    def __init__(self, schedule, period):
        self.schedule = _as_schedule(schedule)
        self.period = Arange(period, 1, integral=True)

    def interp(self, t):
        return self.schedule.value_at((t - 1) % self.period + 1)

    def sample(self):
        return self.schedule.sample()


class Interpolator(Schedule):
    """
    Interpolate between `a` and `b` with the output of `weight`:

        a + (b - a) * weight(t)

    The result stays in [a, b] as long as `weight` stays in [0, 1], which is not checked.
    """

    def __init__(self, weight, a, b):
        self.weight = _as_schedule(weight, 'weight')
        self.a = a
        self.b = b

    def interp(self, t):
        return self.a + (self.b - self.a) * self.weight.value_at(t)

    def sample(self):
        return self.a + (self.b - self.a) * self.weight.sample()


class Shifted(Schedule):
    """
    Move the time origin of `schedule` by `offset` iterations.

        schedule(t - offset)

    A positive offset delays the schedule: `Shifted(s, 10)` is only defined from t = 11 on, earlier indices raise
    the `DomainError` of `schedule`. A negative offset starts `schedule` in the middle.
    """

    def __init__(self, schedule, offset):
        self.schedule = _as_schedule(schedule)
        self.offset = Arange(offset, integral=True)

    def interp(self, t):
        return self.schedule.value_at(t - self.offset)

    def sample(self):
        return self.schedule.sample()


class ComposedSchedule(Schedule):
    """
    Transform every value of `schedule` with `fn`, without changing its timing.

        fn(schedule(t))

    Examples:
        # never go below 1e-5
        ComposedSchedule(Exp(0.1, 0.9), lambda v: max(v, 1e-5))
    """

    def __init__(self, schedule, fn: Callable):
        if not callable(fn):
            raise ConfigurationError(f"param 'fn' should be callable, but got {fn!r}")
        self.schedule = _as_schedule(schedule)
        self.fn = fn

    def interp(self, t):
        return self.fn(self.schedule.value_at(t))

    def sample(self):
        return self.fn(self.schedule.sample())
