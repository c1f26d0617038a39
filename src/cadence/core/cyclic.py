r"""
Periodic schedules.

Each schedule is a normalized waveform `w(t)` in [0, 1], optionally multiplied by an amplitude envelope, then mapped
into the range spanned by `range0` and `range1` with `cycle()`:

    abs(range0 - range1) * w(t) * envelope(t) + min(range0, range1)

There are three waveforms (triangle, sine, cosine annealing), each with three envelopes:

    plain     1
    Decay2    2 ** -floor((t - 1) / period)     (half the amplitude each cycle)
    Exp       decay ** (t - 1)

      Triangle          Sin             CosAnneal
    /\    /\    /   ,-.   ,-.   ,   \     |\     |\
   /  \  /  \  /   /   \ /   \ /     \    | \    | \
  /    \/    \/   /     '     '       '---|  '---|  '
"""
import warnings

import numpy as np

from .interp import Schedule, cycle, either
from .params import Arange, Choices

__all__ = ['triangle_wave', 'sine_wave', 'cosine_wave',
           'CyclicSchedule',
           'Triangle', 'TriangleDecay2', 'TriangleExp',
           'Sin', 'SinDecay2', 'SinExp',
           'CosAnneal', 'CosAnnealDecay2', 'CosAnnealExp',
           'Cos']


def triangle_wave(t, period):
    """A triangle wave going 0 -> 1 -> 0 every `period` iterations, starting at 0 when t = 1."""
    return (2 / np.pi) * np.abs(np.arcsin(np.sin(np.pi * (t - 1) / period)))


def sine_wave(t, period):
    """A rectified sine wave going 0 -> 1 -> 0 every `period` iterations, starting at 0 when t = 1."""
    return np.abs(np.sin(np.pi * (t - 1) / period))


def cosine_wave(t, period, restart=True):
    """
    Half a cosine going 1 -> 0 over `period` iterations, starting at 1 when t = 1.

    With `restart`, the phase goes back to 1 every `period` iterations. Without it, the wave anneals once and
    stays at 0 from t = period + 1 on.
    """
    t_hat = (t - 1) % period if restart else min(t - 1, period)
    return (1 + np.cos(np.pi * t_hat / period)) / 2


class CyclicSchedule(Schedule):
    """
    Base of the periodic schedules.

    Subclasses pick a waveform by overriding `wave(t)` and an amplitude envelope by overriding `envelope(t)`.

    Args:
        range0/λ0: the first range endpoint
        range1/λ1: the second range endpoint
        period: the period, a positive integer
    """

    def __init__(self, range0=None, range1=None, period=None, *, λ0=None, λ1=None):
        self.range0 = either('range0', range0, 'λ0', λ0)
        self.range1 = either('range1', range1, 'λ1', λ1)
        self.period = Arange(period, 1, integral=True)

    @property
    def low(self):
        """The floor of the schedule, `min(range0, range1)`."""
        return np.minimum(self.range0, self.range1)

    @property
    def amplitude(self):
        """`abs(range0 - range1)`"""
        return np.abs(self.range0 - self.range1)

    def wave(self, t):
        raise NotImplementedError()

    def envelope(self, t):
        return 1

    def interp(self, t):
        return cycle(self.range0, self.range1, self.wave(t) * self.envelope(t))


class Decay2Mixin:
    """Halves the amplitude once per completed period."""

    def envelope(self, t):
        return 0.5 ** ((t - 1) // self.period)


class ExpCyclicSchedule(CyclicSchedule):
    """
    Multiplies the amplitude by `decay` every iteration.

    Args:
        range0/λ0: the first range endpoint
        range1/λ1: the second range endpoint
        period: the period, a positive integer
        decay/γ: the decay rate
    """

    def __init__(self, range0=None, range1=None, period=None, decay=None, *, λ0=None, λ1=None, γ=None):
        super().__init__(range0, range1, period, λ0=λ0, λ1=λ1)
        self.decay = either('decay', decay, 'γ', γ)

    def envelope(self, t):
        return self.decay ** (t - 1)


class TriangleMixin:

    def wave(self, t):
        return triangle_wave(t, self.period)


class SinMixin:

    def wave(self, t):
        return sine_wave(t, self.period)


class CosAnnealMixin:

    def wave(self, t):
        return cosine_wave(t, self.period, self.restart)


class Triangle(TriangleMixin, CyclicSchedule):
    """
    A triangle wave schedule with `period`.

        abs(λ0 - λ1) * (2 / π) * abs(asin(sin(π * (t - 1) / period))) + min(λ0, λ1)
    """


class TriangleDecay2(Decay2Mixin, TriangleMixin, CyclicSchedule):
    """
    A triangle wave schedule with `period` and half the amplitude each cycle.

        abs(λ0 - λ1) * Triangle(t) / (2 ** floor((t - 1) / period)) + min(λ0, λ1)
    """


class TriangleExp(TriangleMixin, ExpCyclicSchedule):
    """
    A triangle wave schedule with `period` and an exponentially decaying amplitude.

        abs(λ0 - λ1) * Triangle(t) * γ ** (t - 1) + min(λ0, λ1)
    """


class Sin(SinMixin, CyclicSchedule):
    """
    A sine wave schedule with `period`.

        abs(λ0 - λ1) * abs(sin(π * (t - 1) / period)) + min(λ0, λ1)
    """


class SinDecay2(Decay2Mixin, SinMixin, CyclicSchedule):
    """
    A sine wave schedule with `period` and half the amplitude each cycle.

        abs(λ0 - λ1) * Sin(t) / (2 ** floor((t - 1) / period)) + min(λ0, λ1)
    """


class SinExp(SinMixin, ExpCyclicSchedule):
    """
    A sine wave schedule with `period` and an exponentially decaying amplitude.

        abs(λ0 - λ1) * Sin(t) * γ ** (t - 1) + min(λ0, λ1)
    """


class CosAnneal(CosAnnealMixin, CyclicSchedule):
    """
    A cosine annealing schedule, see "SGDR: Stochastic Gradient Descent with Warm Restarts".

        t̂ = (t - 1) % period if restart else min(t - 1, period)
        abs(λ0 - λ1) * (1 + cos(π * t̂ / period)) / 2 + min(λ0, λ1)

    Args:
        range0/λ0: the first range endpoint
        range1/λ1: the second range endpoint
        period: the period, a positive integer
        restart: use warm restarts, True by default. Otherwise anneal once down to `min(λ0, λ1)` and stay there.
    """

    def __init__(self, range0=None, range1=None, period=None, restart=True, *, λ0=None, λ1=None):
        super().__init__(range0, range1, period, λ0=λ0, λ1=λ1)
        self.restart = Choices(restart, [True, False])


class CosAnnealDecay2(Decay2Mixin, CosAnneal):
    """Cosine annealing with half the amplitude each cycle."""


class CosAnnealExp(CosAnnealMixin, ExpCyclicSchedule):
    """Cosine annealing with an exponentially decaying amplitude, `γ ** (t - 1)`."""

    def __init__(self, range0=None, range1=None, period=None, decay=None, restart=True, *,
                 λ0=None, λ1=None, γ=None):
        super().__init__(range0, range1, period, decay, λ0=λ0, λ1=λ1, γ=γ)
        self.restart = Choices(restart, [True, False])


def Cos(range0=None, range1=None, period=None, *, λ0=None, λ1=None):
    """Deprecated, use `CosAnneal(range0, range1, period, restart=True)` instead."""
    warnings.warn('Cos is deprecated and will be removed soon, please use CosAnneal instead.',
                  DeprecationWarning, stacklevel=2)
    return CosAnneal(range0, range1, period, restart=True, λ0=λ0, λ1=λ1)
