from .raises import ScheduleError, ConfigurationError, BoundCheckError, DomainError
from .params import BaseParams, Arange, Choices
from .interp import Schedule, ScheduleIterator, Constant, cycle
from .decay import Step, Exp, Poly, Inv
from .cyclic import (Triangle, TriangleDecay2, TriangleExp,
                     Sin, SinDecay2, SinExp,
                     CosAnneal, CosAnnealDecay2, CosAnnealExp,
                     CyclicSchedule, Cos)
from .complex import Sequence, Loop, Interpolator, Shifted, ComposedSchedule

__all__ = ['ScheduleError', 'ConfigurationError', 'BoundCheckError', 'DomainError',
           'BaseParams', 'Arange', 'Choices',
           'Schedule', 'ScheduleIterator', 'Constant', 'cycle',
           'Step', 'Exp', 'Poly', 'Inv',
           'Triangle', 'TriangleDecay2', 'TriangleExp',
           'Sin', 'SinDecay2', 'SinExp',
           'CosAnneal', 'CosAnnealDecay2', 'CosAnnealExp',
           'CyclicSchedule', 'Cos',
           'Sequence', 'Loop', 'Interpolator', 'Shifted', 'ComposedSchedule']
