import numpy as np
import pytest
from torch import nn
from torch.optim.sgd import SGD

from cadence.core.interp import Constant, Schedule, ScheduleIterator, check_index, cycle
from cadence.core.decay import Exp
from cadence.core.cyclic import CosAnneal
from cadence.core.raises import DomainError, ScheduleError


class Counter(Schedule):
    """value is the index itself"""

    def __init__(self):
        pass

    def interp(self, t):
        return t


def test_check_index():
    assert check_index(1) == 1
    assert check_index(np.int64(5)) == 5
    for bad in [0, -3, 1.5, 2.0, '1', True, None]:
        with pytest.raises(DomainError):
            check_index(bad)


def test_value_at_is_call():
    sche = Exp(1.0, 0.5)
    assert sche.value_at(3) == sche(3) == 0.25
    with pytest.raises(DomainError):
        sche(0)
    with pytest.raises(ScheduleError):
        sche.value_at(-1)
    with pytest.raises(ValueError):
        sche(0.5)


def test_base_schedule_not_implemented():
    class Empty(Schedule):
        pass

    with pytest.raises(NotImplementedError):
        Empty()(1)


def test_cycle():
    assert cycle(0.0, 1.0, 0.0) == 0.0
    assert cycle(0.0, 1.0, 1.0) == 1.0
    assert np.isclose(cycle(0.8, 0.1, 0.5), 0.45)
    assert np.isclose(cycle(0.1, 0.8, 0.5), 0.45)
    assert np.allclose(cycle(np.array([0.0, 2.0]), np.array([1.0, 0.0]), 0.5), [0.5, 1.0])


def test_constant():
    const = Constant(0.5)
    assert const(1) == 0.5
    assert const(10 ** 9) == 0.5
    assert const.take(3) == [0.5, 0.5, 0.5]


def test_eltype():
    assert issubclass(Exp(1.0, 0.5).eltype, float)
    assert Constant(3).eltype is int
    assert issubclass(CosAnneal(0.1, 0.8, 10).eltype, float)


def test_iteration_is_lazy_and_restartable():
    sche = Counter()
    it = iter(sche)
    assert next(it) == 1
    assert next(it) == 2
    assert next(iter(sche)) == 1

    view = ScheduleIterator(sche)
    first = [v for _, v in zip(range(4), view)]
    second = [v for _, v in zip(range(4), view)]
    assert first == second == [1, 2, 3, 4]


def test_take():
    assert Exp(1.0, 0.5).take(4) == [1.0, 0.5, 0.25, 0.125]
    assert Counter().take(0) == []


def test_apply_and_scale():
    sche = Exp(1.0, 0.5)

    optim = SGD(nn.Linear(10, 10).parameters(), lr=0.3, momentum=0.9)
    for param_group in optim.param_groups:  # type:dict
        assert param_group['lr'] == 0.3

    assert sche.apply(optim, 1) == 1.0
    for param_group in optim.param_groups:  # type:dict
        assert param_group['lr'] == 1.0

    assert sche.apply(optim, 2) == 0.5
    for param_group in optim.param_groups:  # type:dict
        assert param_group['lr'] == 0.5

    optim = SGD(nn.Linear(10, 10).parameters(), lr=0.4, momentum=0.9)

    assert sche.scale(optim, 2) == 0.5
    for param_group in optim.param_groups:  # type:dict
        assert param_group['lr'] == 0.2

    assert sche.scale(optim, 1) == 1.0
    for param_group in optim.param_groups:  # type:dict
        assert param_group['lr'] == 0.4

    assert sche.apply(optim, 3, key='momentum') == 0.25
    for param_group in optim.param_groups:  # type:dict
        assert param_group['momentum'] == 0.25
