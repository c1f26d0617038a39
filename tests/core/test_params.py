import copy

import numpy as np
import pytest
from omegaconf import DictConfig
from omegaconf.errors import ReadonlyConfigError

from cadence.core.params import Arange, BaseParams, Choices
from cadence.core.raises import BoundCheckError, ConfigurationError
from cadence.core.interp import Constant
from cadence.core.decay import Exp, Poly
from cadence.core.cyclic import CosAnneal
from cadence.core.complex import ComposedSchedule, Loop, Sequence


class MyParams(BaseParams):

    def __init__(self, size=20, dataset='cifar10'):
        self.size = Arange(size, 10, 100, integral=True)
        self.dataset = Choices(dataset, ['cifar10', 'cifar100'])


def test_params_constrain():
    params = MyParams()
    assert params.size == 20
    assert params.dataset == 'cifar10'
    assert MyParams(100, 'cifar100').size == 100

    with pytest.raises(BoundCheckError):
        MyParams(size=300)
    with pytest.raises(BoundCheckError):
        MyParams(size=20.5)
    with pytest.raises(BoundCheckError):
        MyParams(dataset='stl10')

    # BoundCheckError is a configuration error
    with pytest.raises(ConfigurationError):
        MyParams(size=5)


def test_params_immutable():
    params = MyParams()
    with pytest.raises(AttributeError):
        params.size = 30
    with pytest.raises(AttributeError):
        del params.size

    sche = Exp(1.0, 0.5)
    with pytest.raises(AttributeError):
        sche.decay_rate = 0.9
    assert sche(2) == 0.5


def test_items():
    assert list(MyParams().items()) == [('size', 20), ('dataset', 'cifar10')]
    assert Exp(1.0, 0.5).keys() == ['base_value', 'decay_rate']


def test_to_dict():
    sche = Loop(Exp(1.0, 0.5), 3)
    assert sche.to_dict() == {
        '_type_': 'Loop',
        'schedule': {'_type_': 'Exp', 'base_value': 1.0, 'decay_rate': 0.5},
        'period': 3,
    }

    seq = Sequence([(Constant(0.1), 2), (Exp(1.0, 0.5), 3)])
    dic = seq.to_dict()
    assert dic['step_sizes'] == [2, 3]
    assert dic['schedules'][0] == {'_type_': 'Constant', 'value': 0.1}

    vec = CosAnneal(np.array([0.1, 1.0]), np.array([0.8, 0.0]), 10)
    assert vec.to_dict()['range0'] == [0.1, 1.0]

    assert ComposedSchedule(Exp(1.0, 0.5), abs).to_dict()['fn'] == 'builtins.abs'


def test_to_config():
    cfg = Loop(Exp(1.0, 0.5), 3).to_config()
    assert isinstance(cfg, DictConfig)
    assert cfg.period == 3
    assert cfg.schedule.decay_rate == 0.5
    with pytest.raises(ReadonlyConfigError):
        cfg.period = 4


def test_to_yaml_and_json():
    sche = CosAnneal(0.1, 0.8, 10)
    yaml = sche.to_yaml()
    assert 'period: 10' in yaml
    assert 'restart: true' in yaml
    assert '"_type_": "CosAnneal"' in sche.to_json()


def test_hash_and_eq():
    assert Exp(1.0, 0.5).hash() == Exp(1.0, 0.5).hash()
    assert Exp(1.0, 0.5).hash() != Exp(1.0, 0.6).hash()
    assert Exp(1.0, 0.5) == Exp(1.0, 0.5)
    assert Exp(1.0, 0.5) == Exp(λ=1.0, γ=0.5)
    assert Exp(1.0, 0.5) != Exp(1.0, 0.6)
    assert Exp(1.0, 0.5) != Poly(1.0, 0.5)
    assert len({Exp(1.0, 0.5), Exp(1.0, 0.5), Exp(1.0, 0.6)}) == 2
    assert Loop(Exp(1.0, 0.5), 3) == Loop(Exp(1.0, 0.5), 3)
    assert Loop(Exp(1.0, 0.5), 3) != Loop(Exp(1.0, 0.5), 4)


def test_repr():
    assert repr(Exp(1.0, 0.5)) == 'Exp(base_value=1.0, decay_rate=0.5)'
    assert repr(Loop(Exp(1.0, 0.5), 3)) == 'Loop(schedule=Exp(base_value=1.0, decay_rate=0.5), period=3)'
    assert repr(ComposedSchedule(Constant(1), abs)) == 'ComposedSchedule(schedule=Constant(value=1), fn=abs)'


def test_copy():
    sche = Loop(CosAnneal(0.1, 0.8, 10), 5)
    copied = copy.deepcopy(sche)
    assert copied == sche
    assert copied.take(12) == sche.take(12)
    with pytest.raises(AttributeError):
        copied.period = 3
