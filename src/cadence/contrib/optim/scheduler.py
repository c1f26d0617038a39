from typing import Any, Callable, Dict, List, Optional

from cadence.core.interp import Schedule
from cadence.core.raises import ConfigurationError
from cadence.utils.logger import get_global_logger


class Scheduler:
    """
    Drive a hyperparameter of an optimizer with a schedule.

    Every call of `step()` sets the hyperparameter of each `param_group` to the schedule value of its own iteration
    counter, then increments the counter. Counters start at 1 and are kept in `state`, keyed by the identity of the
    param group, so a group added later with `optimizer.add_param_group()` starts its own schedule from the
    beginning. The schedule itself stays stateless.

    Examples:
    >>> optim = SGD(model.parameters(), lr=0.1)
    ... scheduler = Scheduler(CosAnneal(0.1, 0.8, period=10), optim)
    ... for batch in loader:
    ...     scheduler.step()
    ...     loss(batch).backward()
    ...     optim.step()

    Schedule the momentum of SGD instead:
    >>> Scheduler(schedule, optim, key='momentum')

    Or set it with your own function:
    >>> Scheduler(schedule, optim, update_func=lambda group, value: group.update(lr=value, momentum=1 - value))

    Args:
        schedule: the schedule to use
        optimizer: A PyTorch optimizer instance, or anything with a list of dict `param_groups`.
        key: the hyperparameter to schedule, `lr` by default
        update_func: a function with inputs `(param_group, value)` that sets the value into the group, overrides
            `key` when given
    """

    def __init__(self, schedule: Schedule, optimizer, key: str = 'lr',
                 update_func: Optional[Callable[[Dict[str, Any], Any], Any]] = None):
        if not isinstance(schedule, Schedule):
            raise ConfigurationError(f"param 'schedule' should be a Schedule, but got {schedule!r}")
        if update_func is not None and not callable(update_func):
            raise ConfigurationError(f"param 'update_func' should be callable, but got {update_func!r}")
        self.state: Dict[int, int] = {}
        self.schedule = schedule
        self.optimizer = optimizer
        self.key = key
        self.update_func = update_func
        self.logger = get_global_logger()

    def iteration(self, param_group) -> int:
        """The iteration index which will be used for `param_group` in the next `step()`."""
        return self.state.get(id(param_group), 1)

    def step(self) -> List[Any]:
        """
        Apply the schedule to every param group and advance their counters.

        Returns:
            The values applied, one for each param group.
        """
        values = []
        for i, param_group in enumerate(self.optimizer.param_groups):
            if id(param_group) not in self.state:
                self.logger.debug(f'Scheduler starts to schedule param group {i} with {self.schedule!r}')
            t = self.iteration(param_group)
            value = self.schedule(t)
            if self.update_func is None:
                param_group[self.key] = value
            else:
                self.update_func(param_group, value)
            self.state[id(param_group)] = t + 1
            values.append(value)
        return values

    def state_dict(self) -> Dict[str, Any]:
        """The counters of the param groups, in the order of `optimizer.param_groups`."""
        return {'iterations': [self.iteration(group) for group in self.optimizer.param_groups]}

    def load_state_dict(self, state_dict: Dict[str, Any]):
        """
        Restore the counters saved by `state_dict()`, the optimizer should have the same number of groups.

        Notes:
            `optimizer.load_state_dict()` replaces the param group dicts, call this method after it.
        """
        iterations = state_dict['iterations']
        groups = self.optimizer.param_groups
        if len(iterations) != len(groups):
            raise ConfigurationError(
                f'state_dict has {len(iterations)} param groups, but the optimizer has {len(groups)}.')
        self.state = {id(group): t for group, t in zip(groups, iterations)}
        self.logger.debug(f'Scheduler restored iterations {iterations}')

    def __repr__(self):
        return f'Scheduler({self.schedule!r}, {self.optimizer.__class__.__name__})'
