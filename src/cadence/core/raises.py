"""
Errors raised by schedules.

`ConfigurationError` is raised while a schedule is being built, `DomainError` while it is being evaluated.
"""

__all__ = ['ScheduleError', 'ConfigurationError', 'BoundCheckError', 'DomainError']


class ScheduleError(Exception):
    """Base class of every error raised by cadence."""


class ConfigurationError(ScheduleError, ValueError):
    """Invalid construction parameter, e.g. a non-positive period or segment length."""


class BoundCheckError(ConfigurationError):
    """A value assigned to a constrained parameter is out of its `Arange` or not in its `Choices`."""


class DomainError(ScheduleError, ValueError):
    """A schedule was evaluated at an index outside of its domain (t < 1 or not an integer)."""
