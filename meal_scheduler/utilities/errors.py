"""Error types raised across the scheduler.

Only InputError leaves the schedule generator; the other two belong to the
storage and swap helpers used by the HTTP layer.
"""


class InputError(ValueError):
    """Generation cannot start: profile missing, catalog empty or horizon invalid."""


class ScheduleNotFoundError(LookupError):
    """No stored schedule (or week) matches the request."""


class SwapError(ValueError):
    """A swap references a week or day that does not exist in the schedule."""


__all__ = ['InputError', 'ScheduleNotFoundError', 'SwapError']
