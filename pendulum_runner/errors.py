"""Exceptions raised by Pendulum."""


class PendulumError(Exception):
    """Base class for errors raised by this package."""


class ScheduleNotFoundError(PendulumError):
    """An update targeted a schedule that is not in the store."""

    def __init__(self, schedule_id: str) -> None:
        super().__init__(f"Schedule not found: {schedule_id}")
        self.schedule_id = schedule_id
