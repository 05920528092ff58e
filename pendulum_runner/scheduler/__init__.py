"""Schedule execution — models, classification, runner, persistence, and driver."""

from pendulum_runner.scheduler.classify import Expired, Inactive, Valid, classify
from pendulum_runner.scheduler.engine import SchedulerEngine
from pendulum_runner.scheduler.models import Schedule, ScheduleHistory
from pendulum_runner.scheduler.runner import ScheduleRunner
from pendulum_runner.scheduler.store import LibsqlScheduleHistoryStore, LibsqlScheduleStore
from pendulum_runner.scheduler.transport import TRANSPORT_FAILURE_STATUS, HttpxTransport

__all__ = [
    "Schedule",
    "ScheduleHistory",
    "Inactive",
    "Expired",
    "Valid",
    "classify",
    "ScheduleRunner",
    "HttpxTransport",
    "TRANSPORT_FAILURE_STATUS",
    "LibsqlScheduleStore",
    "LibsqlScheduleHistoryStore",
    "SchedulerEngine",
]
