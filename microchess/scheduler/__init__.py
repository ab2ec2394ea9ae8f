"""
Scheduling.

Scheduler runs a job periodically with overlap prevention and graceful
drain; GenerationJob is the generator's unit of work.
"""

from .runner import DEFAULT_DRAIN_TIMEOUT, Scheduler, SchedulerState
from .jobs import GenerationJob

__all__ = [
    "DEFAULT_DRAIN_TIMEOUT",
    "Scheduler",
    "SchedulerState",
    "GenerationJob",
]
