"""
Waiting for jobs to leave the INPUT and ACTIVE status.

The protocol polls an existence check and sleeps in between using a
caller-supplied wait function. It never sleeps on its own, so tests can
drive it with a fake clock.
"""

from datetime import timedelta
import logging
import time
from typing import Callable, List

from ..domain import Job, JobStatus

LOG = logging.getLogger(__name__)


class Stopwatch(object):
    """Measures elapsed time on a monotonic clock."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._start = clock()

    def elapsed(self) -> timedelta:
        return timedelta(seconds=self._clock() - self._start)

    def expired(self, timeout: timedelta) -> bool:
        return self.elapsed() >= timeout


def sleep(duration: timedelta) -> None:
    time.sleep(duration.total_seconds())


def phases_for(status: JobStatus) -> List[JobStatus]:
    """Statuses a job of ``status`` still has to pass, in order."""
    if status == JobStatus.OUTPUT:
        return []
    if status == JobStatus.ACTIVE:
        return [JobStatus.ACTIVE]
    return [JobStatus.INPUT, JobStatus.ACTIVE]


# pylint: disable-next=too-many-arguments
def wait_for_status(
    job: Job,
    exists: Callable[[Job, JobStatus], bool],
    waiting: timedelta,
    timeout: timedelta,
    wait: Callable[[timedelta], None] = sleep,
    clock: Callable[[], float] = time.monotonic,
) -> bool:
    """
    Wait until ``job`` is finished, based on its last known status.

    Args:
        job: The job to wait for
        exists: Checks whether the job still exists with a given status
        waiting: Duration passed to ``wait`` between two checks
        timeout: Overall time budget
        wait: Suspends the caller for the given duration
        clock: Monotonic clock in seconds

    Returns:
        True if the job finished, False if the timeout was exceeded

    Errors raised by ``exists`` or ``wait`` are not caught.
    """
    stopwatch = Stopwatch(clock)
    for status in phases_for(job.status):
        if stopwatch.expired(timeout):
            LOG.debug("timeout before waiting for %s to leave %s",
                      job.id, status.value)
            return False
        LOG.debug("waiting for %s to leave %s", job.id, status.value)
        while exists(job, status):
            wait(waiting)
            if stopwatch.expired(timeout):
                LOG.debug("timeout after %s waiting for %s",
                          stopwatch.elapsed(), job.id)
                return False
    return True
