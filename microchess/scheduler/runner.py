"""
Periodic single-worker scheduler.

States: IDLE -> RUNNING -> IDLE on normal completion;
IDLE|RUNNING -> DRAINING -> STOPPED on shutdown or an unrecoverable fault.

Shutdown requests (signals, faults, callers) all go through one channel and
are consumed by the run loop, so drain logic runs at most once.
"""

import logging
import queue
import signal
import threading
import time
from enum import Enum
from typing import Callable, Optional

from ..core.errors import MicrochessError

logger = logging.getLogger(__name__)

DEFAULT_DRAIN_TIMEOUT = 5.0


class SchedulerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    DRAINING = "draining"
    STOPPED = "stopped"


class Scheduler:
    """
    Run a job now and then every interval, never overlapping.

    A tick that finds the previous invocation still running is skipped and
    logged (no queueing). On shutdown: if idle, one last synchronous
    invocation; if running, wait up to drain_timeout, then stop regardless.

    Job failures:
    - MicrochessError (persist/upload/read failures): logged, invocation ends
    - anything else: unrecoverable fault, routed to request_shutdown()

    Usage:
        scheduler = Scheduler(job, interval=3600.0)
        scheduler.install_signal_handlers()
        scheduler.run()
    """

    def __init__(
        self,
        job: Callable[[], object],
        interval: float,
        drain_timeout: float = DEFAULT_DRAIN_TIMEOUT,
        run_once: bool = False,
        name: str = "scheduler",
    ) -> None:
        self.job = job
        self.interval = interval
        self.drain_timeout = drain_timeout
        self.run_once = run_once
        self.name = name

        self._lock = threading.Lock()
        self._idle = threading.Condition(self._lock)
        self._state = SchedulerState.IDLE
        self._in_flight = False
        self._drained = False
        # SimpleQueue.put is reentrant, safe from signal handlers
        self._channel: "queue.SimpleQueue[str]" = queue.SimpleQueue()
        self._worker: Optional[threading.Thread] = None

        self.invocations = 0
        self.failures = 0
        self.skipped = 0
        self.stop_reason: Optional[str] = None

    @property
    def state(self) -> SchedulerState:
        with self._lock:
            return self._state

    @property
    def in_flight(self) -> bool:
        with self._lock:
            return self._in_flight

    def request_shutdown(self, reason: str = "shutdown requested") -> None:
        """Ask the run loop to drain. Safe from any thread and from signal handlers."""
        self._channel.put(reason)

    def install_signal_handlers(self) -> None:
        """Route SIGINT/SIGTERM to request_shutdown (main thread only)."""

        def _handler(signum, _frame):
            self.request_shutdown(signal.Signals(signum).name)

        signal.signal(signal.SIGINT, _handler)
        signal.signal(signal.SIGTERM, _handler)

    def tick(self) -> bool:
        """
        Dispatch one invocation on a worker thread if idle.

        Returns:
            True if an invocation was started
        """
        with self._lock:
            if self._state is not SchedulerState.IDLE:
                if self._state is SchedulerState.RUNNING:
                    self.skipped += 1
                    logger.warning("%s: previous run not finished yet; skipping this interval.", self.name)
                return False
            self._state = SchedulerState.RUNNING
            self._in_flight = True
        self._worker = threading.Thread(
            target=self._invoke, daemon=True, name=f"{self.name}-worker"
        )
        self._worker.start()
        return True

    def run(self) -> SchedulerState:
        """
        Run until shutdown; returns the final state (STOPPED).
        """
        logger.info("%s starting", self.name)

        if self.run_once:
            with self._lock:
                self._state = SchedulerState.RUNNING
                self._in_flight = True
            self._invoke()
            logger.info("%s: run-once mode; exiting.", self.name)
            self._drain(self._poll_reason() or "run once complete", final_invocation=False)
            return self.state

        self.tick()
        next_tick = time.monotonic() + self.interval
        while True:
            timeout = max(0.0, next_tick - time.monotonic())
            try:
                reason = self._channel.get(timeout=timeout)
            except queue.Empty:
                self.tick()
                next_tick = time.monotonic() + self.interval
                continue
            break

        self._drain(reason)
        return self.state

    def _poll_reason(self) -> Optional[str]:
        try:
            return self._channel.get_nowait()
        except queue.Empty:
            return None

    def _invoke(self) -> None:
        try:
            self._execute()
        finally:
            with self._lock:
                self._in_flight = False
                if self._state is SchedulerState.RUNNING:
                    self._state = SchedulerState.IDLE
                self._idle.notify_all()

    def _execute(self) -> None:
        try:
            self.job()
            self.invocations += 1
        except MicrochessError as ex:
            self.failures += 1
            logger.error("%s: failed to complete run: %s", self.name, ex)
        except Exception as ex:
            self.failures += 1
            logger.exception("%s: unrecoverable fault", self.name)
            self.request_shutdown(f"fault: {ex}")

    def _drain(self, reason: str, final_invocation: bool = True) -> None:
        with self._lock:
            if self._drained:
                return
            self._drained = True
            self.stop_reason = reason
            was_idle = not self._in_flight
            self._state = SchedulerState.DRAINING
        logger.info("%s: received %s. Shutting down gracefully...", self.name, reason)

        if was_idle:
            if final_invocation:
                with self._lock:
                    self._in_flight = True
                self._invoke()
        else:
            with self._lock:
                finished = self._idle.wait_for(lambda: not self._in_flight, timeout=self.drain_timeout)
            if not finished:
                logger.warning(
                    "%s: in-flight run did not finish within %.1fs; stopping anyway",
                    self.name,
                    self.drain_timeout,
                )

        with self._lock:
            self._state = SchedulerState.STOPPED
        logger.info("%s: shutdown complete.", self.name)
