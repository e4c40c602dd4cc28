"""Shutdown coordination: a stop flag, a pending-work counter and signal handling."""

from __future__ import annotations

import logging
import signal
import sys
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class Status:
    """Run state shared by workers: stop requests and outstanding work."""

    def __init__(self) -> None:
        self._stopped = threading.Event()
        self._cond = threading.Condition()
        self._pending = 0

    def stop(self) -> None:
        """Ask every worker to stop."""
        self._stopped.set()

    def is_stopped(self) -> bool:
        return self._stopped.is_set()

    @property
    def pending(self) -> int:
        """Number of outstanding units of work."""
        with self._cond:
            return self._pending

    def add(self, delta: int) -> None:
        """Adjust the outstanding work count; it may never go negative."""
        with self._cond:
            if self._pending + delta < 0:
                raise ValueError("negative pending work counter")
            self._pending += delta
            if self._pending == 0:
                self._cond.notify_all()

    def done(self) -> None:
        """Mark one unit of work finished."""
        self.add(-1)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until no work is outstanding; return False on timeout."""
        with self._cond:
            return self._cond.wait_for(lambda: self._pending == 0, timeout)


class SysSignalHandle:
    """Stops the service cleanly on SIGINT, SIGTERM or SIGQUIT."""

    SIGNAL_NAMES = ("SIGINT", "SIGTERM", "SIGQUIT")

    def __init__(
        self, status: Status, exit_func: Callable[[int], Any] = sys.exit
    ) -> None:
        self.status = status
        self._exit = exit_func

    def begin(self) -> None:
        """Install the handler for the termination signals (main thread only)."""
        for name in self.SIGNAL_NAMES:
            signum = getattr(signal, name, None)
            if signum is not None:
                signal.signal(signum, self.handle)
        logger.info("listening for termination signals")

    def handle(self, signum: int, frame: Any) -> None:
        """Stop the service, wait for outstanding work, then exit with status 0."""
        try:
            name = signal.Signals(signum).name
        except ValueError:
            name = str(signum)
        logger.info("handle signal: %s", name)
        logger.info("shutting down safely...")
        self.status.stop()
        self.status.wait()
        logger.info("shutdown complete")
        self._exit(0)