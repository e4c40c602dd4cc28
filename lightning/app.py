"""Assembly of the matching service from its parts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .mq import MessageQueue, new_mq
from .pool import MatchPool
from .server import MatchServer
from .status import Status, SysSignalHandle


@dataclass
class App:
    """The running service: shared status, match pool, request server."""

    status: Status
    mq: MessageQueue
    pool: MatchPool
    server: MatchServer
    signal_handle: SysSignalHandle

    def close(self) -> None:
        """Stop the matching workers and wait until they have finished."""
        self.status.stop()
        self.status.wait()

    def __enter__(self) -> "App":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def wire_app(pairs: Iterable[str], mq: Optional[MessageQueue] = None) -> App:
    """Build a service matching the given pairs and publishing trades to mq."""
    queue = mq if mq is not None else new_mq()
    status = Status()
    signal_handle = SysSignalHandle(status)
    pool = MatchPool(status, pairs, queue)
    server = MatchServer(status, pool)
    return App(
        status=status,
        mq=queue,
        pool=pool,
        server=server,
        signal_handle=signal_handle,
    )