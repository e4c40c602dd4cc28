import signal
import threading
import time

import pytest

from lightning.status import Status, SysSignalHandle


def test_stop_sets_flag():
    status = Status()
    assert status.is_stopped() is False
    status.stop()
    assert status.is_stopped() is True


def test_add_and_done_track_pending():
    status = Status()
    status.add(2)
    assert status.pending == 2
    status.done()
    assert status.wait(timeout=0.01) is False
    status.done()
    assert status.wait(timeout=0.01) is True
    assert status.pending == 0


def test_negative_counter_raises():
    status = Status()
    with pytest.raises(ValueError):
        status.done()


def test_wait_released_by_other_thread():
    status = Status()
    status.add(1)

    def worker():
        time.sleep(0.05)
        status.done()

    thread = threading.Thread(target=worker)
    thread.start()
    assert status.wait(timeout=5) is True
    thread.join()


def test_handle_stops_waits_and_exits_zero():
    status = Status()
    status.add(1)
    exits = []
    handler = SysSignalHandle(status, exit_func=exits.append)

    def worker():
        time.sleep(0.05)
        status.done()

    thread = threading.Thread(target=worker)
    thread.start()
    handler.handle(signal.SIGTERM, None)
    thread.join()
    assert status.is_stopped() is True
    assert status.pending == 0
    assert exits == [0]


def test_handle_exits_via_system_exit_by_default():
    handler = SysSignalHandle(Status())
    with pytest.raises(SystemExit) as info:
        handler.handle(signal.SIGINT, None)
    assert info.value.code == 0
    assert handler.status.is_stopped() is True


def test_begin_installs_handlers():
    handler = SysSignalHandle(Status(), exit_func=lambda code: None)
    saved = {s: signal.getsignal(s) for s in (signal.SIGINT, signal.SIGTERM)}
    try:
        handler.begin()
        assert signal.getsignal(signal.SIGINT) == handler.handle
        assert signal.getsignal(signal.SIGTERM) == handler.handle
    finally:
        for signum, previous in saved.items():
            signal.signal(signum, previous)