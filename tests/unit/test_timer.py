import threading
import time

from render_deploy.timer import PollTimer


def test_wait_elapses():
    timer = PollTimer()
    assert timer.wait(0.01) is True
    assert not timer.cancelled


def test_wait_after_cancel_returns_immediately():
    timer = PollTimer()
    timer.cancel()

    start = time.monotonic()
    assert timer.wait(5) is False
    assert time.monotonic() - start < 1
    assert timer.cancelled


def test_cancel_from_another_thread():
    timer = PollTimer()
    threading.Timer(0.05, timer.cancel).start()

    start = time.monotonic()
    assert timer.wait(10) is False
    assert time.monotonic() - start < 5
