# render_deploy/timer.py
import threading


class PollTimer:
    """Fixed-interval wait that another thread can interrupt."""

    def __init__(self):
        self._cancelled = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def wait(self, seconds: float) -> bool:
        """Block for ``seconds``. Returns False if the timer was cancelled."""
        return not self._cancelled.wait(timeout=seconds)

    def cancel(self):
        self._cancelled.set()
