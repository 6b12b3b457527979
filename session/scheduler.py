"""
Schedulers for the computer's delayed move.

A scheduler runs a callback after a delay and hands back a handle that can
cancel it. ThreadingScheduler uses a background timer thread, ManualScheduler
leaves it to the host loop (or a test) to run due callbacks.
"""

import logging
import threading
from typing import Callable, List

logger = logging.getLogger(__name__)


class ScheduledCall:
    """A pending callback."""

    def __init__(self, callback: Callable[[], None], delay: float):
        self.callback = callback
        self.delay = delay
        self.cancelled = False

    def cancel(self):
        """Stop the callback from running."""
        self.cancelled = True


class TimerCall(ScheduledCall):
    """A callback waiting on a threading.Timer."""

    def __init__(self, callback: Callable[[], None], delay: float):
        super().__init__(callback, delay)
        self.timer = threading.Timer(delay, self._fire)
        self.timer.daemon = True

    def _fire(self):
        if not self.cancelled:
            self.callback()

    def cancel(self):
        super().cancel()
        self.timer.cancel()


class ThreadingScheduler:
    """Runs callbacks on a daemon timer thread."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = TimerCall(callback, delay)
        call.timer.start()
        return call


class ManualScheduler:
    """
    Queues callbacks until run_pending() is called.

    The delay is recorded but not waited for. Useful for hosts that own
    their own event loop, and for deterministic tests.
    """

    def __init__(self):
        self.queue: List[ScheduledCall] = []

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(callback, delay)
        self.queue = self.pending
        self.queue.append(call)
        return call

    @property
    def pending(self) -> List[ScheduledCall]:
        """Calls that are still waiting to run. Cancelled calls are dropped."""
        self.queue = [call for call in self.queue if not call.cancelled]
        return list(self.queue)

    def run_pending(self) -> int:
        """
        Run queued callbacks in order, including any they schedule.

        Returns:
            Number of callbacks run.
        """
        ran = 0
        while self.queue:
            call = self.queue.pop(0)
            if call.cancelled:
                logger.debug("Skipping cancelled call")
                continue
            call.callback()
            ran += 1
        return ran
