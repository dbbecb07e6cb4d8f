"""
Periodic refresh tasks bound to the screen that started them.

Streamlit re-runs the script on every tick of a ``run_every`` fragment; a
``PollingTask`` decides whether its callback is due and stays silent once
cancelled. ``ScreenLifecycle`` owns the tasks of the mounted screen and
cancels them when another screen is mounted.
"""
import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PollingTask:
    """A cancellable callback run at most once per ``interval`` seconds."""

    def __init__(
        self,
        name: str,
        interval: float,
        callback: Callable[[], object],
        clock: Callable[[], float] = time.monotonic,
        tolerance: Optional[float] = None,
    ):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.name = name
        self.interval = interval
        self.callback = callback
        self.clock = clock
        # Timer-driven reruns land a few milliseconds early or late
        self.tolerance = min(1.0, interval * 0.1) if tolerance is None else tolerance
        self.last_run: Optional[float] = None
        self.cancelled = False
        self.runs = 0

    @property
    def active(self) -> bool:
        return not self.cancelled

    def due(self) -> bool:
        if not self.active:
            return False
        return self.last_run is None or self.clock() - self.last_run >= self.interval - self.tolerance

    def poll(self) -> bool:
        """Run the callback if due. Returns True when it ran."""
        if not self.due():
            return False
        self.last_run = self.clock()
        self.runs += 1
        self.callback()
        return True

    def run_now(self) -> None:
        """Run immediately (manual refresh) and restart the interval."""
        if not self.active:
            return
        self.last_run = self.clock()
        self.runs += 1
        self.callback()

    def cancel(self) -> None:
        if not self.cancelled:
            logger.debug(f"Polling task '{self.name}' cancelled after {self.runs} runs")
        self.cancelled = True


class ScreenLifecycle:
    """Tracks the mounted screen and the polling tasks it owns."""

    def __init__(self):
        self.mounted: Optional[str] = None
        self._tasks: dict[str, dict[str, PollingTask]] = {}

    def mount(self, screen: str) -> bool:
        """Mount ``screen``; unmounts the previous one. True if it changed."""
        if screen == self.mounted:
            return False
        if self.mounted is not None:
            self.unmount(self.mounted)
        self.mounted = screen
        return True

    def unmount(self, screen: str) -> None:
        for task in self._tasks.pop(screen, {}).values():
            task.cancel()
        if self.mounted == screen:
            self.mounted = None

    def task(
        self,
        screen: str,
        name: str,
        interval: float,
        callback: Callable[[], object],
        clock: Callable[[], float] = time.monotonic,
    ) -> PollingTask:
        """Return the live task ``name`` of ``screen``, creating it if needed.

        The callback is replaced on every call so the task always refreshes
        through the current script run's objects. A screen that is not
        mounted gets an already-cancelled task.
        """
        if screen != self.mounted:
            task = PollingTask(name, interval, callback, clock=clock)
            task.cancel()
            return task
        tasks = self._tasks.setdefault(screen, {})
        task = tasks.get(name)
        if task is None or not task.active:
            task = PollingTask(name, interval, callback, clock=clock)
            tasks[name] = task
        else:
            task.callback = callback
        return task

    def tasks(self, screen: str) -> list[PollingTask]:
        return list(self._tasks.get(screen, {}).values())
