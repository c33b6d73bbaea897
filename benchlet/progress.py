"""Progress notifications emitted while a run is in progress.

Listeners receive, in order: ``run_started`` once, ``element_started`` (and
``element_failed`` on failure) per element run, then ``run_finished``. A
listener that raises is logged and otherwise ignored; it never stops a run.
"""

import threading
from abc import ABC, abstractmethod

from benchlet.utils.logger import Logger


class ProgressListener(ABC):
    """Abstract base class for progress observers."""

    @abstractmethod
    def run_started(self, total_runs: int, element_totals: dict[str, int]) -> None:
        """
        Called once before the first element runs.

        Args:
            total_runs: Number of element runs scheduled in total
            element_totals: Scheduled runs per benchmark method name
        """
        pass

    @abstractmethod
    def element_started(self, element_name: str) -> None:
        """Called before each run of a benchmark method."""
        pass

    @abstractmethod
    def element_failed(self, element_name: str) -> None:
        """Called when a run of a benchmark method failed."""
        pass

    @abstractmethod
    def run_finished(self) -> None:
        """Called once after the last element ran."""
        pass


class LoggingProgressListener(ProgressListener):
    """Reports progress through the benchlet logger."""

    def __init__(self) -> None:
        Logger.ensure_configured()
        self._log = Logger.get("progress")
        self._total = 0
        self._started = 0
        self._failed = 0
        self._lock = threading.Lock()

    def run_started(self, total_runs: int, element_totals: dict[str, int]) -> None:
        self._total = total_runs
        self._log.info(
            f"Starting {total_runs} runs of {len(element_totals)} benchmark methods"
        )

    def element_started(self, element_name: str) -> None:
        with self._lock:
            self._started += 1
            position = self._started
        self._log.debug(f"[{position}/{self._total}] {element_name}")

    def element_failed(self, element_name: str) -> None:
        with self._lock:
            self._failed += 1
        self._log.warning(f"{element_name} failed")

    def run_finished(self) -> None:
        self._log.info(f"Finished: {self._started} runs, {self._failed} failed")
