from __future__ import annotations

import logging
import queue
import threading
from typing import List, Optional

from ..domain.models import CombineReport, ProcessingError, ProgressEvent
from .combine_service import combine_folder_with_progress

logger = logging.getLogger(__name__)


class CombineJob:
    """
    Runs a folder combine on a background thread.

    The worker only talks to the caller through two one-way queues:
    `progress` receives every ProgressEvent as it happens, and `result`
    receives exactly one CombineReport when the run is over. There is no
    cancellation.
    """

    def __init__(self, folder: str) -> None:
        self.folder = folder
        self.progress: "queue.Queue[ProgressEvent]" = queue.Queue()
        self.result: "queue.Queue[CombineReport]" = queue.Queue(maxsize=1)
        self._thread: Optional[threading.Thread] = None

    def start(self) -> "CombineJob":
        if self._thread is not None:
            raise RuntimeError("Combine job already started")
        self._thread = threading.Thread(target=self._run, name="magmerge-combine", daemon=True)
        self._thread.start()
        return self

    def _run(self) -> None:
        try:
            report = combine_folder_with_progress(self.folder, self.progress.put)
        except Exception as exc:
            # Keep the single-result contract so a polling consumer never hangs
            logger.exception("Combine of %s failed unexpectedly", self.folder)
            report = CombineReport(
                folder=self.folder,
                errors=[ProcessingError(file=None, message=f"Combine failed: {exc}")],
            )
        self.result.put(report)

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def drain_progress(self) -> List[ProgressEvent]:
        """Return every pending progress event without blocking."""
        events: List[ProgressEvent] = []
        while True:
            try:
                events.append(self.progress.get_nowait())
            except queue.Empty:
                return events

    def poll_result(self) -> Optional[CombineReport]:
        try:
            return self.result.get_nowait()
        except queue.Empty:
            return None

    def wait(self, timeout: Optional[float] = None) -> CombineReport:
        """Block until the report is available. Raises queue.Empty on timeout."""
        return self.result.get(timeout=timeout)


def start_combine(folder: str) -> CombineJob:
    return CombineJob(folder).start()
