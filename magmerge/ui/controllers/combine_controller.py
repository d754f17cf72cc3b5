from __future__ import annotations
from PySide6 import QtCore
from typing import Optional
import logging
import os

from ... import config
from ...app_services.combine_job import CombineJob
from ...domain.models import CombineProgress, CombineReport, DiscoveryProgress
from ..presenters import report_presenter

logger = logging.getLogger(__name__)


class CombineController(QtCore.QObject):
    """
    Controller for the combine window.
    Starts a background CombineJob and polls its channels on a UI timer,
    re-emitting progress and the final report as Qt signals.
    """
    # Signals for View
    run_started = QtCore.Signal(str)  # folder
    status_changed = QtCore.Signal(str)
    discovery_updated = QtCore.Signal(int, int)  # bead_files, motor_files
    combine_progress = QtCore.Signal(int, int, str)  # processed, total, current file label
    report_ready = QtCore.Signal(object)  # CombineReport

    def __init__(self) -> None:
        super().__init__()
        self._job: Optional[CombineJob] = None
        self._poll_timer = QtCore.QTimer(self)
        self._poll_timer.setInterval(max(1, int(1000 / max(1, config.UI_TICK_HZ))))
        self._poll_timer.timeout.connect(self._poll)

    def is_running(self) -> bool:
        return self._job is not None

    def start(self, path: str) -> bool:
        """Start combining `path` (or the folder containing it). Ignored while a run is active."""
        if self._job is not None:
            logger.info("Combine already in progress; ignoring %s", path)
            return False
        folder = path if os.path.isdir(path) else (os.path.dirname(path) or path)
        logger.info("Starting combine for %s", folder)
        self._job = CombineJob(folder).start()
        self.run_started.emit(folder)
        self.status_changed.emit(f"Folder received. Scanning: {folder}")
        self._poll_timer.start()
        return True

    def shutdown(self) -> None:
        self._poll_timer.stop()

    def _poll(self) -> None:
        job = self._job
        if job is None:
            self._poll_timer.stop()
            return
        for event in job.drain_progress():
            self._dispatch(event)
        report = job.poll_result()
        if report is None:
            return
        # Progress pushed right before the result must not be lost
        for event in job.drain_progress():
            self._dispatch(event)
        self._finish(report)

    def _dispatch(self, event: object) -> None:
        if isinstance(event, DiscoveryProgress):
            self.discovery_updated.emit(event.bead_files, event.motor_files)
            self.status_changed.emit(report_presenter.scanning_status(event))
        elif isinstance(event, CombineProgress):
            self.combine_progress.emit(
                event.processed_files,
                event.total_files,
                report_presenter.current_file_label(event),
            )
            self.status_changed.emit(report_presenter.processing_status(event))

    def _finish(self, report: CombineReport) -> None:
        self._poll_timer.stop()
        self._job = None
        self.status_changed.emit(report_presenter.completion_status(report))
        self.report_ready.emit(report)
