from __future__ import annotations
from typing import Optional

from PySide6 import QtCore, QtWidgets

from .. import config
from ..domain.models import Category, CombineReport, collect_errors, collect_warnings
from .controllers.combine_controller import CombineController
from .presenters import report_presenter


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle(config.WINDOW_TITLE)
        self.resize(config.WINDOW_W_PX, config.WINDOW_H_PX)
        self.setAcceptDrops(True)

        self.controller = CombineController()

        self._setup_ui()
        self._connect_signals()

    def _setup_ui(self) -> None:
        central = QtWidgets.QWidget()
        root = QtWidgets.QVBoxLayout(central)
        root.setContentsMargins(10, 10, 10, 10)
        root.setSpacing(6)

        heading = QtWidgets.QLabel(config.WINDOW_TITLE)
        font = heading.font()
        font.setPointSize(font.pointSize() + 6)
        font.setBold(True)
        heading.setFont(font)
        root.addWidget(heading)

        hint_row = QtWidgets.QHBoxLayout()
        hint_row.addWidget(QtWidgets.QLabel("Drop a folder here to combine Bead and Motor files."), 1)
        self.btn_choose = QtWidgets.QPushButton("Choose Folder...")
        hint_row.addWidget(self.btn_choose, 0)
        root.addLayout(hint_row)

        self.lbl_folder = QtWidgets.QLabel("")
        self.lbl_status = QtWidgets.QLabel("")
        self.lbl_found = QtWidgets.QLabel("")
        for lbl in (self.lbl_folder, self.lbl_status, self.lbl_found):
            lbl.setTextInteractionFlags(QtCore.Qt.TextSelectableByMouse)
            root.addWidget(lbl)
        self.lbl_found.hide()

        self.progress = QtWidgets.QProgressBar()
        self.progress.setFormat("%v/%m")
        self.progress.hide()
        root.addWidget(self.progress)
        self.lbl_current = QtWidgets.QLabel("")
        self.lbl_current.hide()
        root.addWidget(self.lbl_current)

        # Report
        self.report_box = QtWidgets.QGroupBox("Report")
        report_layout = QtWidgets.QVBoxLayout(self.report_box)
        self.lbl_counts = QtWidgets.QLabel("")
        self.lbl_outputs = QtWidgets.QLabel("")
        for lbl in (self.lbl_counts, self.lbl_outputs):
            lbl.setTextInteractionFlags(QtCore.Qt.TextSelectableByMouse)
            report_layout.addWidget(lbl)

        self.lbl_warnings = QtWidgets.QLabel("Warnings:")
        self.warning_list = QtWidgets.QListWidget()
        self.warning_list.setMaximumHeight(config.MESSAGE_LIST_MAX_H_PX)
        self.lbl_errors = QtWidgets.QLabel("Errors:")
        self.error_list = QtWidgets.QListWidget()
        self.error_list.setMaximumHeight(config.MESSAGE_LIST_MAX_H_PX)
        for w in (self.lbl_warnings, self.warning_list, self.lbl_errors, self.error_list):
            report_layout.addWidget(w)
        root.addWidget(self.report_box)
        self.report_box.hide()

        root.addStretch(1)
        self.setCentralWidget(central)

    def _connect_signals(self) -> None:
        self.btn_choose.clicked.connect(self._on_choose_clicked)
        self.controller.run_started.connect(self._on_run_started)
        self.controller.status_changed.connect(self.lbl_status.setText)
        self.controller.discovery_updated.connect(self._on_discovery_updated)
        self.controller.combine_progress.connect(self._on_combine_progress)
        self.controller.report_ready.connect(self._on_report_ready)

    # --- Drag & drop ---

    def dragEnterEvent(self, event) -> None:  # noqa: N802
        if event.mimeData().hasUrls() and not self.controller.is_running():
            event.acceptProposedAction()
        else:
            event.ignore()

    def dropEvent(self, event) -> None:  # noqa: N802
        for url in event.mimeData().urls():
            path = url.toLocalFile()
            if path:
                self.controller.start(path)
                event.acceptProposedAction()
                return
        event.ignore()

    def _on_choose_clicked(self) -> None:
        if self.controller.is_running():
            return
        folder = QtWidgets.QFileDialog.getExistingDirectory(self, "Choose Folder")
        if folder:
            self.controller.start(folder)

    # --- Controller updates ---

    def _on_run_started(self, folder: str) -> None:
        self.lbl_folder.setText(f"Folder: {folder}")
        self.lbl_found.setText("Found so far: Bead 0, Motor 0")
        self.lbl_found.show()
        self.progress.reset()
        self.progress.hide()
        self.lbl_current.clear()
        self.lbl_current.hide()
        self.report_box.hide()
        self.btn_choose.setEnabled(False)

    def _on_discovery_updated(self, bead_files: int, motor_files: int) -> None:
        self.lbl_found.setText(f"Found so far: Bead {bead_files}, Motor {motor_files}")

    def _on_combine_progress(self, processed: int, total: int, current: str) -> None:
        self.lbl_found.hide()
        if total <= 0:
            return
        self.progress.setRange(0, total)
        self.progress.setValue(processed)
        self.progress.show()
        self.lbl_current.setText(f"Processing: {current}")
        self.lbl_current.show()

    def _on_report_ready(self, report: CombineReport) -> None:
        self.lbl_found.hide()
        self.progress.hide()
        self.lbl_current.hide()
        self.btn_choose.setEnabled(True)
        self.set_report(report)

    def set_report(self, report: CombineReport) -> None:
        counts = report_presenter.format_count_lines(report)
        if not report_presenter.has_matching_files(report):
            counts.append(report_presenter.NO_MATCHING_FILES)
        self.lbl_counts.setText("\n".join(counts))
        self.lbl_outputs.setText("\n".join(
            report_presenter.format_group_output(report.summary(category), category.label)
            for category in Category
        ))

        warnings = [report_presenter.format_warning(w) for w in collect_warnings(report)]
        errors = [report_presenter.format_error(e) for e in collect_errors(report)]
        self._fill_list(self.lbl_warnings, self.warning_list, warnings)
        self._fill_list(self.lbl_errors, self.error_list, errors)
        self.report_box.show()

    @staticmethod
    def _fill_list(label: QtWidgets.QLabel, widget: QtWidgets.QListWidget, items: list[str]) -> None:
        widget.clear()
        widget.addItems(items)
        label.setVisible(bool(items))
        widget.setVisible(bool(items))
