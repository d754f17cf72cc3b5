from __future__ import annotations

import logging
import os
from typing import Callable, Optional

from ..domain.models import (
    Category,
    CombineProgress,
    CombineReport,
    ProcessingError,
    ProgressEvent,
)
from .group_combiner import combine_group
from .repositories.position_file_repository import discover_files

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ProgressEvent], None]


def output_path_for(folder: str, category: Category) -> str:
    return os.path.join(folder, category.output_filename)


def combine_folder(folder: str) -> CombineReport:
    return combine_folder_with_progress(folder, None)


def combine_folder_with_progress(folder: str, on_progress: Optional[ProgressCallback]) -> CombineReport:
    """
    Discover and combine every position file group in `folder`.

    Never raises for scan, read or write failures; they are collected on the
    returned report. Progress events are: zero or more DiscoveryProgress while
    scanning, then one CombineProgress per input file once it is finished.
    """
    emit: ProgressCallback = on_progress if on_progress is not None else (lambda _event: None)
    report = CombineReport(folder=folder)

    try:
        discovered = discover_files(folder, on_progress=emit)
    except OSError as exc:
        logger.error("Failed to scan folder %s: %s", folder, exc)
        report.errors.append(ProcessingError(file=None, message=f"Failed to scan folder: {exc}"))
        return report

    report.bead_files = discovered.count(Category.BEAD)
    report.motor_files = discovered.count(Category.MOTOR)
    total_files = discovered.total
    processed_files = 0

    def _on_file_processed(category: Category, path: str) -> None:
        nonlocal processed_files
        processed_files += 1
        emit(CombineProgress(
            processed_files=processed_files,
            total_files=total_files,
            category=category,
            current_file=path,
        ))

    for category in Category:
        files = discovered.files(category)
        if not files:
            continue
        summary = combine_group(category, files, output_path_for(folder, category), _on_file_processed)
        if category is Category.BEAD:
            report.bead = summary
        else:
            report.motor = summary

    return report
