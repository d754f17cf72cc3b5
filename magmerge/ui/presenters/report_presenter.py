from __future__ import annotations

import os
from typing import List, Optional

from ...domain.models import (
    Category,
    CombineProgress,
    CombineReport,
    DiscoveryProgress,
    FileWarning,
    GroupSummary,
    ProcessingError,
    collect_errors,
    collect_warnings,
)

NOT_CREATED = "(not created)"
NO_MATCHING_FILES = "No matching files found."
COMBINE_COMPLETE = "Combine complete."


def format_group_output(summary: Optional[GroupSummary], label: str) -> str:
    if summary is None:
        return f"{label} output: {NOT_CREATED}"
    output = summary.output_path if summary.output_path is not None else NOT_CREATED
    return f"{label} output: {output} (lines: {summary.data_lines})"


def format_warning(warning: FileWarning) -> str:
    return f"- {warning.file}: {warning.message}"


def format_error(error: ProcessingError) -> str:
    if error.file is None:
        return f"- {error.message}"
    return f"- {error.file}: {error.message}"


def has_matching_files(report: CombineReport) -> bool:
    return report.total_files > 0


def format_count_lines(report: CombineReport) -> List[str]:
    return [f"{category.label} files: {report.file_count(category)}" for category in Category]


def format_report_lines(report: CombineReport) -> List[str]:
    """Plain-text report used by the command line tool."""
    lines = [f"Folder: {report.folder}"]
    lines.extend(format_count_lines(report))

    if not has_matching_files(report):
        lines.append(NO_MATCHING_FILES)
        return lines

    for category in Category:
        lines.append(format_group_output(report.summary(category), category.label))

    warnings = collect_warnings(report)
    if warnings:
        lines.append("Warnings:")
        lines.extend(format_warning(w) for w in warnings)

    errors = collect_errors(report)
    if errors:
        lines.append("Errors:")
        lines.extend(format_error(e) for e in errors)

    return lines


def completion_status(report: CombineReport) -> str:
    return COMBINE_COMPLETE if has_matching_files(report) else NO_MATCHING_FILES


def scanning_status(event: DiscoveryProgress) -> str:
    return f"Scanning files... found bead: {event.bead_files}, motor: {event.motor_files}"


def processing_status(event: CombineProgress) -> str:
    return f"Processing file {event.processed_files}/{event.total_files}"


def current_file_label(event: CombineProgress) -> str:
    name = os.path.basename(event.current_file) or event.current_file
    return f"{event.category.label}: {name}"
