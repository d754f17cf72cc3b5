from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union

from .. import config


# --- Categories ---

class Category(Enum):
    """Closed set of position file kinds, in classification priority order."""
    BEAD = "Bead"
    MOTOR = "Motor"

    @property
    def label(self) -> str:
        return self.value

    @property
    def prefix(self) -> str:
        return f"{self.value} Positions"

    @property
    def output_filename(self) -> str:
        return f"{self.value}{config.OUTPUT_SUFFIX}"


# --- Discovery ---

@dataclass
class DiscoveredFiles:
    bead_files: List[str] = field(default_factory=list)
    motor_files: List[str] = field(default_factory=list)

    def files(self, category: Category) -> List[str]:
        if category is Category.BEAD:
            return self.bead_files
        return self.motor_files

    def count(self, category: Category) -> int:
        return len(self.files(category))

    @property
    def total(self) -> int:
        return len(self.bead_files) + len(self.motor_files)


# --- Report Models ---

@dataclass(frozen=True)
class FileWarning:
    """Non-fatal per-file condition (e.g. header mismatch)."""
    file: str
    message: str


@dataclass(frozen=True)
class ProcessingError:
    """I/O failure record. `file` is None for folder-level errors."""
    file: Optional[str]
    message: str


@dataclass
class GroupSummary:
    category: Category
    input_files: int
    output_path: Optional[str] = None  # set only once a line has been written
    data_lines: int = 0
    header: Optional[bytes] = None
    warnings: List[FileWarning] = field(default_factory=list)
    errors: List[ProcessingError] = field(default_factory=list)


@dataclass
class CombineReport:
    folder: str
    bead_files: int = 0
    motor_files: int = 0
    bead: Optional[GroupSummary] = None
    motor: Optional[GroupSummary] = None
    errors: List[ProcessingError] = field(default_factory=list)

    def file_count(self, category: Category) -> int:
        if category is Category.BEAD:
            return self.bead_files
        return self.motor_files

    def summary(self, category: Category) -> Optional[GroupSummary]:
        if category is Category.BEAD:
            return self.bead
        return self.motor

    @property
    def total_files(self) -> int:
        return self.bead_files + self.motor_files


def collect_warnings(report: CombineReport) -> List[FileWarning]:
    warnings: List[FileWarning] = []
    for category in Category:
        summary = report.summary(category)
        if summary is not None:
            warnings.extend(summary.warnings)
    return warnings


def collect_errors(report: CombineReport) -> List[ProcessingError]:
    """Folder-level errors first, then each group's errors in category order."""
    errors: List[ProcessingError] = list(report.errors)
    for category in Category:
        summary = report.summary(category)
        if summary is not None:
            errors.extend(summary.errors)
    return errors


# --- Progress Events ---

@dataclass(frozen=True)
class DiscoveryProgress:
    """Running classified-file counts while the folder is being scanned."""
    bead_files: int
    motor_files: int


@dataclass(frozen=True)
class CombineProgress:
    processed_files: int
    total_files: int
    category: Category
    current_file: str


ProgressEvent = Union[DiscoveryProgress, CombineProgress]
