from __future__ import annotations

import logging
import os
from typing import Callable, Dict, List, Optional

from ... import config
from ...domain.models import Category, DiscoveredFiles, DiscoveryProgress

logger = logging.getLogger(__name__)


_RESERVED_OUTPUT_NAMES = frozenset(category.output_filename for category in Category)


def classify_name(name: str) -> Optional[Category]:
    """Return the first category whose prefix `name` starts with, else None."""
    for category in Category:
        if name.startswith(category.prefix):
            return category
    return None


def is_combined_output(name: str) -> bool:
    return name in _RESERVED_OUTPUT_NAMES


def _has_input_extension(name: str) -> bool:
    _, ext = os.path.splitext(name)
    return ext == f".{config.INPUT_EXTENSION}"


def _is_regular_file(entry: os.DirEntry) -> bool:
    try:
        return entry.is_file()
    except OSError:
        return False


def discover_files(
    folder: str,
    on_progress: Optional[Callable[[DiscoveryProgress], None]] = None,
) -> DiscoveredFiles:
    """
    List eligible position files directly inside `folder`.

    Rules:
      - Non-recursive; only regular files with extension exactly `.txt`.
      - Reserved combined-output names are never returned.
      - Names that match no category prefix are dropped silently.
      - Each category list is sorted by file name.

    Raises OSError if the folder cannot be listed.
    """
    found: Dict[Category, List[str]] = {category: [] for category in Category}

    with os.scandir(folder) as entries:
        for entry in entries:
            if not _is_regular_file(entry):
                continue
            name = entry.name
            if not _has_input_extension(name) or is_combined_output(name):
                continue
            category = classify_name(name)
            if category is None:
                continue
            found[category].append(os.path.join(folder, name))
            if on_progress is not None:
                on_progress(DiscoveryProgress(
                    bead_files=len(found[Category.BEAD]),
                    motor_files=len(found[Category.MOTOR]),
                ))

    for paths in found.values():
        paths.sort(key=os.path.basename)

    logger.info(
        "Discovered %d bead and %d motor file(s) in %s",
        len(found[Category.BEAD]),
        len(found[Category.MOTOR]),
        folder,
    )
    return DiscoveredFiles(
        bead_files=found[Category.BEAD],
        motor_files=found[Category.MOTOR],
    )
