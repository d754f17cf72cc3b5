from __future__ import annotations

import logging
from typing import BinaryIO, Callable, List, Optional, Sequence

from ..domain.models import Category, FileWarning, GroupSummary, ProcessingError
from .line_reader import iter_file_lines

logger = logging.getLogger(__name__)

HEADER_MISMATCH = "Header mismatch"

FileProcessedCallback = Callable[[Category, str], None]


class OutputWriteError(Exception):
    """Raised internally when the output file cannot be created or written."""


class GroupCombiner:
    """
    Merges one category's ordered files into a single output file.

    The output is opened lazily, right before the first line is written, so a
    group where nothing is ever written leaves no file behind. Data lines seen
    before the canonical header is known are held back and flushed right after
    it (or at the end if no file has a header).
    """

    def __init__(self, category: Category, files: Sequence[str], output_path: str) -> None:
        self.category = category
        self.files = list(files)
        self.output_path = output_path
        self.summary = GroupSummary(category=category, input_files=len(self.files))
        self._writer: Optional[BinaryIO] = None
        self._pending: List[bytes] = []

    def run(self, on_file_processed: Optional[FileProcessedCallback] = None) -> GroupSummary:
        if not self.files:
            return self.summary
        try:
            for path in self.files:
                self._combine_file(path)
                if on_file_processed is not None:
                    on_file_processed(self.category, path)
            if self.summary.header is None:
                self._flush_pending()
        except OutputWriteError as exc:
            self._record_output_error(str(exc))
        finally:
            self._close_writer()
        logger.info(
            "%s group: %d file(s), %d data line(s), %d warning(s), %d error(s)",
            self.category.label,
            self.summary.input_files,
            self.summary.data_lines,
            len(self.summary.warnings),
            len(self.summary.errors),
        )
        return self.summary

    # --- Input ---

    def _combine_file(self, path: str) -> None:
        """Append one input file. Read failures are recorded; write failures propagate."""
        try:
            with open(path, "rb") as stream:
                for line in iter_file_lines(stream):
                    if line.is_header:
                        self._accept_header(path, line.text)
                    else:
                        self._accept_data(line.text)
        except OSError as exc:
            logger.warning("Failed to read %s: %s", path, exc)
            self.summary.errors.append(ProcessingError(file=path, message=f"Failed to read file: {exc}"))

    def _accept_header(self, path: str, header: bytes) -> None:
        canonical = self.summary.header
        if canonical is None:
            self._write_line(header)
            self.summary.header = header
            self._flush_pending()
            return
        if header != canonical:
            logger.warning("Header mismatch in %s", path)
            self.summary.warnings.append(FileWarning(file=path, message=HEADER_MISMATCH))

    def _accept_data(self, line: bytes) -> None:
        if self.summary.header is None:
            self._pending.append(line)
            return
        self._write_data(line)

    def _flush_pending(self) -> None:
        pending, self._pending = self._pending, []
        for line in pending:
            self._write_data(line)

    # --- Output ---

    def _open_writer(self) -> BinaryIO:
        if self._writer is None:
            try:
                self._writer = open(self.output_path, "wb")
            except OSError as exc:
                raise OutputWriteError(f"Failed to create output: {exc}") from exc
        return self._writer

    def _write_line(self, line: bytes) -> None:
        writer = self._open_writer()
        try:
            writer.write(line)
            writer.write(b"\n")
        except OSError as exc:
            raise OutputWriteError(f"Failed to write output: {exc}") from exc
        if self.summary.output_path is None:
            self.summary.output_path = self.output_path

    def _write_data(self, line: bytes) -> None:
        self._write_line(line)
        self.summary.data_lines += 1

    def _close_writer(self) -> None:
        writer, self._writer = self._writer, None
        if writer is None:
            return
        try:
            writer.close()
        except OSError as exc:
            self._record_output_error(f"Failed to write output: {exc}")

    def _record_output_error(self, message: str) -> None:
        logger.error("%s (%s)", message, self.output_path)
        self.summary.errors.append(ProcessingError(file=self.output_path, message=message))


def combine_group(
    category: Category,
    files: Sequence[str],
    output_path: str,
    on_file_processed: Optional[FileProcessedCallback] = None,
) -> GroupSummary:
    return GroupCombiner(category, files, output_path).run(on_file_processed)
