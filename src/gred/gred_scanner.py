"""Scan pass: match files and write annotated output."""

import logging
from re import Pattern
from typing import BinaryIO, Iterable, Sequence

from gred.gred_exceptions import ScanError
from gred.gred_formatter import MatchFormatter
from gred.gred_matcher import PatternMatcher
from gred.gred_types import ScanSummary


class GredScanner:
    """Scan files one at a time and write match output for each."""

    def __init__(self, patterns: Sequence[Pattern[bytes]], output: BinaryIO):
        """
        Initialize the scanner.

        Args:
            patterns: Compiled search patterns
            output: Binary stream match output is written to
        """
        self._matcher = PatternMatcher(patterns)
        self._formatter = MatchFormatter()
        self._output = output
        self._logger = logging.getLogger("GredScanner")

    def scan_buffer(self, path: str, buffer: bytes) -> int:
        """
        Write match output for one file's contents.

        Args:
            path: Path reported in the output
            buffer: File contents

        Returns:
            Number of output lines written
        """
        count = 0
        for record in self._formatter.records(path, buffer, self._matcher):
            self._output.write(self._formatter.format_record(record, count == 0))
            count += 1

        self._logger.debug(
            "Scanned %s: %d lines emitted, %d searches", path, count, self._matcher.searches()
        )
        return count

    def scan_file(self, path: str) -> int:
        """
        Read a file and write its match output.

        Args:
            path: File to scan

        Returns:
            Number of output lines written

        Raises:
            ScanError: If the file cannot be read
        """
        try:
            with open(path, 'rb') as f:
                buffer = f.read()

        except OSError as e:
            raise ScanError(f"Cannot read {path}: {e.strerror or e}", {'path': path}) from e

        return self.scan_buffer(path, buffer)

    def scan_paths(self, paths: Iterable[str]) -> ScanSummary:
        """
        Scan files in order, each one fully before the next.

        Args:
            paths: Files to scan

        Returns:
            Totals for the scan
        """
        summary = ScanSummary()
        for path in paths:
            count = self.scan_file(path)
            summary.files_scanned += 1
            summary.lines_emitted += count
            if count:
                summary.files_matched += 1

        self._output.flush()
        return summary
