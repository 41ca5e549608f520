"""Patch pass output: edited lines written back into their files."""

import logging
import os
import shutil
import tempfile
from typing import BinaryIO, Iterable, List

from gred import gred_fingerprint
from gred.gred_exceptions import (
    PatchApplicationError,
    PatchIOError,
    StaleFingerprintError,
    UnexpectedEOFError,
)
from gred.gred_types import PatchApplicationResult, PatchGroup


class PatchApplier:
    """
    Apply patch groups to their target files.

    Each group is an optimistic compare-and-swap at line granularity: every
    target line must still carry the fingerprint captured at scan time.  The
    new file is written alongside the original and renamed over it only when
    every edit has been verified, so a failed group leaves the target exactly
    as it was.
    """

    def __init__(self) -> None:
        self._logger = logging.getLogger("PatchApplier")

    def apply(self, group: PatchGroup) -> PatchApplicationResult:
        """
        Apply one group to its file.

        Args:
            group: Edited lines for one file, sorted by line number

        Returns:
            PatchApplicationResult for the group

        Raises:
            StaleFingerprintError: If a target line changed since the scan
            UnexpectedEOFError: If the file has fewer lines than the group expects
            PatchIOError: If the file cannot be read, written or replaced
        """
        path = group.path
        directory, filename = os.path.split(path)
        tmp_path: str | None = None

        try:
            with open(path, 'rb') as src:
                with tempfile.NamedTemporaryFile(
                    mode='wb',
                    dir=directory or '.',
                    prefix=f'.{filename}.',
                    suffix='.tmp',
                    delete=False
                ) as tmp_file:
                    tmp_path = tmp_file.name
                    self._pipe(group, src, tmp_file)

            shutil.copymode(path, tmp_path)
            os.replace(tmp_path, path)

        except PatchApplicationError:
            self._discard(tmp_path)
            raise

        except OSError as e:
            self._discard(tmp_path)
            raise PatchIOError(f"{path}: {e.strerror or e}", path, {'errno': e.errno}) from e

        self._logger.debug("Applied %d lines to %s", len(group.lines), path)
        return PatchApplicationResult(
            success=True,
            path=path,
            message=f"Successfully applied {len(group.lines)} line(s) to {path}",
            lines_applied=len(group.lines)
        )

    def apply_all(self, groups: Iterable[PatchGroup]) -> List[PatchApplicationResult]:
        """
        Apply every group, isolating failures to the group that caused them.

        Args:
            groups: Groups to apply, in order

        Returns:
            One result per group
        """
        results: List[PatchApplicationResult] = []
        for group in groups:
            try:
                results.append(self.apply(group))

            except PatchApplicationError as e:
                self._logger.debug("Patch for %s not applied: %s", group.path, e)
                results.append(PatchApplicationResult(
                    success=False,
                    path=group.path,
                    message=str(e),
                    error_details=e.error_details
                ))

        return results

    def _pipe(self, group: PatchGroup, src: BinaryIO, dst: BinaryIO) -> None:
        """
        Copy src to dst, substituting verified edited lines.

        Args:
            group: Edited lines, sorted by line number
            src: Original file
            dst: Replacement file
        """
        line_number = 1
        for edited in group.lines:
            while line_number < edited.line_number:
                line = src.readline()
                if not line:
                    raise UnexpectedEOFError(group.path, edited.line_number, {'lines_in_file': line_number - 1})

                dst.write(line)
                line_number += 1

            line = src.readline()
            if not line:
                raise UnexpectedEOFError(group.path, edited.line_number, {'lines_in_file': line_number - 1})

            # Keep whatever terminator the original line had, including none
            terminator = b'\n' if line.endswith(b'\n') else b''
            content = line[:len(line) - len(terminator)]
            if not gred_fingerprint.matches(content, edited.claimed_fingerprint):
                raise StaleFingerprintError(
                    group.path,
                    edited.line_number,
                    {
                        'expected': gred_fingerprint.encode_checksum(edited.claimed_fingerprint),
                        'actual': gred_fingerprint.encode(content)
                    }
                )

            dst.write(edited.new_content)
            dst.write(terminator)
            line_number += 1

        shutil.copyfileobj(src, dst)

    def _discard(self, tmp_path: str | None) -> None:
        if tmp_path is None:
            return

        try:
            os.remove(tmp_path)

        except FileNotFoundError:
            pass
