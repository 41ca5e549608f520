"""Patch pass input: edited match output parsed into per-file groups."""

import logging
import os
import re
from typing import Iterable, List, Set, Tuple

from gred import gred_fingerprint
from gred.gred_exceptions import (
    DuplicatePatchLineError,
    DuplicatePathGroupError,
    MalformedFingerprintError,
    MalformedPatchLineError,
)
from gred.gred_formatter import FIRST_MARKER_BYTES, NEXT_MARKER_BYTES
from gred.gred_types import EditedLine, PatchGroup, PatchParseResult, PatchParseStatus


PATCH_LINE_RE = re.compile(
    b'^(?:' + re.escape(FIRST_MARKER_BYTES) + b'|' + re.escape(NEXT_MARKER_BYTES) + b')'
    + rb'([^\t]{5})\t([^\t]+):([0-9]+)\t'
)


class PatchParser:
    """Parser for edited match output."""

    def __init__(self) -> None:
        self._logger = logging.getLogger("PatchParser")

    def parse(self, stream: Iterable[bytes]) -> PatchParseResult:
        """
        Parse an edited match output stream into patch groups.

        Lines are consumed in order.  Consecutive lines for the same path form
        one group; lines whose content still matches their fingerprint are
        dropped as unchanged.

        Args:
            stream: Lines of edited output, with or without trailing newlines

        Returns:
            PatchParseResult describing the groups found

        Raises:
            MalformedPatchLineError: If a line does not follow the output format
            DuplicatePathGroupError: If a path's lines are not contiguous
            DuplicatePatchLineError: If a group edits the same line twice
        """
        seen_paths: Set[str] = set()
        groups: List[PatchGroup] = []
        group: PatchGroup | None = None
        group_lines: Set[int] = set()
        input_line = 0

        for raw in stream:
            input_line += 1
            line = raw[:-1] if raw.endswith(b'\n') else raw
            path, edited = self._parse_line(line, input_line)

            if group is None or path != group.path:
                if path in seen_paths:
                    raise DuplicatePathGroupError(
                        "file lines must be grouped by file",
                        input_line,
                        line,
                        {'path': path}
                    )

                self._finish_group(group, groups)
                seen_paths.add(path)
                group = PatchGroup(path)
                group_lines = set()

            if edited is None:
                continue

            if edited.line_number in group_lines:
                raise DuplicatePatchLineError(
                    "line edited more than once",
                    input_line,
                    line,
                    {'path': path, 'line_number': edited.line_number}
                )

            group_lines.add(edited.line_number)
            group.lines.append(edited)

        self._finish_group(group, groups)

        if input_line == 0:
            status = PatchParseStatus.NO_INPUT

        elif not groups:
            status = PatchParseStatus.NO_CHANGES

        else:
            status = PatchParseStatus.CHANGES

        self._logger.debug(
            "Parsed %d input lines: %d groups, %d edited lines",
            input_line, len(groups), sum(len(g.lines) for g in groups)
        )
        return PatchParseResult(status, groups, input_line)

    def _parse_line(self, line: bytes, input_line: int) -> Tuple[str, EditedLine | None]:
        """
        Parse one line of edited output.

        Args:
            line: Line without its trailing newline
            input_line: 1-indexed position of the line in the input stream

        Returns:
            Tuple of the target path and the edited line, or None for the
            edited line if the content is unchanged
        """
        match = PATCH_LINE_RE.match(line)
        if match is None:
            raise MalformedPatchLineError(
                "fingerprint path:line<TAB> should prefix each content line",
                input_line,
                line
            )

        prefix = match.group(0)
        try:
            claimed = gred_fingerprint.decode(match.group(1))

        except MalformedFingerprintError as e:
            raise MalformedPatchLineError(str(e), input_line, prefix, e.error_details) from e

        line_number = int(match.group(3))
        if line_number < 1:
            raise MalformedPatchLineError("line numbers start at 1", input_line, prefix)

        path = os.fsdecode(match.group(2))
        content = line[len(prefix):]

        # Lines without changes are ignored
        if gred_fingerprint.matches(content, claimed):
            return path, None

        return path, EditedLine(path, line_number, claimed, content)

    def _finish_group(self, group: PatchGroup | None, groups: List[PatchGroup]) -> None:
        """Sort a completed group and keep it if any lines were edited."""
        if group is None or not group.lines:
            return

        group.lines.sort(key=lambda edited: edited.line_number)
        groups.append(group)
