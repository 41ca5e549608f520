"""Conversion of winning matches into annotated output lines."""

import os
from typing import Iterator, Tuple

from gred import gred_fingerprint
from gred.gred_matcher import PatternMatcher
from gred.gred_types import LineRecord


FIRST_MARKER = '╓'  # Marks the first line emitted for a file
NEXT_MARKER = '║'  # Marks every following line of the same file
FIELD_SEPARATOR = '\t'

FIRST_MARKER_BYTES = FIRST_MARKER.encode('utf-8')
NEXT_MARKER_BYTES = NEXT_MARKER.encode('utf-8')
FIELD_SEPARATOR_BYTES = FIELD_SEPARATOR.encode('ascii')


def line_expand(match_start: int, match_end: int, buffer: bytes) -> Tuple[int, int]:
    """
    Expand a match span to the full lines that contain it.

    Args:
        match_start: Absolute start of the match
        match_end: Absolute end of the match
        buffer: Buffer the match was found in

    Returns:
        (line_start, line_end) where line_start follows the nearest newline
        before the match (or is 0) and line_end is the newline terminating the
        match's last line (or the end of the buffer)
    """
    line_start = buffer.rfind(b'\n', 0, match_start) + 1

    # A match that ends with its own newline stays on that line
    last = max(match_start, match_end - 1)
    line_end = buffer.find(b'\n', last)
    if line_end < 0:
        line_end = len(buffer)

    return line_start, line_end


class MatchFormatter:
    """Turn matches into line records and serialize them."""

    def records(self, path: str, buffer: bytes, matcher: PatternMatcher) -> Iterator[LineRecord]:
        """
        Generate a record for every physical line covered by a winning match.

        Args:
            path: Path of the file the buffer was read from
            buffer: File contents
            matcher: Matcher configured with the search patterns

        Yields:
            Line records in strictly increasing line number order
        """
        matcher.reset(buffer)
        line_number = 1
        while matcher.offset() < len(buffer):
            span = matcher.next_match()
            if span is None:
                break

            # An empty match after the final newline is not on any line
            if span[0] == len(buffer) and buffer.endswith(b'\n'):
                break

            line_start, line_end = line_expand(span[0], span[1], buffer)

            # Lines skipped between the previous emission and this match
            line_number += buffer.count(b'\n', matcher.offset(), line_start)

            for content in buffer[line_start:line_end].split(b'\n'):
                yield LineRecord(path, line_number, gred_fingerprint.encode(content), content)
                line_number += 1

            # Step past the terminating newline so every match makes progress
            consumed_to = min(line_end + 1, len(buffer))
            matcher.consume(consumed_to - matcher.offset())

    def format_record(self, record: LineRecord, first: bool) -> bytes:
        """
        Serialize a record as one line of match output.

        Args:
            record: Record to serialize
            first: True if this is the first record emitted for its file

        Returns:
            The output line, including its trailing newline
        """
        marker = FIRST_MARKER_BYTES if first else NEXT_MARKER_BYTES
        return b''.join((
            marker,
            record.fingerprint.encode('ascii'),
            FIELD_SEPARATOR_BYTES,
            os.fsencode(record.path),
            b':',
            str(record.line_number).encode('ascii'),
            FIELD_SEPARATOR_BYTES,
            record.content,
            b'\n'
        ))
