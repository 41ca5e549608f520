"""Multi-pattern matching with incrementally maintained match cursors."""

import logging
import re
from typing import List, Sequence, Tuple

from gred.gred_exceptions import PatternError


def compile_patterns(expressions: Sequence[str]) -> List[re.Pattern[bytes]]:
    """
    Compile search expressions into bytes patterns.

    Patterns are compiled with re.MULTILINE so that ^ and $ anchor at line
    boundaries, as they would for a line oriented grep.

    Args:
        expressions: Regular expressions, in command line order

    Returns:
        Compiled patterns in the same order

    Raises:
        PatternError: If no expressions are given or any one fails to compile
    """
    if not expressions:
        raise PatternError("No search patterns provided")

    patterns: List[re.Pattern[bytes]] = []
    for idx, expression in enumerate(expressions):
        try:
            patterns.append(re.compile(expression.encode('utf-8', errors='surrogateescape'), re.MULTILINE))

        except re.error as e:
            raise PatternError(
                f"Invalid pattern {expression!r}: {e}",
                {'pattern': expression, 'index': idx, 'position': e.pos}
            ) from e

    return patterns


class MatchCursor:
    """
    The next known match of one pattern within the remaining buffer.

    The span is held relative to the start of the remaining buffer.  Once
    found it is only ever shifted left (seek) or recomputed (search).
    """

    def __init__(self, pattern: re.Pattern[bytes]):
        self.pattern = pattern
        self.start = -1
        self.end = -1
        self.exhausted = True

    def search(self, buffer: bytes, offset: int) -> None:
        """
        Find this pattern's first match in buffer[offset:].

        Args:
            buffer: The whole buffer being scanned
            offset: Start of the remaining buffer
        """
        match = self.pattern.search(buffer, offset)
        if match is None:
            self.exhausted = True
            self.start = self.end = -1
            return

        self.exhausted = False
        self.start = match.start() - offset
        self.end = match.end() - offset

    def seek(self, consumed: int) -> bool:
        """
        Shift the span left after bytes were consumed from the buffer.

        Args:
            consumed: Number of bytes removed from the front of the remaining buffer

        Returns:
            False if the known match was inside the consumed bytes and the
            cursor must be searched again
        """
        if self.exhausted:
            return True

        start = self.start - consumed
        end = self.end - consumed
        if start < 0 or end < 0:
            return False

        self.start = start
        self.end = end
        return True

    def span(self) -> Tuple[int, int]:
        """Get the span relative to the remaining buffer."""
        return self.start, self.end


class PatternMatcher:
    """
    Find successive winning matches across a set of patterns.

    The winner among primed cursors is chosen by a fixed rule: the smallest
    start offset, then on equal starts the larger end offset (the longer
    match), then the pattern given first.  Exhausted cursors never win.
    """

    def __init__(self, patterns: Sequence[re.Pattern[bytes]]):
        """
        Initialize the matcher.

        Args:
            patterns: Compiled patterns, in priority order for exact ties
        """
        self._cursors = [MatchCursor(pattern) for pattern in patterns]
        self._buffer = b''
        self._offset = 0
        self._winner = -1
        self._searches = 0
        self._logger = logging.getLogger("PatternMatcher")

    def reset(self, buffer: bytes) -> None:
        """
        Start matching a new buffer, priming every cursor.

        Args:
            buffer: Buffer to scan
        """
        self._buffer = buffer
        self._offset = 0
        self._winner = -1
        self._searches = 0
        for cursor in self._cursors:
            self._search(cursor)

        self._logger.debug("Primed %d patterns over %d bytes", len(self._cursors), len(buffer))

    def offset(self) -> int:
        """Get the absolute offset of the remaining buffer."""
        return self._offset

    def searches(self) -> int:
        """Get the number of regex searches run against the current buffer."""
        return self._searches

    def next_match(self) -> Tuple[int, int] | None:
        """
        Select the winning match in the remaining buffer.

        Returns:
            Absolute (start, end) span of the winner, or None when every
            cursor is exhausted
        """
        self._winner = -1
        best_start = 0
        best_end = 0
        for idx, cursor in enumerate(self._cursors):
            if cursor.exhausted:
                continue

            if (
                self._winner < 0 or
                cursor.start < best_start or
                (cursor.start == best_start and cursor.end > best_end)
            ):
                self._winner = idx
                best_start = cursor.start
                best_end = cursor.end

        if self._winner < 0:
            return None

        return self._offset + best_start, self._offset + best_end

    def consume(self, count: int) -> None:
        """
        Advance the remaining buffer and resynchronize every cursor.

        The winning cursor is always searched again.  Any other cursor keeps
        its known match unless that match fell inside the consumed bytes.

        Args:
            count: Number of bytes to remove from the front of the remaining buffer
        """
        if count < 0 or self._offset + count > len(self._buffer):
            raise ValueError(f"Cannot consume {count} bytes at offset {self._offset}")

        self._offset += count
        for idx, cursor in enumerate(self._cursors):
            if idx == self._winner or not cursor.seek(count):
                self._search(cursor)

        self._winner = -1

    def _search(self, cursor: MatchCursor) -> None:
        self._searches += 1
        cursor.search(self._buffer, self._offset)
