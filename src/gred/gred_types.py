"""Shared dataclasses for gred operations."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, List


@dataclass(frozen=True)
class LineRecord:
    """A single matched source line, as emitted by a scan."""

    path: str
    line_number: int  # 1-indexed
    fingerprint: str  # Encoded checksum of content at scan time
    content: bytes  # Line content without its newline


@dataclass(frozen=True)
class EditedLine:
    """A changed line read back from edited scan output."""

    path: str
    line_number: int  # 1-indexed line in the target file
    claimed_fingerprint: int  # Checksum captured at scan time
    new_content: bytes


@dataclass
class PatchGroup:
    """All edited lines destined for one target file."""

    path: str
    lines: List[EditedLine] = field(default_factory=list)


class PatchParseStatus(Enum):
    """Outcome of reading a patch stream that did not fail."""

    NO_INPUT = auto()  # The stream was empty
    NO_CHANGES = auto()  # Every line was left unchanged
    CHANGES = auto()  # At least one line was edited


@dataclass
class PatchParseResult:
    """Result of parsing a patch stream."""

    status: PatchParseStatus
    groups: List[PatchGroup] = field(default_factory=list)
    lines_read: int = 0

    @property
    def has_changes(self) -> bool:
        """True if there is anything to apply."""
        return self.status is PatchParseStatus.CHANGES


@dataclass
class PatchApplicationResult:
    """Result of applying one patch group."""

    success: bool
    path: str
    message: str
    lines_applied: int = 0
    error_details: dict[str, Any] | None = None


@dataclass
class ScanSummary:
    """Totals for a scan pass."""

    files_scanned: int = 0
    files_matched: int = 0
    lines_emitted: int = 0
