"""
Search files, edit the matched lines, and patch the edits back.

Each matched line is emitted with a fingerprint of its content.  When edited
output is fed back, a line is only written into its file if the live line
still carries the fingerprint captured at scan time.
"""

from gred.gred_exceptions import (
    ConfigError,
    DuplicatePatchLineError,
    DuplicatePathGroupError,
    GredError,
    MalformedFingerprintError,
    MalformedPatchLineError,
    PatchApplicationError,
    PatchIOError,
    PatchParseError,
    PatternError,
    ScanError,
    StaleFingerprintError,
    UnexpectedEOFError,
)
from gred.gred_formatter import MatchFormatter, line_expand
from gred.gred_matcher import MatchCursor, PatternMatcher, compile_patterns
from gred.gred_patch_applier import PatchApplier
from gred.gred_patch_parser import PatchParser
from gred.gred_scanner import GredScanner
from gred.gred_settings import GredSettings
from gred.gred_types import (
    EditedLine,
    LineRecord,
    PatchApplicationResult,
    PatchGroup,
    PatchParseResult,
    PatchParseStatus,
    ScanSummary,
)

__version__ = "1.0.0"

__all__ = [
    # Exceptions
    'GredError',
    'ConfigError',
    'PatternError',
    'ScanError',
    'MalformedFingerprintError',
    'PatchParseError',
    'MalformedPatchLineError',
    'DuplicatePathGroupError',
    'DuplicatePatchLineError',
    'PatchApplicationError',
    'StaleFingerprintError',
    'UnexpectedEOFError',
    'PatchIOError',
    # Types
    'LineRecord',
    'EditedLine',
    'PatchGroup',
    'PatchParseStatus',
    'PatchParseResult',
    'PatchApplicationResult',
    'ScanSummary',
    # Core classes
    'compile_patterns',
    'line_expand',
    'MatchCursor',
    'PatternMatcher',
    'MatchFormatter',
    'GredScanner',
    'PatchParser',
    'PatchApplier',
    'GredSettings',
]
