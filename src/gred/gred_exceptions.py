"""Custom exceptions for gred operations."""

from typing import Any


class GredError(Exception):
    """Base exception for gred operations."""

    def __init__(self, message: str, error_details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            error_details: Optional dictionary with detailed error information
        """
        super().__init__(message)
        self.error_details = error_details


class ConfigError(GredError):
    """Raised when environment configuration is invalid."""


class PatternError(GredError):
    """Raised when a search pattern cannot be compiled."""


class ScanError(GredError):
    """Raised when a file cannot be read during a scan."""


class MalformedFingerprintError(GredError):
    """Raised when a fingerprint tag cannot be decoded."""


class PatchParseError(GredError):
    """Base class for errors found while reading patch input."""

    def __init__(
        self,
        message: str,
        input_line: int,
        text: bytes,
        error_details: dict[str, Any] | None = None
    ):
        """
        Initialize the exception.

        Args:
            message: Error message
            input_line: 1-indexed line number within the patch input stream
            text: The offending input text
            error_details: Optional dictionary with detailed error information
        """
        super().__init__(message, error_details)
        self.input_line = input_line
        self.text = text

    def __str__(self) -> str:
        text = self.text.decode('utf-8', errors='replace')
        return f"{self.args[0]}: line {self.input_line}: {text}"


class MalformedPatchLineError(PatchParseError):
    """Raised when a patch input line does not follow the match output format."""


class DuplicatePathGroupError(PatchParseError):
    """Raised when lines for one file are not grouped together."""


class DuplicatePatchLineError(PatchParseError):
    """Raised when one file's group edits the same line twice."""


class PatchApplicationError(GredError):
    """Base class for errors applying one file's patch group."""

    def __init__(self, message: str, path: str, error_details: dict[str, Any] | None = None):
        """
        Initialize the exception.

        Args:
            message: Error message
            path: Target file of the failed patch group
            error_details: Optional dictionary with detailed error information
        """
        super().__init__(message, error_details)
        self.path = path


class StaleFingerprintError(PatchApplicationError):
    """Raised when a target line changed since it was scanned."""

    def __init__(self, path: str, line_number: int, error_details: dict[str, Any] | None = None):
        super().__init__(f"{path}:{line_number}: file modified since scan", path, error_details)
        self.line_number = line_number


class UnexpectedEOFError(PatchApplicationError):
    """Raised when the target file ends before every edit was applied."""

    def __init__(self, path: str, line_number: int, error_details: dict[str, Any] | None = None):
        super().__init__(f"{path}:{line_number}: unexpected end of file", path, error_details)
        self.line_number = line_number


class PatchIOError(PatchApplicationError):
    """Raised when the target or temporary file cannot be opened, written or renamed."""
