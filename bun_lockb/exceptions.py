"""Custom exceptions for bun-lockb."""

from typing import Optional


class LockbError(Exception):
    """Base exception for all bun-lockb operations."""


class ConfigurationError(LockbError):
    """Raised when configuration validation fails."""


class FileProcessingError(LockbError):
    """Raised when file operations fail."""


class LockfileFormatError(LockbError):
    """Raised when the binary lockfile does not match the expected layout."""


class TruncatedInputError(LockfileFormatError):
    """Raised when a read would run past the end of the available data."""

    position: int
    expected_length: int
    actual_length: int
    meaning: Optional[str]

    def __init__(self, position: int, expected_length: int, actual_length: int, meaning: Optional[str] = None):
        self.position = position
        self.expected_length = expected_length
        self.actual_length = actual_length
        self.meaning = meaning

        super().__init__(
            f"At position {position}, expected {expected_length} "
            f"bytes{f' for {meaning}' if meaning is not None else ''}"
            f", but only {actual_length} were found"
        )


class EnvelopeMismatchError(LockfileFormatError):
    """Raised when the magic banner, format version, alignment or field count is wrong."""


class RangeViolationError(LockfileFormatError):
    """Raised when offsets or lengths inside the lockfile are inconsistent."""


class OversizedTableError(LockfileFormatError):
    """Raised when the package table claims an impossible number of rows."""


class UndersizedRecordError(LockfileFormatError):
    """Raised when a fixed-size record is shorter than its decoder requires."""
