"""
Exception hierarchy for bwtpress.

Format and metadata errors subclass ValueError so callers that only
guard against bad input keep working.
"""

from typing import Optional

__all__ = [
    'BWTPressError',
    'FormatError',
    'TooShortError',
    'InvalidMagicError',
    'TruncatedError',
    'MetadataError',
    'InvalidMetadataError',
    'MissingPrimaryIndexError',
    'InvalidPrimaryIndexError',
    'MetadataParseError',
    'SerializationError',
    'StoreError',
    'ItemNotFoundError',
]


class BWTPressError(Exception):
    """Base class for all bwtpress errors."""


class FormatError(BWTPressError, ValueError):
    """Container blob is not a well-formed BWTJS1 file."""


class TooShortError(FormatError):
    """Blob is shorter than the magic header."""

    def __init__(self, length: int, required: int):
        super().__init__(
            f"File too short to be a valid compressed file: {length} bytes, need at least {required}"
        )
        self.length = length
        self.required = required


class InvalidMagicError(FormatError):
    """Magic header does not match."""

    def __init__(self, found: bytes, expected: bytes):
        super().__init__(f"Invalid file format: magic header mismatch (expected {expected!r}, got {found!r})")
        self.found = found
        self.expected = expected


class TruncatedError(FormatError):
    """Declared length runs past the end of the blob."""

    def __init__(self, section: str, needed: int, available: int):
        what = "missing metadata length" if section == "header" else "missing metadata"
        super().__init__(f"File truncated: {what} (need {needed} bytes, {available} available)")
        self.section = section
        self.needed = needed
        self.available = available


class MetadataError(BWTPressError, ValueError):
    """Metadata cannot drive decompression."""


class InvalidMetadataError(MetadataError):
    """Metadata is absent or has no usable stage list."""


class MissingPrimaryIndexError(MetadataError):
    """Stage list names bwt but metadata carries no numeric primary index."""


class InvalidPrimaryIndexError(MetadataError):
    """Primary index lies outside the transformed block."""

    def __init__(self, index: int, length: int):
        super().__init__(f"Primary index {index} out of range for {length} bytes")
        self.index = index
        self.length = length


class MetadataParseError(MetadataError):
    """Metadata block is not valid UTF-8 JSON."""

    def __init__(self, reason: str, cause: Optional[Exception] = None):
        super().__init__(f"Metadata parse failed: {reason}")
        self.cause = cause


class SerializationError(BWTPressError, ValueError):
    """Metadata cannot be encoded as JSON."""


class StoreError(BWTPressError):
    """Archive store failure."""


class ItemNotFoundError(StoreError, KeyError):
    """No saved item under the requested key."""

    def __str__(self):
        return f"Item not found: {self.args[0]}"
