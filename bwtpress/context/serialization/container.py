"""
BWTJS1 container format

Layout (no padding, big-endian):

    offset  size  field
    0       7     magic b"BWTJS1\\x00"
    7       4     metadata length L (unsigned 32-bit)
    11      L     UTF-8 JSON metadata object
    11+L    rest  raw payload

The container treats metadata as an opaque JSON object and the payload
as opaque bytes; it knows nothing about the pipeline stages.
"""

import json
import logging
import struct
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from bwtpress.exceptions import (
    InvalidMagicError,
    MetadataParseError,
    SerializationError,
    TooShortError,
    TruncatedError,
)
from bwtpress.models import (
    META_CREATED_AT,
    META_ENCODING,
    META_FILENAME,
    META_MIME_TYPE,
    META_ORIGINAL_SIZE,
    META_PIPELINE,
    ParsedContainer,
)

logger = logging.getLogger(__name__)

MAGIC_HEADER = b'BWTJS1\x00'
LENGTH_FORMAT = '>I'
LENGTH_SIZE = struct.calcsize(LENGTH_FORMAT)
HEADER_SIZE = len(MAGIC_HEADER) + LENGTH_SIZE
MAX_METADATA_LENGTH = 0xFFFFFFFF

# Checked by validate_serialization
ESSENTIAL_FIELDS = (META_FILENAME, META_MIME_TYPE, META_ORIGINAL_SIZE, META_PIPELINE, META_ENCODING)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def default_metadata() -> Dict[str, Any]:
    """Defaults merged under caller metadata on serialize"""
    return {
        META_FILENAME: 'untitled',
        META_MIME_TYPE: 'application/octet-stream',
        META_ORIGINAL_SIZE: 0,
        META_PIPELINE: ['bwt', 'mtf', 'rle'],
        META_ENCODING: 'binary',
        META_CREATED_AT: _utc_timestamp(),
    }


def serialize(metadata: Optional[Mapping[str, Any]], payload: bytes) -> bytes:
    """
    Build a container blob

    Args:
        metadata: Caller metadata; its fields override the defaults
        payload: Compressed payload

    Returns:
        Complete container bytes

    Raises:
        SerializationError: If the metadata cannot be encoded as JSON
    """
    full_meta = default_metadata()
    if metadata:
        full_meta.update(metadata)

    try:
        metadata_bytes = json.dumps(full_meta, ensure_ascii=False, allow_nan=False).encode('utf-8')
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Serialization failed: {e}") from e

    if len(metadata_bytes) > MAX_METADATA_LENGTH:
        raise SerializationError(f"Serialization failed: metadata is {len(metadata_bytes)} bytes")

    payload = bytes(payload)
    return b''.join([
        MAGIC_HEADER,
        struct.pack(LENGTH_FORMAT, len(metadata_bytes)),
        metadata_bytes,
        payload,
    ])


def parse(blob: bytes) -> ParsedContainer:
    """
    Parse a container blob

    Args:
        blob: Whole container buffer

    Returns:
        ParsedContainer with the metadata dict and the payload bytes

    Raises:
        TooShortError: Fewer than 7 bytes
        InvalidMagicError: Magic header mismatch
        TruncatedError: Length header or metadata body incomplete
        MetadataParseError: Metadata is not a UTF-8 JSON object
    """
    data = bytes(blob)
    offset = 0

    if len(data) < len(MAGIC_HEADER):
        raise TooShortError(len(data), len(MAGIC_HEADER))

    found = data[:len(MAGIC_HEADER)]
    if found != MAGIC_HEADER:
        raise InvalidMagicError(found, MAGIC_HEADER)
    offset += len(MAGIC_HEADER)

    if len(data) < offset + LENGTH_SIZE:
        raise TruncatedError('header', LENGTH_SIZE, len(data) - offset)
    metadata_length = struct.unpack_from(LENGTH_FORMAT, data, offset)[0]
    offset += LENGTH_SIZE

    # No sanity cap: the only question is whether the bytes are there
    available = len(data) - offset
    if available < metadata_length:
        raise TruncatedError('metadata', metadata_length, available)

    metadata_bytes = data[offset:offset + metadata_length]
    offset += metadata_length

    try:
        metadata = json.loads(metadata_bytes.decode('utf-8'))
    except UnicodeDecodeError as e:
        raise MetadataParseError(f"invalid UTF-8 ({e})", e) from e
    except json.JSONDecodeError as e:
        raise MetadataParseError(f"invalid JSON ({e})", e) from e

    if not isinstance(metadata, dict):
        raise MetadataParseError(f"expected a JSON object, got {type(metadata).__name__}")

    payload = data[offset:]
    logger.debug("parse: %d bytes metadata, %d bytes payload", metadata_length, len(payload))
    return ParsedContainer(metadata=metadata, payload=payload)


def write_container(path: Union[str, Path], metadata: Optional[Mapping[str, Any]], payload: bytes) -> int:
    """Serialize to a file, returning the number of bytes written"""
    blob = serialize(metadata, payload)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'wb') as f:
        f.write(blob)
    return len(blob)


def read_container(path: Union[str, Path]) -> ParsedContainer:
    """Read a whole file and parse it as a container"""
    with open(path, 'rb') as f:
        return parse(f.read())


def _normalized(value: Any) -> Any:
    # Tuples come back from JSON as lists
    return json.loads(json.dumps(value, ensure_ascii=False))


def validate_serialization(metadata: Mapping[str, Any], payload: bytes) -> bool:
    """
    Round-trip self-check of serialize/parse

    The payload must come back byte-exact and every essential field
    present in metadata must come back value-equal.
    """
    try:
        parsed = parse(serialize(metadata, payload))
    except (TypeError, ValueError) as e:
        logger.error("Serialization validation failed: %s", e)
        return False

    if parsed.payload != bytes(payload):
        return False

    for field in ESSENTIAL_FIELDS:
        if metadata and field in metadata and parsed.metadata.get(field) != _normalized(metadata[field]):
            return False

    return True
