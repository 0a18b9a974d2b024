"""
Text and file helpers on top of the pipeline and the container.

These are whole-buffer operations: the caller supplies complete input
and receives complete output.
"""

import mimetypes
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from bwtpress.context.serialization.container import parse, serialize
from bwtpress.models import META_ENCODING, META_FILENAME, META_MIME_TYPE
from bwtpress.services.pipeline import OptionsLike, compress, decompress

PathLike = Union[str, Path]


def read_file_bytes(path: PathLike) -> bytes:
    with open(path, 'rb') as f:
        return f.read()


def text_to_bytes(text: str) -> bytes:
    return text.encode('utf-8')


def bytes_to_text(data: bytes) -> str:
    return bytes(data).decode('utf-8')


def guess_mime_type(filename: str) -> str:
    mime_type, _ = mimetypes.guess_type(filename)
    return mime_type or 'application/octet-stream'


def compress_text(text: str, filename: str = 'text.txt') -> bytes:
    """
    Compress text into a container blob

    Args:
        text: Text to compress (encoded as UTF-8)
        filename: Name recorded in the metadata

    Returns:
        Container bytes
    """
    result = compress(text_to_bytes(text))
    meta = dict(result.metadata)
    meta.update({
        META_FILENAME: filename,
        META_MIME_TYPE: 'text/plain',
        META_ENCODING: 'utf-8',
    })
    return serialize(meta, result.payload)


def decompress_text(blob: bytes) -> Tuple[str, Dict[str, Any]]:
    """Parse and decompress a container produced by compress_text"""
    container = parse(blob)
    data = decompress(container.payload, container.metadata)
    return bytes_to_text(data), container.metadata


def compress_file(path: PathLike, options: OptionsLike = None) -> Tuple[bytes, Dict[str, Any]]:
    """
    Compress a file into a container blob

    Args:
        path: File to compress
        options: CompressionOptions or {'stages': [...]}

    Returns:
        (container bytes, caller metadata handed to serialize)

    Raises:
        SerializationError: If the metadata cannot be encoded
    """
    path = Path(path)
    result = compress(read_file_bytes(path), options)
    meta = dict(result.metadata)
    meta.update({
        META_FILENAME: path.name,
        META_MIME_TYPE: guess_mime_type(path.name),
        META_ENCODING: 'binary',
    })
    return serialize(meta, result.payload), meta


def decompress_blob(blob: bytes) -> Tuple[bytes, Dict[str, Any]]:
    """Parse and decompress any container blob"""
    container = parse(blob)
    return decompress(container.payload, container.metadata), container.metadata
