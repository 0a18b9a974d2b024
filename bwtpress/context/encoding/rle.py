"""
Run-Length Encoding (RLE) with an escape byte

Escape format (default pipeline):
- single byte v != 0xFF:  v
- single 0xFF:            FF FF 00
- run of v, length L>=2:  FF v L-1

Runs longer than 255 are split into consecutive runs of at most 255.
Decoding is lenient: an 0xFF with fewer than two bytes after it is
emitted literally.

Simple format (fallback, unused by the pipeline): every run is written
as a (value, count) byte pair.
"""

import logging
from typing import Iterator, Tuple

logger = logging.getLogger(__name__)

ESCAPE = 0xFF
MAX_RUN = 255


def iter_runs(data: bytes) -> Iterator[Tuple[int, int]]:
    """
    Yield (value, length) run descriptors, length capped at MAX_RUN

    Examples:
        >>> list(iter_runs(b'AAB'))
        [(65, 2), (66, 1)]
    """
    n = len(data)
    i = 0
    while i < n:
        current = data[i]
        run_length = 1
        while i + run_length < n and data[i + run_length] == current and run_length < MAX_RUN:
            run_length += 1
        yield current, run_length
        i += run_length


def rle_encode(data: bytes) -> bytes:
    """
    Run-length encode bytes using the 0xFF escape format

    Args:
        data: Input bytes

    Returns:
        Encoded bytes

    Examples:
        >>> rle_encode(b'\\xff')
        b'\\xff\\xff\\x00'
        >>> rle_encode(b'AAA')
        b'\\xffA\\x02'
    """
    result = bytearray()

    for value, run_length in iter_runs(bytes(data)):
        if run_length == 1:
            if value == ESCAPE:
                result.extend((ESCAPE, ESCAPE, 0))
            else:
                result.append(value)
        else:
            result.extend((ESCAPE, value, run_length - 1))

    return bytes(result)


def rle_decode(data: bytes) -> bytes:
    """
    Decode the 0xFF escape format

    Args:
        data: RLE encoded bytes

    Returns:
        Decoded bytes
    """
    data = bytes(data)
    result = bytearray()
    n = len(data)
    i = 0

    while i < n:
        if data[i] == ESCAPE and i + 2 < n:
            value = data[i + 1]
            extra = data[i + 2]
            result.extend(bytes((value,)) * (extra + 1))
            i += 3
        else:
            # Literal byte, or a trailing escape without its two operands
            result.append(data[i])
            i += 1

    return bytes(result)


def rle_encode_simple(data: bytes) -> bytes:
    """
    Run-length encode as (value, count) pairs

    Always reversible, never smaller than the escape format on
    non-repetitive input.

    Examples:
        >>> rle_encode_simple(b'AAB')
        b'A\\x02B\\x01'
    """
    result = bytearray()
    for value, run_length in iter_runs(bytes(data)):
        result.append(value)
        result.append(run_length)
    return bytes(result)


def rle_decode_simple(data: bytes) -> bytes:
    """
    Decode (value, count) pairs

    An odd-length buffer cannot be a pair stream and decodes to b''.
    """
    data = bytes(data)
    if len(data) % 2 != 0:
        logger.warning("rle_decode_simple: odd input length %d, returning empty output", len(data))
        return b''

    result = bytearray()
    for i in range(0, len(data), 2):
        result.extend(bytes((data[i],)) * data[i + 1])
    return bytes(result)


def validate_rle(data: bytes) -> bool:
    """Round-trip self-check, True when decode(encode(data)) == data"""
    try:
        return rle_decode(rle_encode(data)) == bytes(data)
    except (TypeError, ValueError) as e:
        logger.error("RLE validation failed: %s", e)
        return False
