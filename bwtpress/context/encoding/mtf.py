"""
Move-to-Front (MTF) transform over the byte alphabet

Each symbol is replaced by its rank in a recency list, then moved to the
front. After BWT, runs of equal bytes become runs of zeros, which the
RLE stage collapses.

The alphabet is a plain 256-entry list rebuilt at the start of every
call; nothing is carried between calls.
"""

import logging
from typing import List

logger = logging.getLogger(__name__)

ALPHABET_SIZE = 256


def _initial_alphabet() -> List[int]:
    return list(range(ALPHABET_SIZE))


def mtf_encode(data: bytes) -> bytes:
    """
    Move-to-Front encoding

    Args:
        data: Input bytes

    Returns:
        One rank per input byte

    Examples:
        >>> mtf_encode(b'AAA')
        b'A\\x00\\x00'
    """
    alphabet = _initial_alphabet()
    result = bytearray(len(data))

    for i, byte in enumerate(bytes(data)):
        position = alphabet.index(byte)
        result[i] = position
        if position:
            del alphabet[position]
            alphabet.insert(0, byte)

    return bytes(result)


def mtf_decode(indices: bytes) -> bytes:
    """
    Move-to-Front decoding

    Args:
        indices: MTF ranks

    Returns:
        Original bytes
    """
    alphabet = _initial_alphabet()
    result = bytearray(len(indices))

    for i, position in enumerate(bytes(indices)):
        byte = alphabet[position]
        result[i] = byte
        if position:
            del alphabet[position]
            alphabet.insert(0, byte)

    return bytes(result)


def validate_mtf(data: bytes) -> bool:
    """Round-trip self-check, True when decode(encode(data)) == data"""
    try:
        return mtf_decode(mtf_encode(data)) == bytes(data)
    except (TypeError, ValueError) as e:
        logger.error("MTF validation failed: %s", e)
        return False
