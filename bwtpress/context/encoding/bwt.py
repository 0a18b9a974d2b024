"""
Burrows-Wheeler Transform (BWT) over raw bytes

The BWT is a block-sorting permutation that rearranges data so similar
bytes cluster together, without losing information. It is the first
stage of the BWT -> MTF -> RLE pipeline.

Algorithm:
1. Block-sort: rank all cyclic rotations of the input lexicographically
2. Extract last column: the byte preceding each sorted rotation's start
3. Store: the primary index (row of the untransformed input)

Rotations are never materialised. Offsets are ranked by cyclic prefix
doubling: each round sorts offsets by the rank pair of their first k and
next k bytes, so log2(n) stable sorts rank every rotation. Identical
rotations keep ascending offset order, which is the order a stable
full-rotation comparator sort produces.
"""

import logging
from typing import List

from bwtpress.exceptions import InvalidPrimaryIndexError
from bwtpress.models import BWTResult

logger = logging.getLogger(__name__)


def sort_rotations(data: bytes) -> List[int]:
    """
    Rank the cyclic rotations of data

    Args:
        data: Input bytes (non-empty)

    Returns:
        Rotation start offsets in lexicographic rotation order
    """
    n = len(data)
    rank = list(data)
    order = sorted(range(n), key=rank.__getitem__)

    k = 1
    while k < n:
        def rotation_key(i, k=k):
            return rank[i], rank[(i + k) % n]

        order = sorted(range(n), key=rotation_key)

        new_rank = [0] * n
        classes = 0
        previous = rotation_key(order[0])
        for pos in range(1, n):
            current = rotation_key(order[pos])
            if current != previous:
                classes += 1
                previous = current
            new_rank[order[pos]] = classes
        rank = new_rank

        # Every rotation distinct: order is final
        if classes == n - 1:
            break
        k <<= 1

    return order


def bwt_encode(data: bytes) -> BWTResult:
    """
    Forward Burrows-Wheeler Transform

    Args:
        data: Input bytes to transform

    Returns:
        BWTResult with the last column and the primary index

    Examples:
        >>> bwt_encode(b'banana')
        BWTResult(transformed=b'nnbaaa', primary_index=3)
    """
    data = bytes(data)
    if not data:
        return BWTResult(b'', 0)

    n = len(data)
    order = sort_rotations(data)

    # For rotation starting at position i, the last byte is at (i - 1) % n
    last_column = bytearray(n)
    primary_index = -1
    for row_idx, start_pos in enumerate(order):
        last_column[row_idx] = data[(start_pos + n - 1) % n]
        if start_pos == 0:
            primary_index = row_idx

    logger.debug("bwt_encode: %d bytes, primary index %d", n, primary_index)
    return BWTResult(bytes(last_column), primary_index)


def bwt_decode(transformed: bytes, primary_index: int) -> bytes:
    """
    Inverse Burrows-Wheeler Transform

    The first column is recovered by stably sorting (byte, position)
    pairs of the last column. Walking the pairing permutation from the
    primary index visits the rows in text order. Any other index, or a
    corrupted last column, decodes to some different sequence without
    raising.

    Args:
        transformed: BWT last column
        primary_index: Row of the original input in sorted rotation order

    Returns:
        Original bytes

    Raises:
        InvalidPrimaryIndexError: If primary_index is outside [0, n)
    """
    transformed = bytes(transformed)
    if not transformed:
        return b''

    n = len(transformed)
    if not 0 <= primary_index < n:
        raise InvalidPrimaryIndexError(primary_index, n)

    # sorted() is stable: equal bytes keep their last-column order
    pairs = sorted(range(n), key=transformed.__getitem__)

    result = bytearray(n)
    cursor = primary_index
    for i in range(n):
        cursor = pairs[cursor]
        result[i] = transformed[cursor]

    return bytes(result)


def validate_bwt(data: bytes) -> bool:
    """Round-trip self-check, True when decode(encode(data)) == data"""
    try:
        result = bwt_encode(data)
        return bwt_decode(result.transformed, result.primary_index) == bytes(data)
    except (TypeError, ValueError) as e:
        logger.error("BWT validation failed: %s", e)
        return False
