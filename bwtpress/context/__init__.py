"""
Context layer - transform and container implementations.
"""

from bwtpress.context.encoding import (
    bwt_encode, bwt_decode,
    mtf_encode, mtf_decode,
    rle_encode, rle_decode,
)
from bwtpress.context.serialization import MAGIC_HEADER, serialize, parse

__all__ = [
    'bwt_encode',
    'bwt_decode',
    'mtf_encode',
    'mtf_decode',
    'rle_encode',
    'rle_decode',
    'MAGIC_HEADER',
    'serialize',
    'parse',
]
