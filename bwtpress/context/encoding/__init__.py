"""
Encoding context: the reversible byte transforms.
"""

from bwtpress.context.encoding.bwt import bwt_encode, bwt_decode, validate_bwt
from bwtpress.context.encoding.mtf import mtf_encode, mtf_decode, validate_mtf
from bwtpress.context.encoding.rle import (
    rle_encode, rle_decode,
    rle_encode_simple, rle_decode_simple,
    validate_rle,
)

__all__ = [
    'bwt_encode',
    'bwt_decode',
    'validate_bwt',
    'mtf_encode',
    'mtf_decode',
    'validate_mtf',
    'rle_encode',
    'rle_decode',
    'rle_encode_simple',
    'rle_decode_simple',
    'validate_rle',
]
