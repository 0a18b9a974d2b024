"""
bwtpress - Burrows-Wheeler byte-stream compression

A reversible compressor built from three composable transforms
(BWT -> MTF -> RLE) and a framed container that carries the recovery
metadata next to the payload.

Architecture:
- Models: Pure data structures (BWTResult, CompressionResult, ...)
- Protocols: Interface contracts (TransformProtocol)
- Context: Transforms (BWT, MTF, RLE) and the BWTJS1 container
- Services: Pipeline orchestration, io helpers, archive store, benchmark
- CLI: User interface (compress, decompress, info, bench, store commands)
"""

__version__ = "1.0.0"
__license__ = "MIT"

from bwtpress import models, protocols
from bwtpress.exceptions import (
    BWTPressError,
    FormatError,
    MetadataError,
    InvalidMetadataError,
    MissingPrimaryIndexError,
)
from bwtpress.context import (
    bwt_encode, bwt_decode,
    mtf_encode, mtf_decode,
    rle_encode, rle_decode,
    MAGIC_HEADER, serialize, parse,
)
from bwtpress.services import (
    CompressionPipeline,
    compress,
    decompress,
    get_compression_stats,
    validate_pipeline,
)

__all__ = [
    'models',
    'protocols',
    'BWTPressError',
    'FormatError',
    'MetadataError',
    'InvalidMetadataError',
    'MissingPrimaryIndexError',
    'bwt_encode',
    'bwt_decode',
    'mtf_encode',
    'mtf_decode',
    'rle_encode',
    'rle_decode',
    'MAGIC_HEADER',
    'serialize',
    'parse',
    'CompressionPipeline',
    'compress',
    'decompress',
    'get_compression_stats',
    'validate_pipeline',
]
