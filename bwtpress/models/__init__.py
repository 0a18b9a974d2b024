"""
Data models and schemas for bwtpress.

This module contains pure data structures with no business logic.
"""

from dataclasses import dataclass, field as dataclass_field
from typing import List, Dict, Any

__all__ = [
    'STAGE_BWT',
    'STAGE_MTF',
    'STAGE_RLE',
    'STAGE_NONE',
    'META_PIPELINE',
    'META_PRIMARY_INDEX',
    'META_ORIGINAL_SIZE',
    'META_COMPRESSED_SIZE',
    'META_COMPRESSION_RATIO',
    'META_PROCESSING_TIME',
    'META_ALGORITHM',
    'META_VERSION',
    'META_ERROR',
    'META_FILENAME',
    'META_MIME_TYPE',
    'META_ENCODING',
    'META_CREATED_AT',
    'METADATA_VERSION',
    'BWTResult',
    'CompressionResult',
    'CompressionStats',
    'ParsedContainer',
    'SavedItem',
]

# Stage names as recorded in the metadata stage list
STAGE_BWT = "bwt"
STAGE_MTF = "mtf"
STAGE_RLE = "rle"
STAGE_NONE = "none"

# Metadata keys (wire names, shared with BWTJS1 containers)
META_PIPELINE = "pipeline"
META_PRIMARY_INDEX = "primaryIndex"
META_ORIGINAL_SIZE = "originalSize"
META_COMPRESSED_SIZE = "compressedSize"
META_COMPRESSION_RATIO = "compressionRatio"
META_PROCESSING_TIME = "processingTime"
META_ALGORITHM = "algorithm"
META_VERSION = "version"
META_ERROR = "error"
META_FILENAME = "originalFilename"
META_MIME_TYPE = "mimeType"
META_ENCODING = "encoding"
META_CREATED_AT = "createdAt"

METADATA_VERSION = "1.0"


@dataclass(frozen=True)
class BWTResult:
    """Output of the forward BWT."""
    transformed: bytes
    primary_index: int


@dataclass
class CompressionResult:
    """Compressed payload plus the metadata needed to invert it."""
    payload: bytes
    metadata: Dict[str, Any]

    @property
    def stages(self) -> List[str]:
        return list(self.metadata.get(META_PIPELINE, []))


@dataclass
class CompressionStats:
    """Size statistics for one compression"""
    original_size: int
    compressed_size: int
    compression_ratio: float
    reduction_percent: float
    space_saved: int
    is_effective: bool

    def __repr__(self):
        return (f"CompressionStats(ratio={self.compression_ratio:.3f}, "
                f"reduction={self.reduction_percent:.1f}%, saved={self.space_saved})")


@dataclass
class ParsedContainer:
    """Metadata and payload recovered from a container blob."""
    metadata: Dict[str, Any]
    payload: bytes


@dataclass
class SavedItem:
    """Index entry of the archive store."""
    key: str
    meta: Dict[str, Any] = dataclass_field(default_factory=dict)
    saved_at: str = ""
    size: int = 0
