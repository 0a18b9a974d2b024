"""
Pipeline: BWT -> MTF -> RLE compression with metadata

Compression applies the selected stages in canonical order and records
what it did in a metadata dict:
- pipeline: stage names actually applied
- primaryIndex: BWT recovery state (when bwt ran)
- originalSize / compressedSize / compressionRatio / processingTime

Decompression runs the inverse stages in mirror order, gated by the
recorded stage list. Two leniency policies are explicit:
- compress never raises for byte input; a failing stage degrades to a
  pass-through payload with pipeline ["none"] and an error annotation
- unknown stage names in the metadata are skipped
"""

import logging
import numbers
import time
from collections.abc import Mapping as MappingABC
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from bwtpress.config import CompressionOptions
from bwtpress.context.encoding.bwt import bwt_encode, bwt_decode
from bwtpress.context.encoding.mtf import mtf_encode, mtf_decode
from bwtpress.context.encoding.rle import rle_encode, rle_decode
from bwtpress.exceptions import (
    InvalidMetadataError,
    InvalidPrimaryIndexError,
    MissingPrimaryIndexError,
)
from bwtpress.models import (
    META_ALGORITHM,
    META_COMPRESSED_SIZE,
    META_COMPRESSION_RATIO,
    META_ERROR,
    META_ORIGINAL_SIZE,
    META_PIPELINE,
    META_PRIMARY_INDEX,
    META_PROCESSING_TIME,
    META_VERSION,
    METADATA_VERSION,
    STAGE_BWT,
    STAGE_MTF,
    STAGE_NONE,
    STAGE_RLE,
    CompressionResult,
    CompressionStats,
)
from bwtpress.protocols import TransformProtocol

logger = logging.getLogger(__name__)

OptionsLike = Union[CompressionOptions, Mapping[str, Any], None]


class BWTStage(TransformProtocol):
    """Burrows-Wheeler stage; stores the primary index in metadata."""

    name = STAGE_BWT

    def encode(self, data: bytes, metadata: Dict[str, Any]) -> bytes:
        result = bwt_encode(data)
        metadata[META_PRIMARY_INDEX] = result.primary_index
        return result.transformed

    def decode(self, data: bytes, metadata: Mapping[str, Any]) -> bytes:
        index = primary_index_of(metadata)
        if not data:
            return b''
        if isinstance(index, float):
            if not index.is_integer():
                raise InvalidPrimaryIndexError(index, len(data))
            index = int(index)
        return bwt_decode(data, index)


class MTFStage(TransformProtocol):
    name = STAGE_MTF

    def encode(self, data: bytes, metadata: Dict[str, Any]) -> bytes:
        return mtf_encode(data)

    def decode(self, data: bytes, metadata: Mapping[str, Any]) -> bytes:
        return mtf_decode(data)


class RLEStage(TransformProtocol):
    name = STAGE_RLE

    def encode(self, data: bytes, metadata: Dict[str, Any]) -> bytes:
        return rle_encode(data)

    def decode(self, data: bytes, metadata: Mapping[str, Any]) -> bytes:
        return rle_decode(data)


def primary_index_of(metadata: Mapping[str, Any]) -> Union[int, float]:
    """
    Return the numeric primary index from metadata

    Raises:
        MissingPrimaryIndexError: If absent or not a number
    """
    value = metadata.get(META_PRIMARY_INDEX)
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise MissingPrimaryIndexError("Missing primaryIndex for BWT decompression")
    return value


def stage_list_of(metadata: Any) -> List[Any]:
    """
    Return the recorded stage list

    Raises:
        InvalidMetadataError: If metadata is not a mapping or the stage
            list is absent, not a list, or empty
    """
    if metadata is None or not isinstance(metadata, MappingABC):
        raise InvalidMetadataError("Invalid metadata for decompression: metadata missing")
    stages = metadata.get(META_PIPELINE)
    if not isinstance(stages, (list, tuple)):
        raise InvalidMetadataError("Invalid metadata for decompression: missing pipeline stage list")
    if not stages:
        raise InvalidMetadataError("Invalid metadata for decompression: empty pipeline stage list")
    return list(stages)


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000.0


def _ratio(original_size: int, compressed_size: int) -> float:
    return compressed_size / original_size if original_size > 0 else 1.0


class CompressionPipeline:
    """
    Composes the transform stages.

    Stages are held in canonical order; compression walks them forward,
    decompression walks them backward.
    """

    def __init__(self, stages: Optional[Sequence[TransformProtocol]] = None):
        self.stages: List[TransformProtocol] = list(stages) if stages is not None else [
            BWTStage(), MTFStage(), RLEStage(),
        ]
        self._by_name = {stage.name: stage for stage in self.stages}

    @property
    def stage_names(self) -> List[str]:
        return [stage.name for stage in self.stages]

    def compress(self, data: bytes, options: OptionsLike = None) -> CompressionResult:
        """
        Compress bytes through the selected stages

        Args:
            data: Input bytes
            options: CompressionOptions or {'stages': [...]}

        Returns:
            CompressionResult(payload, metadata)

        Raises:
            ValueError: If options name an unknown stage
        """
        if not isinstance(options, CompressionOptions):
            options = CompressionOptions.from_mapping(options)

        start = time.perf_counter()
        data = bytes(data)
        selected = [name for name in options.stages if name in self._by_name]
        applied = selected if selected else [STAGE_NONE]

        if not data:
            metadata = self._metadata(applied, 0, 0, start)
            if STAGE_BWT in applied:
                metadata[META_PRIMARY_INDEX] = 0
            return CompressionResult(payload=b'', metadata=metadata)

        metadata: Dict[str, Any] = {}
        current = data
        try:
            for name in selected:
                stage = self._by_name[name]
                before = len(current)
                current = stage.encode(current, metadata)
                logger.debug("compress: %s %d -> %d bytes", name, before, len(current))
        except Exception as e:
            # Pass-through fallback: the caller always gets its data back
            logger.warning("Compression failed, storing data unchanged: %s", e)
            fallback = self._metadata([STAGE_NONE], len(data), len(data), start)
            fallback[META_ERROR] = str(e) or type(e).__name__
            return CompressionResult(payload=data, metadata=fallback)

        recovery = metadata
        metadata = self._metadata(applied, len(data), len(current), start)
        metadata.update(recovery)
        return CompressionResult(payload=current, metadata=metadata)

    def decompress(self, payload: bytes, metadata: Mapping[str, Any]) -> bytes:
        """
        Invert compress using the recorded stage list

        Args:
            payload: Compressed payload
            metadata: Metadata produced by compress (not modified)

        Returns:
            Original bytes

        Raises:
            InvalidMetadataError: Missing metadata or stage list
            MissingPrimaryIndexError: bwt listed without a numeric primaryIndex
            InvalidPrimaryIndexError: primaryIndex outside the block
        """
        stages = stage_list_of(metadata)

        if STAGE_BWT in stages:
            primary_index_of(metadata)

        for name in stages:
            if isinstance(name, str) and (name == STAGE_NONE or name in self._by_name):
                continue
            # Forward compatibility: stages this version does not know
            logger.debug("decompress: skipping unknown stage %r", name)

        current = bytes(payload)
        for stage in reversed(self.stages):
            if stage.name not in stages:
                continue
            before = len(current)
            current = stage.decode(current, metadata)
            logger.debug("decompress: %s %d -> %d bytes", stage.name, before, len(current))

        return current

    def _metadata(self, applied: List[str], original_size: int, compressed_size: int,
                  start: float) -> Dict[str, Any]:
        return {
            META_ORIGINAL_SIZE: original_size,
            META_COMPRESSED_SIZE: compressed_size,
            META_COMPRESSION_RATIO: _ratio(original_size, compressed_size),
            META_PIPELINE: list(applied),
            META_PROCESSING_TIME: _elapsed_ms(start),
            META_ALGORITHM: '+'.join(name.upper() for name in applied),
            META_VERSION: METADATA_VERSION,
        }


_default_pipeline = CompressionPipeline()


def compress(data: bytes, options: OptionsLike = None) -> CompressionResult:
    """Compress with the default BWT -> MTF -> RLE pipeline"""
    return _default_pipeline.compress(data, options)


def decompress(payload: bytes, metadata: Mapping[str, Any]) -> bytes:
    """Decompress with the default pipeline"""
    return _default_pipeline.decompress(payload, metadata)


def get_compression_stats(original_size: int, compressed_size: int) -> CompressionStats:
    """
    Size statistics

    Examples:
        >>> get_compression_stats(1000, 500).compression_ratio
        0.5
    """
    ratio = _ratio(original_size, compressed_size)
    reduction = (original_size - compressed_size) / original_size * 100 if original_size > 0 else 0.0
    return CompressionStats(
        original_size=original_size,
        compressed_size=compressed_size,
        compression_ratio=ratio,
        reduction_percent=reduction,
        space_saved=original_size - compressed_size,
        is_effective=ratio < 1,
    )


def validate_pipeline(data: bytes, options: OptionsLike = None) -> bool:
    """Round-trip self-check of compress/decompress"""
    try:
        result = compress(data, options)
        return decompress(result.payload, result.metadata) == bytes(data)
    except (TypeError, ValueError) as e:
        logger.error("Pipeline validation failed: %s", e)
        return False
