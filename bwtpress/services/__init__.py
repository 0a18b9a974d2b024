"""
Services layer - application orchestration.
"""

from bwtpress.services.pipeline import (
    CompressionPipeline,
    compress,
    decompress,
    get_compression_stats,
    validate_pipeline,
)
from bwtpress.services.store import ArchiveStore
from bwtpress.services.benchmark import benchmark_bytes

# Provide consistent naming
Pipeline = CompressionPipeline
Store = ArchiveStore

__all__ = [
    'CompressionPipeline',
    'ArchiveStore',
    'compress',
    'decompress',
    'get_compression_stats',
    'validate_pipeline',
    'benchmark_bytes',
    # Aliases
    'Pipeline',
    'Store',
]
