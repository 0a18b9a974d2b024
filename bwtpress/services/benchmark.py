"""
Compression benchmark

Compares the BWT -> MTF -> RLE pipeline against standard codecs:
1. Compressed size and ratio
2. Compression time
3. Round-trip correctness of the pipeline
"""

import gzip
import logging
import time
from typing import Any, Dict

import zstandard as zstd

from bwtpress.services.pipeline import compress, decompress, get_compression_stats

logger = logging.getLogger(__name__)

ZSTD_LEVEL = 19
GZIP_LEVEL = 9


def _method_result(original_size: int, compressed_size: int, elapsed: float) -> Dict[str, Any]:
    stats = get_compression_stats(original_size, compressed_size)
    return {
        'compressed_size': compressed_size,
        'compression_ratio': stats.compression_ratio,
        'reduction_percent': stats.reduction_percent,
        'compression_time': elapsed,
        'throughput_mb_s': (original_size / 1024 / 1024) / elapsed if elapsed > 0 else 0.0,
    }


def benchmark_bytes(data: bytes, label: str = 'input') -> Dict[str, Any]:
    """
    Benchmark the pipeline against zstd and gzip on one buffer

    Args:
        data: Input bytes
        label: Name reported in the results

    Returns:
        Dict with 'label', 'original_size', 'roundtrip_ok' and a
        'methods' dict keyed by 'bwtpress', 'zstd' and 'gzip'
    """
    data = bytes(data)
    original_size = len(data)
    results: Dict[str, Any] = {
        'label': label,
        'original_size': original_size,
        'methods': {},
    }

    # 1. BWT pipeline
    start = time.perf_counter()
    compressed = compress(data)
    elapsed = time.perf_counter() - start
    results['methods']['bwtpress'] = _method_result(original_size, len(compressed.payload), elapsed)
    results['stages'] = compressed.stages
    results['roundtrip_ok'] = decompress(compressed.payload, compressed.metadata) == data

    # 2. zstd
    start = time.perf_counter()
    zstd_data = zstd.ZstdCompressor(level=ZSTD_LEVEL).compress(data)
    elapsed = time.perf_counter() - start
    results['methods']['zstd'] = _method_result(original_size, len(zstd_data), elapsed)

    # 3. gzip -9
    start = time.perf_counter()
    gzip_data = gzip.compress(data, compresslevel=GZIP_LEVEL)
    elapsed = time.perf_counter() - start
    results['methods']['gzip'] = _method_result(original_size, len(gzip_data), elapsed)

    logger.debug("benchmark %s: %s", label, {name: m['compressed_size'] for name, m in results['methods'].items()})
    return results
