"""
Performance benchmarks for the compression pipeline
"""

import random
import time

import pytest

from bwtpress.context.encoding.bwt import bwt_encode
from bwtpress.services.pipeline import compress, decompress


@pytest.fixture
def text_block():
    words = [b'alpha', b'beta', b'gamma', b'delta', b'epsilon', b'zeta']
    rng = random.Random(7)
    return b' '.join(rng.choice(words) for _ in range(4000))


@pytest.mark.benchmark
class TestPerformanceBenchmarks:
    """Benchmark compression and decompression"""

    def test_compression_throughput(self, text_block, benchmark):
        result = benchmark(compress, text_block)

        assert result.metadata['compressionRatio'] < 1
        throughput = len(text_block) / benchmark.stats.stats.mean
        assert throughput > 10_000  # bytes/sec

    def test_decompression_speed(self, text_block, benchmark):
        compressed = compress(text_block)

        restored = benchmark(decompress, compressed.payload, compressed.metadata)

        assert restored == text_block
        assert benchmark.stats.stats.mean < 2.0

    @pytest.mark.parametrize("size", [1_000, 10_000, 50_000])
    def test_rotation_sort_scalability(self, size):
        """Periodic input is the worst case for the rotation sort"""
        data = b'ab' * (size // 2)

        start = time.time()
        result = bwt_encode(data)
        elapsed = time.time() - start

        assert len(result.transformed) == size
        assert elapsed < 30, f"BWT of {size} bytes took {elapsed:.1f}s"
