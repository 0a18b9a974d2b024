"""
Unit tests for run-length encoding
"""

import pytest

from bwtpress.context.encoding.rle import (
    iter_runs,
    rle_encode,
    rle_decode,
    rle_encode_simple,
    rle_decode_simple,
    validate_rle,
)


class TestRLEEncode:
    """Test the escape format encoder"""

    def test_empty_input(self):
        assert rle_encode(b'') == b''

    def test_single_escape_byte(self):
        assert rle_encode(bytes([0xFF])) == bytes([0xFF, 0xFF, 0])

    def test_short_run(self):
        assert rle_encode(bytes([65, 65, 65])) == bytes([0xFF, 65, 2])

    def test_mixed_literals_and_runs(self):
        assert rle_encode(bytes([65, 66, 66, 67])) == bytes([65, 0xFF, 66, 1, 67])

    def test_literals_pass_through(self):
        assert rle_encode(b'abc') == b'abc'

    def test_run_of_escape_bytes(self):
        assert rle_encode(b'\xff' * 4) == bytes([0xFF, 0xFF, 3])

    def test_long_run_is_split(self):
        """1000 equal bytes become runs of 255, 255, 255, 235"""
        encoded = rle_encode(b'\x07' * 1000)
        assert encoded == bytes([
            0xFF, 7, 254,
            0xFF, 7, 254,
            0xFF, 7, 254,
            0xFF, 7, 234,
        ])
        assert len(encoded) <= 3 * 4

    def test_run_of_256_leaves_single_literal(self):
        assert rle_encode(b'A' * 256) == bytes([0xFF, 65, 254, 65])


class TestRLEDecode:
    """Test the escape format decoder"""

    def test_empty_input(self):
        assert rle_decode(b'') == b''

    def test_escape_literal(self):
        assert rle_decode(bytes([0xFF, 0xFF, 0])) == b'\xff'

    def test_run(self):
        assert rle_decode(bytes([0xFF, 65, 2])) == b'AAA'

    @pytest.mark.parametrize("encoded", [
        bytes([0xFF]),
        bytes([0xFF, 65]),
        bytes([66, 0xFF]),
        bytes([66, 0xFF, 0x10]),
    ])
    def test_trailing_incomplete_escape_is_literal(self, encoded):
        """Defined leniency: an unfinished escape decodes byte for byte"""
        assert rle_decode(encoded) == encoded

    def test_roundtrip_text(self, sample_texts):
        for data in sample_texts:
            assert rle_decode(rle_encode(data)) == data

    def test_roundtrip_binary(self, binary_samples, random_blocks):
        for data in binary_samples + random_blocks:
            assert rle_decode(rle_encode(data)) == data

    def test_validate(self, binary_samples):
        assert all(validate_rle(data) for data in binary_samples)


class TestRuns:
    def test_runs_are_capped(self):
        assert list(iter_runs(b'x' * 300)) == [(120, 255), (120, 45)]

    def test_empty(self):
        assert list(iter_runs(b'')) == []


class TestSimpleRLE:
    """Test the (value, count) fallback variant"""

    def test_encode(self):
        assert rle_encode_simple(b'AAB') == bytes([65, 2, 66, 1])

    def test_encode_empty(self):
        assert rle_encode_simple(b'') == b''

    def test_roundtrip(self, binary_samples, sample_texts):
        for data in binary_samples + sample_texts:
            assert rle_decode_simple(rle_encode_simple(data)) == data

    def test_never_smaller_on_distinct_bytes(self, all_bytes):
        assert len(rle_encode_simple(all_bytes)) == 2 * len(all_bytes)

    def test_odd_length_decodes_empty(self):
        assert rle_decode_simple(bytes([65, 2, 66])) == b''
