"""
Unit tests for the Move-to-Front transform
"""

from bwtpress.context.encoding.mtf import mtf_encode, mtf_decode, validate_mtf


class TestMTFEncode:
    """Test MTF encoding"""

    def test_empty_input(self):
        assert mtf_encode(b'') == b''

    def test_repeated_symbol(self):
        """First occurrence emits its value, repeats emit zero"""
        assert mtf_encode(bytes([65, 65, 65])) == bytes([65, 0, 0])

    def test_identity_alphabet_start(self, all_bytes):
        """Each byte is moved ahead of the larger values still waiting"""
        encoded = mtf_encode(all_bytes)
        assert encoded == all_bytes

    def test_move_to_front(self):
        # [1, 0, 1]: 1 at rank 1, then 0 is behind 1, then 1 is behind 0
        assert mtf_encode(bytes([1, 0, 1])) == bytes([1, 1, 1])

    def test_state_is_fresh_per_call(self):
        """No alphabet state survives between calls"""
        first = mtf_encode(b'zzz')
        second = mtf_encode(b'zzz')
        assert first == second == bytes([ord('z'), 0, 0])

    def test_output_length_matches(self, binary_samples):
        for data in binary_samples:
            assert len(mtf_encode(data)) == len(data)

    def test_high_bytes(self):
        assert mtf_encode(b'\xff\xff\x00') == bytes([255, 0, 1])


class TestMTFDecode:
    """Test MTF decoding"""

    def test_empty_input(self):
        assert mtf_decode(b'') == b''

    def test_known_indices(self):
        assert mtf_decode(bytes([65, 0, 0])) == b'AAA'

    def test_roundtrip_text(self, sample_texts):
        for data in sample_texts:
            assert mtf_decode(mtf_encode(data)) == data

    def test_roundtrip_binary(self, binary_samples, random_blocks):
        for data in binary_samples + random_blocks:
            assert mtf_decode(mtf_encode(data)) == data

    def test_validate(self, sample_texts):
        assert all(validate_mtf(data) for data in sample_texts)
