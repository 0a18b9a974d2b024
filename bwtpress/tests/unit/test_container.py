"""
Unit tests for the BWTJS1 container format
"""

import json
import struct

import pytest

from bwtpress.context.serialization.container import (
    MAGIC_HEADER,
    parse,
    read_container,
    serialize,
    validate_serialization,
    write_container,
)
from bwtpress.exceptions import (
    FormatError,
    InvalidMagicError,
    MetadataError,
    MetadataParseError,
    SerializationError,
    TooShortError,
    TruncatedError,
)


def build_blob(metadata_bytes: bytes, payload: bytes = b'', declared=None) -> bytes:
    length = len(metadata_bytes) if declared is None else declared
    return MAGIC_HEADER + struct.pack('>I', length) + metadata_bytes + payload


class TestSerialize:
    """Test container construction"""

    def test_layout(self):
        blob = serialize({'pipeline': ['rle']}, b'\x01\x02')
        assert blob[:7] == b'BWTJS1\x00'
        (length,) = struct.unpack('>I', blob[7:11])
        meta = json.loads(blob[11:11 + length].decode('utf-8'))
        assert meta['pipeline'] == ['rle']
        assert blob[11 + length:] == b'\x01\x02'

    def test_defaults_applied(self):
        parsed = parse(serialize({}, b''))
        meta = parsed.metadata
        assert meta['originalFilename'] == 'untitled'
        assert meta['mimeType'] == 'application/octet-stream'
        assert meta['originalSize'] == 0
        assert meta['pipeline'] == ['bwt', 'mtf', 'rle']
        assert meta['encoding'] == 'binary'
        assert meta['createdAt'].endswith('Z')

    def test_caller_fields_win(self):
        parsed = parse(serialize({'originalFilename': 'a.txt', 'pipeline': ['none']}, b''))
        assert parsed.metadata['originalFilename'] == 'a.txt'
        assert parsed.metadata['pipeline'] == ['none']

    def test_none_metadata_uses_defaults(self):
        assert parse(serialize(None, b'x')).metadata['encoding'] == 'binary'

    def test_caller_metadata_not_mutated(self):
        meta = {'originalSize': 3}
        serialize(meta, b'abc')
        assert meta == {'originalSize': 3}

    def test_unencodable_metadata(self):
        with pytest.raises(SerializationError):
            serialize({'bad': b'bytes'}, b'')

    @pytest.mark.parametrize("value", [float('nan'), float('inf'), float('-inf')])
    def test_non_finite_numbers_rejected(self, value):
        """Metadata must stay strict JSON"""
        with pytest.raises(SerializationError):
            serialize({'processingTime': value}, b'')

    def test_unicode_metadata_is_utf8(self):
        blob = serialize({'originalFilename': 'résumé 🌍.txt'}, b'')
        assert 'résumé 🌍.txt'.encode('utf-8') in blob


class TestParse:
    """Test container parsing and its failure modes"""

    def test_roundtrip(self, binary_samples):
        meta = {'originalFilename': 'données.bin', 'note': '日本語', 'primaryIndex': 5, 'pipeline': ['bwt']}
        for payload in binary_samples:
            parsed = parse(serialize(meta, payload))
            assert parsed.payload == payload
            for key, value in meta.items():
                assert parsed.metadata[key] == value

    def test_payload_with_magic_inside(self):
        payload = MAGIC_HEADER * 3 + b'\x00\xff'
        assert parse(serialize({}, payload)).payload == payload

    def test_empty_payload(self):
        assert parse(build_blob(b'{}')).payload == b''

    @pytest.mark.parametrize("blob", [b'', b'BWT', b'BWTJS1'])
    def test_too_short(self, blob):
        with pytest.raises(TooShortError):
            parse(blob)

    def test_bad_magic(self):
        blob = b'BWTJS2\x00' + struct.pack('>I', 2) + b'{}'
        with pytest.raises(InvalidMagicError):
            parse(blob)

    def test_bad_magic_is_format_error(self):
        with pytest.raises(FormatError):
            parse(b'NOTBWT!' + b'\x00' * 10)

    def test_truncated_length_header(self):
        with pytest.raises(TruncatedError) as exc_info:
            parse(MAGIC_HEADER + b'\x00\x00')
        assert exc_info.value.section == 'header'

    def test_truncated_metadata(self):
        with pytest.raises(TruncatedError) as exc_info:
            parse(build_blob(b'{"a": 1}', declared=100))
        assert exc_info.value.section == 'metadata'

    def test_huge_declared_length_is_truncation(self):
        """No sanity cap: an absurd length is just not available"""
        with pytest.raises(TruncatedError):
            parse(build_blob(b'{}', declared=0xFFFFFFFF))

    def test_malformed_json(self):
        with pytest.raises(MetadataParseError):
            parse(build_blob(b'{not json'))

    def test_invalid_utf8(self):
        with pytest.raises(MetadataParseError):
            parse(build_blob(b'{"a": "\xff\xfe"}'))

    def test_json_must_be_object(self):
        with pytest.raises(MetadataParseError):
            parse(build_blob(b'[1, 2]'))

    def test_parse_error_is_metadata_error(self):
        with pytest.raises(MetadataError):
            parse(build_blob(b''))

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            parse(b'')


class TestContainerFiles:
    def test_write_and_read(self, tmp_path):
        path = tmp_path / "out" / "data.bwtz"
        written = write_container(path, {'originalFilename': 'data'}, b'\x00\x01')
        assert path.stat().st_size == written
        parsed = read_container(path)
        assert parsed.payload == b'\x00\x01'
        assert parsed.metadata['originalFilename'] == 'data'


class TestValidateSerialization:
    def test_valid(self):
        meta = {'originalFilename': 'x', 'pipeline': ('bwt', 'rle'), 'originalSize': 4}
        assert validate_serialization(meta, b'\x00\xff\x00\xff')

    def test_unencodable_is_false(self):
        assert validate_serialization({'originalFilename': object()}, b'') is False

    @pytest.mark.parametrize("metadata, payload", [
        ({'originalSize': 1}, None),
        (None, None),
        ({'processingTime': float('nan')}, b''),
    ])
    def test_failures_report_false(self, metadata, payload):
        assert validate_serialization(metadata, payload) is False
