"""Unit tests for the protobuf wire reader."""

import struct

import pytest

from sptok._wire import FieldReader, WireType
from sptok.errors import MalformedInputError

from _protobuf import tag, varint


# Primitives
# ---------------------------------------------------------------------------


def test_read_tag_splits_field_and_wire_type():
    """Tag 0x0a is field 1, length-delimited."""
    reader = FieldReader(b"\x0a")
    assert reader.read_tag() == (1, WireType.LENGTH_DELIMITED)


def test_read_varint32_multibyte():
    """Multi-byte varints decode little-endian groups of 7 bits."""
    reader = FieldReader(varint(300))
    assert reader.read_varint32() == 300
    assert reader.is_at_end()


def test_read_varint32_masks_to_32_bits():
    """A 5-byte varint wider than 32 bits keeps only the low 32 bits."""
    reader = FieldReader(varint(2**32 + 5))
    assert reader.read_varint32() == 5


def test_read_varint32_too_long_raises():
    """Varints longer than 5 bytes are malformed."""
    reader = FieldReader(b"\x80\x80\x80\x80\x80\x01")
    with pytest.raises(MalformedInputError):
        reader.read_varint32()


def test_read_varint32_truncated_raises():
    """A continuation bit at the end of input is malformed."""
    reader = FieldReader(b"\x80")
    with pytest.raises(MalformedInputError):
        reader.read_varint32()


def test_read_float32_little_endian():
    """Floats are 4 little-endian bytes."""
    reader = FieldReader(struct.pack("<f", -1.5))
    assert reader.read_float32() == -1.5


def test_read_float32_truncated_raises():
    """Fewer than 4 bytes cannot hold a float."""
    reader = FieldReader(b"\x00\x00")
    with pytest.raises(MalformedInputError):
        reader.read_float32()


def test_read_string_utf8():
    """Strings decode as UTF-8, including the boundary marker."""
    raw = "▁hello".encode("utf-8")
    reader = FieldReader(raw)
    assert reader.read_string(len(raw)) == "▁hello"


def test_read_string_invalid_utf8_raises():
    """Invalid UTF-8 is rejected rather than replaced."""
    reader = FieldReader(b"\xff\xfe")
    with pytest.raises(MalformedInputError):
        reader.read_string(2)


def test_read_tag_at_end_raises():
    """Reading a tag from an exhausted buffer is malformed."""
    with pytest.raises(MalformedInputError):
        FieldReader(b"").read_tag()


def test_read_tag_field_zero_raises():
    """Field number 0 is never valid."""
    with pytest.raises(MalformedInputError):
        FieldReader(b"\x00").read_tag()


# Limits
# ---------------------------------------------------------------------------


def test_push_limit_bounds_reads():
    """Reads stop at a pushed limit and resume after it is popped."""
    reader = FieldReader(b"\x01\x02\x03")
    reader.push_limit(2)
    assert reader.bytes_until_limit() == 2
    assert reader.read_varint32() == 1
    assert reader.read_varint32() == 2
    assert reader.is_at_end()
    with pytest.raises(MalformedInputError):
        reader.read_varint32()

    reader.pop_limit()
    assert not reader.is_at_end()
    assert reader.read_varint32() == 3


def test_push_limit_past_end_raises():
    """A sub-message cannot claim more bytes than remain."""
    reader = FieldReader(b"\x01")
    with pytest.raises(MalformedInputError):
        reader.push_limit(16)


def test_pop_limit_without_push_raises():
    """Popping with no active limit is an error."""
    with pytest.raises(MalformedInputError):
        FieldReader(b"").pop_limit()


# Skipping
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "wire_type, payload",
    [
        (WireType.VARINT, varint(2**40)),
        (WireType.FIXED64, b"\x00" * 8),
        (WireType.LENGTH_DELIMITED, varint(3) + b"abc"),
        (WireType.FIXED32, b"\x00" * 4),
    ],
)
def test_skip_field_consumes_payload(wire_type, payload):
    """Each wire type skips exactly its payload."""
    reader = FieldReader(payload + b"\x07")
    reader.skip_field(wire_type)
    assert reader.read_varint32() == 7


def test_skip_group_until_matching_end():
    """Groups are skipped up to their matching end tag, nested fields included."""
    body = tag(1, 0) + varint(1) + tag(2, 2) + varint(1) + b"x" + tag(8, 4)
    reader = FieldReader(body + b"\x07")
    reader.skip_field(WireType.START_GROUP, 8)
    assert reader.read_varint32() == 7


def test_skip_group_mismatched_end_raises():
    """An end-group tag for another field is malformed."""
    reader = FieldReader(tag(9, 4))
    with pytest.raises(MalformedInputError):
        reader.skip_field(WireType.START_GROUP, 8)


def test_skip_stray_end_group_raises():
    """End-group outside a group is malformed."""
    with pytest.raises(MalformedInputError):
        FieldReader(b"").skip_field(WireType.END_GROUP, 1)


@pytest.mark.parametrize("wire_type", [6, 7])
def test_skip_unknown_wire_type_raises(wire_type):
    """Wire types 6 and 7 do not exist."""
    with pytest.raises(MalformedInputError):
        FieldReader(b"\x00" * 8).skip_field(wire_type, 1)
