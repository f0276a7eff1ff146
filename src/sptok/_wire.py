"""
Cursor over protobuf wire-format bytes.

Only the primitives needed to walk a SentencePiece ``ModelProto`` are
implemented: varints, little-endian float32, length-delimited payloads and
field skipping for every wire type.
"""

import struct
from enum import IntEnum
from typing import Final

from .errors import MalformedInputError
from .types import FieldNumber, Tag

# uint32 varints never need more than 5 groups of 7 bits
MAX_VARINT32_BYTES: Final[int] = 5
# groups can nest; stop before the interpreter's recursion limit does
MAX_GROUP_DEPTH: Final[int] = 64

_FLOAT32: Final[struct.Struct] = struct.Struct("<f")


class WireType(IntEnum):
    """Encoding category carried in the low three bits of a tag."""

    VARINT = 0
    FIXED64 = 1
    LENGTH_DELIMITED = 2
    START_GROUP = 3
    END_GROUP = 4
    FIXED32 = 5


class FieldReader:
    """
    Forward-only reader over an immutable byte buffer.

    Nested messages are bounded with :meth:`push_limit` / :meth:`pop_limit`
    so a sub-message can never read past its declared length. Every decoding
    failure raises :class:`MalformedInputError`.
    """

    def __init__(self, data: bytes) -> None:
        self._buf = memoryview(bytes(data))
        self._pos = 0
        # end offset of the innermost active limit
        self._limit = len(self._buf)
        self._limits: list[int] = []

    def is_at_end(self) -> bool:
        """Return ``True`` when the cursor reached the active limit."""
        return self._pos >= self._limit

    def bytes_until_limit(self) -> int:
        """Return the number of bytes left before the active limit."""
        return self._limit - self._pos

    def push_limit(self, length: int) -> None:
        """
        Restrict reads to the next ``length`` bytes.

        :raises MalformedInputError: If the new limit would extend past the current one.
        """
        if length < 0 or length > self.bytes_until_limit():
            raise MalformedInputError(
                f"sub-message length {length} exceeds remaining {self.bytes_until_limit()} bytes",
                position=self._pos,
            )
        self._limits.append(self._limit)
        self._limit = self._pos + length

    def pop_limit(self) -> None:
        """Restore the limit that was active before the last :meth:`push_limit`."""
        if not self._limits:
            raise MalformedInputError("pop_limit called without an active limit")
        self._limit = self._limits.pop()

    def read_tag(self) -> Tag:
        """
        Read a field tag and split it into ``(field_number, wire_type)``.

        :raises MalformedInputError: At the end of input or for field number 0.
        """
        if self.is_at_end():
            raise MalformedInputError("unexpected end of input reading tag", position=self._pos)
        start = self._pos
        value = self.read_varint32()
        field_number = value >> 3
        if field_number == 0:
            raise MalformedInputError("invalid tag with field number 0", position=start)
        return field_number, value & 0x7

    def read_varint32(self) -> int:
        """
        Decode a base-128 varint as an unsigned 32-bit integer.

        :raises MalformedInputError: If the varint is longer than 5 bytes or truncated.
        """
        start = self._pos
        result = 0
        shift = 0
        for _ in range(MAX_VARINT32_BYTES):
            if self._pos >= self._limit:
                raise MalformedInputError("truncated varint", position=start)
            byte = self._buf[self._pos]
            self._pos += 1
            result |= (byte & 0x7F) << shift
            # high bit clear marks the last group
            if not byte & 0x80:
                return result & 0xFFFFFFFF
            shift += 7
        raise MalformedInputError("varint exceeds 5 bytes", position=start)

    def read_float32(self) -> float:
        """
        Read a little-endian IEEE 754 single-precision float.

        :raises MalformedInputError: If fewer than 4 bytes remain.
        """
        raw = self._read_raw(_FLOAT32.size)
        return _FLOAT32.unpack(raw)[0]

    def read_string(self, length: int) -> str:
        """
        Read ``length`` bytes and decode them as strict UTF-8.

        :raises MalformedInputError: If the bytes are truncated or not valid UTF-8.
        """
        start = self._pos
        raw = self._read_raw(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedInputError(f"invalid utf-8 ({e.reason})", position=start) from e

    def read_length_delimited_string(self) -> str:
        """Read a varint length prefix followed by that many UTF-8 bytes."""
        return self.read_string(self.read_varint32())

    def skip_field(self, wire_type: int, field_number: FieldNumber | None = None) -> None:
        """
        Consume and discard one field payload of the given wire type.

        ``field_number`` is only needed for groups, whose end tag must match
        the start tag.

        :raises MalformedInputError: For unknown wire types, stray end-group tags
            or payloads running past the active limit.
        """
        self._skip_field(wire_type, field_number, depth=0)

    def _skip_field(
        self, wire_type: int, field_number: FieldNumber | None, depth: int
    ) -> None:
        match wire_type:
            case WireType.VARINT:
                self._skip_varint()
            case WireType.FIXED64:
                self._read_raw(8)
            case WireType.LENGTH_DELIMITED:
                self._read_raw(self.read_varint32())
            case WireType.FIXED32:
                self._read_raw(4)
            case WireType.START_GROUP:
                self._skip_group(field_number, depth + 1)
            case WireType.END_GROUP:
                raise MalformedInputError(
                    "end-group tag without matching start-group",
                    position=self._pos,
                    field_number=field_number,
                )
            case _:
                raise MalformedInputError(
                    f"unknown wire type {wire_type}",
                    position=self._pos,
                    field_number=field_number,
                )

    def _skip_group(self, field_number: FieldNumber | None, depth: int) -> None:
        """Skip nested fields up to the end-group tag closing ``field_number``."""
        if depth > MAX_GROUP_DEPTH:
            raise MalformedInputError("groups nested too deeply", position=self._pos)
        while True:
            inner_field, inner_type = self.read_tag()
            if inner_type == WireType.END_GROUP:
                if field_number is not None and inner_field != field_number:
                    raise MalformedInputError(
                        "mismatched end-group tag",
                        position=self._pos,
                        field_number=inner_field,
                    )
                return
            self._skip_field(inner_type, inner_field, depth)

    def _skip_varint(self) -> None:
        start = self._pos
        # a skipped varint may legitimately be a full 64-bit value
        for _ in range(10):
            if self._pos >= self._limit:
                raise MalformedInputError("truncated varint", position=start)
            byte = self._buf[self._pos]
            self._pos += 1
            if not byte & 0x80:
                return
        raise MalformedInputError("varint exceeds 10 bytes", position=start)

    def _read_raw(self, length: int) -> bytes:
        """Return the next ``length`` bytes and advance the cursor."""
        if length > self.bytes_until_limit():
            raise MalformedInputError(
                f"need {length} bytes but only {self.bytes_until_limit()} remain",
                position=self._pos,
            )
        raw = self._buf[self._pos : self._pos + length].tobytes()
        self._pos += length
        return raw


__all__ = ["FieldReader", "WireType"]
