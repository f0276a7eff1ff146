"""Minimal protobuf encoder for building SentencePiece model fixtures."""

import struct


def varint(value: int) -> bytes:
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def tag(field_number: int, wire_type: int) -> bytes:
    return varint((field_number << 3) | wire_type)


def length_delimited(field_number: int, payload: bytes) -> bytes:
    return tag(field_number, 2) + varint(len(payload)) + payload


def fixed32_float(field_number: int, value: float) -> bytes:
    return tag(field_number, 5) + struct.pack("<f", value)


def piece_entry(piece: str, score: float = 0.0, piece_type: int | None = None) -> bytes:
    """Encode one ``ModelProto.pieces`` entry."""
    body = length_delimited(1, piece.encode("utf-8")) + fixed32_float(2, score)
    if piece_type is not None:
        # SentencePiece.type, ignored by the parser
        body += tag(3, 0) + varint(piece_type)
    return length_delimited(1, body)


def model(pieces: list[str] | list[tuple[str, float]], trailer: bytes = b"") -> bytes:
    """Encode a model with the given pieces followed by raw ``trailer`` bytes."""
    out = bytearray()
    for entry in pieces:
        if isinstance(entry, tuple):
            out += piece_entry(*entry)
        else:
            out += piece_entry(entry)
    return bytes(out) + trailer


# byte-fallback pieces never match plain text, they only pad a vocabulary
BYTE_PIECES = [f"<0x{b:02X}>" for b in range(256)]
