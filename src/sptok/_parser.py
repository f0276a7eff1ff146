"""Standalone SentencePiece model parsing module."""

from dataclasses import dataclass
import logging
from typing import Final

from ._decorators import measure_time
from ._wire import FieldReader, WireType
from .errors import MalformedInputError
from .types import Piece, Score
from .vocab import Vocabulary, fallback_vocab

# ModelProto.pieces
MODEL_PIECES_FIELD: Final[int] = 1
# SentencePiece.piece / SentencePiece.score
PIECE_FIELD: Final[int] = 1
SCORE_FIELD: Final[int] = 2

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Parsed:
    """The buffer decoded cleanly."""

    vocab: Vocabulary

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Fallback:
    """The buffer was malformed; ``vocab`` holds only the special entries."""

    vocab: Vocabulary
    reason: str = ""

    @property
    def ok(self) -> bool:
        return False


# outcome of parsing one model buffer
type ParseResult = Parsed | Fallback


@measure_time("model parse")
def parse_model(data: bytes) -> ParseResult:
    """
    Extract the ``(piece, score)`` entries of a serialized SentencePiece model.

    Never raises: on malformed input all progress is discarded and a
    :class:`Fallback` carrying the three special entries is returned.

    :param data: Serialized ``ModelProto`` bytes.
    :returns: :class:`Parsed` on success, :class:`Fallback` otherwise.
    """
    try:
        entries = _read_entries(FieldReader(data))
    except MalformedInputError as e:
        log.warning(f"model parsing failed, using fallback vocabulary: {e}")
        return Fallback(vocab=fallback_vocab(), reason=str(e))

    vocab = Vocabulary(entries)
    log.debug(f"parsed {len(entries)} pieces from {len(data)} bytes")
    return Parsed(vocab=vocab)


def _read_entries(reader: FieldReader) -> list[tuple[Piece, Score]]:
    """Walk the outer message and collect every non-empty piece."""
    entries: list[tuple[Piece, Score]] = []
    while not reader.is_at_end():
        field_number, wire_type = reader.read_tag()
        if (
            field_number == MODEL_PIECES_FIELD
            and wire_type == WireType.LENGTH_DELIMITED
        ):
            reader.push_limit(reader.read_varint32())
            piece, score = _read_piece(reader)
            reader.pop_limit()
            # empty pieces carry nothing to match against
            if piece:
                entries.append((piece, score))
        else:
            # trainer/normalizer specs and other metadata
            reader.skip_field(wire_type, field_number)
    return entries


def _read_piece(reader: FieldReader) -> tuple[Piece, Score]:
    """Read one ``SentencePiece`` sub-message bounded by the active limit."""
    piece = ""
    score = 0.0
    while not reader.is_at_end():
        field_number, wire_type = reader.read_tag()
        if field_number == PIECE_FIELD and wire_type == WireType.LENGTH_DELIMITED:
            piece = reader.read_length_delimited_string()
        elif field_number == SCORE_FIELD and wire_type == WireType.FIXED32:
            score = reader.read_float32()
        else:
            reader.skip_field(wire_type, field_number)
    return piece, score


__all__ = ["parse_model", "ParseResult", "Parsed", "Fallback"]
