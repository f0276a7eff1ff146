"""
Immutable SentencePiece vocabulary with exact-string lookup.
"""

import logging
from pathlib import Path
from typing import Final, Iterable

from ._sanitise import render_piece
from .types import Piece, PieceId, Score

UNK_ID: Final[PieceId] = 0
BOS_ID: Final[PieceId] = 1
EOS_ID: Final[PieceId] = 2
SPECIAL_PIECES: Final[tuple[Piece, ...]] = ("<unk>", "<s>", "</s>")

VOCAB_SUFFIX: Final[str] = ".vocab"

log = logging.getLogger(__name__)


class Vocabulary:
    """
    Ordered pieces with parallel scores.

    Ids 0, 1 and 2 are always ``<unk>``, ``<s>`` and ``</s>``; parsed entries
    follow in file order. Duplicate pieces are kept, but lookup resolves to the
    first occurrence so later copies are unreachable.
    """

    def __init__(self, entries: Iterable[tuple[Piece, Score]] = ()) -> None:
        """Build a vocabulary from parsed ``(piece, score)`` entries, after the specials."""
        pieces = list(SPECIAL_PIECES)
        scores = [0.0] * len(SPECIAL_PIECES)
        for piece, score in entries:
            pieces.append(piece)
            scores.append(score)
        self._pieces: tuple[Piece, ...] = tuple(pieces)
        self._scores: tuple[Score, ...] = tuple(scores)
        # piece -> id; first occurrence wins
        self._index: dict[Piece, PieceId] = {}
        for i, piece in enumerate(self._pieces):
            self._index.setdefault(piece, i)

    @property
    def pieces(self) -> tuple[Piece, ...]:
        return self._pieces

    @property
    def scores(self) -> tuple[Score, ...]:
        return self._scores

    def __len__(self) -> int:
        return len(self._pieces)

    def __contains__(self, piece: object) -> bool:
        return piece in self._index

    def piece_to_id(self, piece: Piece) -> PieceId | None:
        """Return the id of ``piece`` or ``None`` when it is not in the vocabulary."""
        return self._index.get(piece)

    def id_to_piece(self, piece_id: PieceId) -> Piece:
        """Return the piece stored at ``piece_id``."""
        return self._pieces[piece_id]

    def score(self, piece_id: PieceId) -> Score:
        return self._scores[piece_id]

    def clear(self) -> None:
        """Release all entries. Only used when the owning tokenizer is closed."""
        self._pieces = ()
        self._scores = ()
        self._index = {}

    def save(self, file_prefix: str) -> Path:
        """
        Write a human-readable listing of the vocabulary to ``<file_prefix>.vocab``.

        Each line holds the id, the piece with control characters escaped and
        its score. Special entries are prefixed with ``ST``.

        :param file_prefix: Path prefix for the output file.
        :return: Path of the written file.
        """
        vocab_path = Path(file_prefix).with_suffix(VOCAB_SUFFIX)
        vocab_path.parent.mkdir(parents=True, exist_ok=True)

        log.debug(f"saving vocab to {vocab_path}")

        with vocab_path.open("w", encoding="utf-8", newline="\n") as f:
            for i, (piece, score) in enumerate(zip(self._pieces, self._scores)):
                prefix = "ST " if i < len(SPECIAL_PIECES) else ""
                f.write(f"{prefix}[{i}] {render_piece(piece)} {score:g}\n")

        return vocab_path

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(size={len(self)})"


def fallback_vocab() -> Vocabulary:
    """Return the three-entry vocabulary used when a model cannot be parsed."""
    return Vocabulary()


__all__ = [
    "Vocabulary",
    "fallback_vocab",
    "UNK_ID",
    "BOS_ID",
    "EOS_ID",
    "SPECIAL_PIECES",
]
