"""Greedy longest-match SentencePiece token counter."""

from typing import Final, override
import logging

import regex as re

from .._approx import _is_forced
from ..vocab import Vocabulary
from .base import Tokenizer, TokenCount

# U+2581 LOWER ONE EIGHTH BLOCK, marks a piece that starts a word
WORD_BOUNDARY: Final[str] = "▁"
# longest span of input text tried at each position
MAX_PIECE_LENGTH: Final[int] = 16
# smaller vocabularies mean parsing did not find a real model
MIN_VOCAB_SIZE: Final[int] = 100

# ASCII whitespace only; NBSP, U+3000 and the like are ordinary characters
_WHITESPACE: Final = re.compile(r"[ \t\n\x0b\f\r]+")

log = logging.getLogger(__name__)


class GreedyTokenizer(Tokenizer):
    """
    Counts tokens by greedy longest-match segmentation.

    This approximates SentencePiece: at each position the longest vocabulary
    piece wins, rather than the best-scoring unigram segmentation. Counts are
    meant for budgeting, not for reproducing exact token ids.
    """

    TOKENIZER_TYPE = "greedy"

    def __init__(
        self,
        vocab: Vocabulary,
        *,
        max_piece_length: int = MAX_PIECE_LENGTH,
        min_vocab_size: int = MIN_VOCAB_SIZE,
    ) -> None:
        """Initialize with a parsed vocabulary and optional segmentation limits."""
        super().__init__(vocab)
        self.max_piece_length = max_piece_length
        self.min_vocab_size = min_vocab_size
        if not self.is_usable():
            log.info(
                f"vocabulary has {len(vocab)} pieces, counts will use the character estimate"
            )

    def is_usable(self) -> bool:
        """Return ``True`` when the vocabulary is large enough to segment with."""
        return len(self.vocab) >= self.min_vocab_size

    @override
    def _count_impl(self, text: str) -> TokenCount:
        if _is_forced():
            return self._approximate(text, "approximation forced")
        if not self.is_usable():
            return self._approximate(
                text, f"vocabulary has {len(self.vocab)} pieces (< {self.min_vocab_size})"
            )
        return TokenCount(self._segment(normalize(text)))

    def _segment(self, text: str) -> int:
        """Count BOS, every matched or unknown piece of ``text``, and EOS."""
        vocab = self.vocab
        n = len(text)
        # BOS
        count = 1
        i = 0
        while i < n:
            at_word_start = i == 0 or text[i - 1] == " "
            max_len = min(n - i, self.max_piece_length)
            # an unmatched character is one unknown token
            step = 1
            for length in range(max_len, 0, -1):
                candidate = text[i : i + length]
                if at_word_start:
                    candidate = WORD_BOUNDARY + candidate
                if candidate in vocab:
                    step = length
                    break
            count += 1
            i += step
        # EOS
        return count + 1


def normalize(text: str) -> str:
    """Collapse every run of ASCII whitespace into a single space."""
    return _WHITESPACE.sub(" ", text)
