"""
Base tokenizer interface for token-counting implementations.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Self

from .._approx import SPECIAL_TOKEN_OVERHEAD, approximate_count
from ..errors import TokenizerClosedError
from ..vocab import Vocabulary

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TokenCount:
    """A token count and whether it came from the character estimate."""

    count: int
    approximated: bool = False
    reason: str | None = None


class Tokenizer(ABC):
    """
    Abstract base class for tokenizers that count tokens against a vocabulary.

    Owns its vocabulary and releases it on :meth:`close`; counting afterwards
    raises :class:`TokenizerClosedError`.
    """

    TOKENIZER_TYPE: str = "base"

    def __init__(self, vocab: Vocabulary) -> None:
        super().__init__()
        self.vocab = vocab
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def count(self, text: str) -> TokenCount:
        """
        Count the tokens of ``text`` including BOS and EOS.

        :raises TokenizerClosedError: If the tokenizer has been closed.
        """
        if self._closed:
            raise TokenizerClosedError(
                f"{self.__class__.__name__} is closed and cannot count tokens"
            )
        if not text:
            return TokenCount(SPECIAL_TOKEN_OVERHEAD)
        return self._count_impl(text)

    @abstractmethod
    def _count_impl(self, text: str) -> TokenCount:
        """Subclass-specific counting of non-empty text."""
        ...

    def count_batch(self, texts: list[str]) -> list[TokenCount]:
        """Count tokens for each text in order."""
        return [self.count(text) for text in texts]

    def vocab_size(self) -> int:
        """Return the number of pieces in the vocabulary."""
        return len(self.vocab)

    def _approximate(self, text: str, reason: str) -> TokenCount:
        """Fall back to the character estimate and record why."""
        log.debug(f"approximating {len(text)} chars: {reason}")
        return TokenCount(approximate_count(text), approximated=True, reason=reason)

    def close(self) -> None:
        """Release the vocabulary. Safe to call more than once."""
        if self._closed:
            return
        self.vocab.clear()
        self._closed = True
        log.debug(f"{self.__class__.__name__} closed")

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
