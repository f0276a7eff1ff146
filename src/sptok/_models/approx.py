"""Tokenizer that only estimates counts from text length."""

from typing import override

from ..vocab import Vocabulary, fallback_vocab
from .base import Tokenizer, TokenCount


class ApproxTokenizer(Tokenizer):
    """Character-length estimate for when no model file is available."""

    TOKENIZER_TYPE = "approx"

    def __init__(self, vocab: Vocabulary | None = None) -> None:
        super().__init__(vocab if vocab is not None else fallback_vocab())

    @override
    def _count_impl(self, text: str) -> TokenCount:
        return self._approximate(text, "character estimate")
