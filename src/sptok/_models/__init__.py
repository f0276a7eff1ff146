"""Tokenizer implementations for counting SentencePiece tokens."""

from .base import Tokenizer, TokenCount
from .approx import ApproxTokenizer
from .greedy import GreedyTokenizer


__all__ = ["Tokenizer", "TokenCount", "ApproxTokenizer", "GreedyTokenizer"]
