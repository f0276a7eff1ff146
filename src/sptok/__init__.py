"""sptok: SentencePiece vocabulary parsing and token counting."""

from ._models.base import Tokenizer, TokenCount
from ._models.approx import ApproxTokenizer
from ._models.greedy import GreedyTokenizer
from ._approx import (
    approximate_count,
    disable_forced_approximation,
    enable_forced_approximation,
)
from ._parser import Fallback, ParseResult, Parsed, parse_model
from .counter import TokenCounter
from .factory import (
    from_pretrained,
    get_counter,
    get_prompt,
    get_tokenizer,
    list_tokenizers,
    load,
)
from .prompt import TaskPrompt, list_prompts
from .vocab import Vocabulary

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("sptok")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "Tokenizer",
    "TokenCount",
    "GreedyTokenizer",
    "ApproxTokenizer",
    "TokenCounter",
    "Vocabulary",
    "ParseResult",
    "Parsed",
    "Fallback",
    "TaskPrompt",
    "parse_model",
    "load",
    "from_pretrained",
    "get_tokenizer",
    "get_counter",
    "get_prompt",
    "approximate_count",
    "enable_forced_approximation",
    "disable_forced_approximation",
    "list_tokenizers",
    "list_prompts",
]
