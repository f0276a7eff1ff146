"""Factory functions for creating tokenizers and counters."""

import logging
from pathlib import Path
from typing import Final, Literal

from ._models.approx import ApproxTokenizer
from ._models.base import Tokenizer
from ._models.greedy import GreedyTokenizer
from ._parser import parse_model
from .counter import TokenCounter
from .errors import ConfigError, ModelLoadError
from .prompt import TaskPrompt

log = logging.getLogger(__name__)


# Tokenizer factory
# ===================================================================================

TokenizerName = Literal["greedy", "approx"]

_TOKENIZER_REGISTRY: Final[dict[str, type[Tokenizer]]] = {
    "greedy": GreedyTokenizer,
    "approx": ApproxTokenizer,
}


def list_tokenizers() -> list[str]:
    """Return available tokenizer names."""
    return list(_TOKENIZER_REGISTRY.keys())


def load(data: bytes) -> GreedyTokenizer:
    """
    Build a greedy tokenizer from serialized SentencePiece model bytes.

    Never fails: malformed bytes yield a tokenizer backed by the fallback
    vocabulary, which counts with the character estimate.

    .. code-block:: python

        tok = load(Path("tokenizer.model").read_bytes())
        tok.count("Hello world").count
    """
    result = parse_model(data)
    if result.ok:
        log.info(f"loaded vocabulary with {len(result.vocab)} pieces")
    else:
        log.info(f"loaded fallback vocabulary ({result.reason})")
    return GreedyTokenizer(result.vocab)


def from_pretrained(model_path: str | Path) -> GreedyTokenizer:
    """
    Load a greedy tokenizer from a ``sentencepiece.model`` file on disk.

    :param model_path: Path to the serialized model.
    :return: Tokenizer backed by the parsed or fallback vocabulary.
    :raises ModelLoadError: If the path does not exist or is not a file.
    """
    path = Path(model_path)

    if not path.exists():
        raise ModelLoadError("model filepath does not exist", model_path=str(path))

    if not path.is_file():
        raise ModelLoadError("model path is not a file", model_path=str(path))

    log.info(f"loading model from {path}")
    return load(path.read_bytes())


def get_tokenizer(name: TokenizerName = "greedy", data: bytes | None = None) -> Tokenizer:
    """
    Create a tokenizer by registry name.

    :param name: "greedy" segments against the model in ``data``; "approx"
                 only estimates from text length and ignores ``data``.
    :param data: Serialized model bytes for the greedy tokenizer.
    :raises ConfigError: If the name is unknown.
    """
    if name not in _TOKENIZER_REGISTRY:
        raise ConfigError(
            "unknown tokenizer name",
            invalid_name=name,
            available=list_tokenizers(),
        )

    if name == "greedy":
        return load(data or b"")

    return _TOKENIZER_REGISTRY[name]()


def get_counter(model_path: str | Path | None = None) -> TokenCounter:
    """
    Create a token counter for a model file, or an estimating one without a model.

    :raises ModelLoadError: If ``model_path`` is given but cannot be loaded.
    """
    if model_path is None:
        return TokenCounter(ApproxTokenizer())
    return TokenCounter(from_pretrained(model_path))


# ===================================================================================


# Prompt factory
# ===================================================================================


def get_prompt(name: str) -> TaskPrompt:
    """
    Look up a task prompt by name ("document" or "query").

    :raises ConfigError: If the name is unknown.
    """
    return TaskPrompt.get(name)


# ===================================================================================
