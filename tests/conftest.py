import pytest

import sptok
from sptok._approx import disable_forced_approximation

from _protobuf import BYTE_PIECES, length_delimited, model

WORD_PIECES = [
    "▁hello",
    "▁world",
    "▁he",
    "llo",
    "o",
    "▁the",
    "▁cat",
    "s",
    "▁" + "a" * 16,
    "▁" + "b" * 17,
]


@pytest.fixture(autouse=True)
def _reset_forced_approximation(monkeypatch):
    """Keep the process-wide approximation switch off between tests."""
    monkeypatch.delenv("SPTOK_FORCE_APPROXIMATION", raising=False)
    disable_forced_approximation()
    yield
    disable_forced_approximation()


@pytest.fixture
def model_bytes():
    """Serialized model with byte pieces, word pieces and a trailing spec field."""
    trainer_spec = length_delimited(2, length_delimited(1, b"unigram"))
    return model(BYTE_PIECES + WORD_PIECES, trailer=trainer_spec)


@pytest.fixture
def tokenizer(model_bytes):
    """Return a greedy tokenizer over the fixture model."""
    return sptok.load(model_bytes)


@pytest.fixture
def fallback_tokenizer():
    """Return a greedy tokenizer whose model failed to parse."""
    return sptok.load(b"\xff\xff\xff")
