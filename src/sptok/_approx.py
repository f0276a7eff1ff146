"""Character-length token estimate and the switch that forces it."""

import os
from typing import Final

# calibrated for English text
CHARS_PER_TOKEN: Final[float] = 3.2
# BOS + EOS
SPECIAL_TOKEN_OVERHEAD: Final[int] = 2

_forced: bool = False


def approximate_count(text: str) -> int:
    """Estimate the token count of ``text`` from its length alone."""
    return int(len(text) / CHARS_PER_TOKEN) + SPECIAL_TOKEN_OVERHEAD


def enable_forced_approximation() -> None:
    """Make every tokenizer use the character estimate instead of segmentation."""
    global _forced
    _forced = True


def disable_forced_approximation() -> None:
    """Let tokenizers segment text again when their vocabulary is usable."""
    global _forced
    _forced = False


def _is_forced() -> bool:
    """Check if approximation is forced (respects env var override)."""
    if os.environ.get("SPTOK_FORCE_APPROXIMATION", "").strip() == "1":
        return True
    return _forced
