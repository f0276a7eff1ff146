"""Token counting entry point used before text is sent to an embedding model."""

import logging
from typing import Self

from ._approx import approximate_count
from ._models.base import Tokenizer, TokenCount
from .errors import TokenizerClosedError
from .prompt import TaskPrompt

log = logging.getLogger(__name__)


class TokenCounter:
    """
    Counts tokens for text, optionally with a task prompt in front.

    Counting always yields a number: unexpected tokenizer failures are logged
    and replaced by the character estimate. The only error that escapes is
    :class:`TokenizerClosedError`, raised once the counter has been closed.
    """

    def __init__(self, tokenizer: Tokenizer) -> None:
        self.tokenizer = tokenizer

    def count(
        self,
        text: str,
        with_prompt: bool = False,
        prompt: TaskPrompt = TaskPrompt.DOCUMENT,
    ) -> TokenCount:
        """
        Count tokens and report whether the result was estimated.

        :param text: Text to count.
        :param with_prompt: Prepend ``prompt`` before counting.
        :param prompt: Task prompt applied when ``with_prompt`` is ``True``.
        :raises TokenizerClosedError: If the counter has been closed.
        """
        if with_prompt:
            text = prompt.apply(text)
        try:
            return self.tokenizer.count(text)
        except TokenizerClosedError:
            raise
        except Exception as e:
            log.warning(f"token counting failed, using character estimate: {e!r}")
            return TokenCount(
                approximate_count(text),
                approximated=True,
                reason=f"tokenizer error: {e}",
            )

    def count_tokens(
        self,
        text: str,
        with_prompt: bool = False,
        prompt: TaskPrompt = TaskPrompt.DOCUMENT,
    ) -> int:
        """Return the token count of ``text``; see :meth:`count`."""
        return self.count(text, with_prompt=with_prompt, prompt=prompt).count

    def count_tokens_batch(
        self,
        texts: list[str],
        with_prompt: bool = False,
        prompt: TaskPrompt = TaskPrompt.DOCUMENT,
    ) -> list[int]:
        """Return the token count of each text in order."""
        return [self.count_tokens(t, with_prompt=with_prompt, prompt=prompt) for t in texts]

    def close(self) -> None:
        """Close the underlying tokenizer."""
        self.tokenizer.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
