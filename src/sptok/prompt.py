from enum import Enum

from .errors import ConfigError


class TaskPrompt(str, Enum):
    """
    Task prefixes prepended to text before it is embedded.

    Sources:
    - EmbeddingGemma model card: https://ai.google.dev/gemma/docs/embeddinggemma
    """

    # retrieval corpus entries
    DOCUMENT = "title: none | text: "
    # search queries
    QUERY = "task: search result | query: "

    def apply(self, text: str) -> str:
        """Return ``text`` with this prompt in front of it."""
        return self.value + text

    @classmethod
    def get(cls, name: str) -> "TaskPrompt":
        """Get prompt by name (case-insensitive)."""
        try:
            return cls[name.upper().replace("-", "_")]
        except KeyError:
            raise ConfigError(
                "unknown prompt name",
                invalid_name=name,
                available=[p.name.lower() for p in cls],
            )


def list_prompts() -> list[str]:
    """Return names of all available task prompts."""
    return [p.name.lower() for p in TaskPrompt]
