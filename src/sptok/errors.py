"""Custom exception hierarchy for sptok parsing and counting errors."""


class SpTokError(Exception):
    """Base exception for all sptok errors."""


class MalformedInputError(SpTokError):
    """Raised when a model buffer does not decode as protobuf wire data."""

    def __init__(
        self,
        message: str,
        *,
        position: int | None = None,
        field_number: int | None = None,
    ) -> None:
        """Initialize with optional cursor position and field number appended to the message."""
        extra = " "
        if position is not None:
            extra += f"(offset: {position}) "
        if field_number is not None:
            extra += f"(field: {field_number}) "
        super().__init__((message + extra).rstrip())
        self.position = position
        self.field_number = field_number


class ModelLoadError(SpTokError):
    """Raised when loading a model file fails."""

    def __init__(self, message: str, *, model_path: str | None = None) -> None:
        extra = " "
        if model_path:
            extra += f"(path: {model_path}) "
        super().__init__((message + extra).rstrip())
        self.model_path = model_path


class TokenizerClosedError(SpTokError):
    """Raised when a tokenizer is used after it has been closed."""


class ConfigError(SpTokError):
    """Raised when a tokenizer or prompt name is unknown."""

    def __init__(
        self,
        message: str,
        *,
        invalid_name: str | None = None,
        available: list[str] | None = None,
    ) -> None:
        extra = " "
        if invalid_name:
            extra += f"(available: {available}) (got {invalid_name}) "
        super().__init__((message + extra).rstrip())
        self.invalid_name = invalid_name
        self.available = available
