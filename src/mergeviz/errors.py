"""Custom exception hierarchy for mergeviz errors."""


class MergeVizError(Exception):
    """Base exception for all mergeviz errors."""


class InputError(MergeVizError):
    """Raised when the engine is handed source text it cannot tokenize."""

    def __init__(self, message: str, *, got_type: type | None = None) -> None:
        """Initialize with the offending type appended to the message."""
        extra = " "
        if got_type is not None:
            extra += f"(got type: {got_type.__name__}) "
        super().__init__(message + extra)
        self.got_type = got_type


class ConfigError(MergeVizError):
    """Raised when an engine or auto-play setting is out of range."""

    def __init__(
        self,
        message: str,
        *,
        value: object | None = None,
        allowed: tuple[int, int] | None = None,
    ) -> None:
        extra = " "
        if value is not None:
            extra += f"(got: {value!r}) "
        if allowed is not None:
            extra += f"(allowed: {allowed[0]}..{allowed[1]}) "
        super().__init__(message + extra)
        self.value = value
        self.allowed = allowed
