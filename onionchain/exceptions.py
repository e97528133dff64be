"""Shared exception types for onionchain."""


class OnionchainError(Exception):
    """Base exception for all onionchain errors."""


class InvalidArgumentError(OnionchainError, TypeError):
    """compose() received a chain it cannot dispatch."""

    def __init__(self, message: str, *, kind: str, position: int | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.position = position


class ReentrantNextError(OnionchainError):
    """A middleware called its continuation more than once."""

    def __init__(self, index: int) -> None:
        super().__init__("next() called multiple times")
        self.index = index
