"""Error types raised by rowwise."""

from __future__ import annotations

from pathlib import Path


class RowwiseError(Exception):
    """Base class for all rowwise errors."""


class RegistrationNotFoundError(RowwiseError, TypeError):
    """Raised when a registration callable cannot be resolved."""

    def __init__(self, name: str, value: object = None) -> None:
        self.name = name
        self.value = value
        super().__init__(f"`{name}` is not a function")


class ArityMismatchError(RowwiseError, ValueError):
    """Raised when a row carries more arguments than the test body accepts.

    Only raised in strict mode, or when asynchronous mode is forced.
    """

    def __init__(
        self,
        row_index: int,
        row_length: int,
        arity: int,
        *,
        callback: bool = False,
    ) -> None:
        self.row_index = row_index
        self.row_length = row_length
        self.arity = arity
        self.callback = callback

        needed = f"{row_length} values"
        if callback:
            needed += " plus a completion callback"
        super().__init__(
            f"Row {row_index} has {needed} but the test body "
            f"declares only {arity} positional parameters"
        )


class ConfigError(RowwiseError):
    """Raised when the rowwise configuration cannot be loaded."""

    def __init__(self, path: Path | None, cause: Exception | None = None) -> None:
        self.path = path
        self.cause = cause

        message = "Invalid rowwise configuration"
        if path is not None:
            message += f" in {path}"
        if cause:
            message += f"\nCause: {cause}"

        super().__init__(message)


__all__ = [
    "ArityMismatchError",
    "ConfigError",
    "RegistrationNotFoundError",
    "RowwiseError",
]
