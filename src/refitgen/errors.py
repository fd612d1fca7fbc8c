"""Exceptions raised while loading API descriptions and generating clients."""

from __future__ import annotations


class RefitgenError(Exception):
    """Base exception for refitgen errors."""


class DocumentLoadError(RefitgenError):
    """Raised when an API description cannot be read, parsed or validated."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        full_message = message if not path else f"[{path}] {message}"
        super().__init__(full_message)


class InvalidInputError(RefitgenError):
    """Raised when an operation violates a precondition of code generation."""

    def __init__(self, message: str, operation: str | None = None) -> None:
        self.operation = operation
        if operation:
            message = f"Operation '{operation}': {message}"
        super().__init__(message)
