"""Base exception classes for domain-level errors."""

from __future__ import annotations


class DomainError(Exception):
    """Base exception for all domain-level errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when user input fails validation before any external call."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class EngineNotReadyError(DomainError):
    """Raised when the playback engine handle is requested before it exists."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "Playback engine is not initialized", code="ENGINE_NOT_READY")
