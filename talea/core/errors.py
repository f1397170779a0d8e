"""Exceptions raised by Talea services."""

from __future__ import annotations


class TaleaError(RuntimeError):
    """Base class for Talea service errors."""


class NotReadyError(TaleaError):
    """Raised when an operation runs before the user identity is available."""


class StorageError(TaleaError):
    """Raised when the key-value store fails to complete a write."""


class SignInRequiredError(TaleaError):
    """Raised when a feature needs a signed-in, non-anonymous user."""


class CompanionError(TaleaError):
    """Raised when the AI companion request fails."""


class InvalidQuestionError(TaleaError, ValueError):
    """Raised when the companion is asked an empty question."""


__all__ = [
    "CompanionError",
    "InvalidQuestionError",
    "NotReadyError",
    "SignInRequiredError",
    "StorageError",
    "TaleaError",
]
