# src/walkin/errors.py
from __future__ import annotations


class WalkinError(Exception):
    """Base class for errors raised by the walkin package."""


class ValidationError(WalkinError, ValueError):
    """
    A user action or input was rejected.
    Raised before any state change; the message is safe to show the user.
    """


class ProviderLockedError(ValidationError):
    """Name/rate edits were attempted on a submitted provider."""


class UnknownProviderError(ValidationError):
    def __init__(self, provider_id: int) -> None:
        super().__init__(f"Unknown provider id: {provider_id}")
        self.provider_id = provider_id


__all__ = [
    "WalkinError",
    "ValidationError",
    "ProviderLockedError",
    "UnknownProviderError",
]
