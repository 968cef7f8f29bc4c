"""
secrets_api.errors

Error kinds shared by the store, encryption and service layers.

Responsibilities:
- Name the three failure kinds the HTTP layer knows how to map.
"""

from __future__ import annotations

from typing import Literal


class SecretsApiError(Exception):
    pass


class InvalidArgumentError(SecretsApiError, ValueError):
    """A required input was missing at a component boundary. Always a caller bug."""


class EncryptionError(SecretsApiError):
    """
    Ciphertext is corrupt, tampered, or was produced under another key/purpose
    (or encryption itself failed). Retrying will not help.
    """

    def __init__(self, message: str, *, operation: Literal["encrypt", "decrypt"]) -> None:
        super().__init__(message)
        self.operation = operation


class OperationError(SecretsApiError):
    """Any other invalid-state condition inside a service or store."""


def require(value: object, name: str) -> None:
    if value is None:
        raise InvalidArgumentError(f"{name} must not be None")


# --- Module Notes -----------------------------------------------------------
# Status mapping lives in `api.errors`; nothing below the HTTP layer knows about status codes.
