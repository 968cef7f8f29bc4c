"""
secrets_api.security.encryption

Envelope encryption for values stored at rest.

Responsibilities:
- Own master key material and derive purpose-bound protectors (`KeyProvider`).
- Encrypt plaintext to an opaque text token and reverse it (`EncryptionService`).
- Report corrupt/tampered/foreign tokens as `EncryptionError`, never as wrong plaintext.

Token format is Fernet (AES-128-CBC + HMAC-SHA256, URL-safe base64).
"""

from __future__ import annotations

import base64
import os
from collections.abc import Sequence

from cryptography.fernet import Fernet, InvalidToken, MultiFernet
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from secrets_api.errors import EncryptionError, InvalidArgumentError, require
from secrets_api.observability.logging import get_logger
from secrets_api.settings import Settings

log = get_logger(__name__)

MASTER_KEY_SIZE = 32
_KDF_SALT = b"secrets-api.data-protection.v1"


class KeyProvider:
    """
    Holds master keys and hands out protectors bound to a purpose string.

    Tokens produced for one purpose cannot be opened by a protector created
    for another purpose, because each purpose gets its own HKDF-derived key.
    """

    def __init__(self, master_keys: Sequence[str | bytes] | None = None) -> None:
        keys = [k.encode("utf-8") if isinstance(k, str) else k for k in master_keys or ()]
        if not keys:
            # Per-process key material: anything encrypted dies with the process.
            keys = [os.urandom(MASTER_KEY_SIZE)]
        if any(not k for k in keys):
            raise InvalidArgumentError("master keys must not be empty")
        self._master_keys: tuple[bytes, ...] = tuple(keys)

    @classmethod
    def from_settings(cls, settings: Settings) -> KeyProvider:
        return cls(settings.data_protection_keys)

    def create_protector(self, purpose: str) -> MultiFernet:
        require(purpose, "purpose")
        # First key encrypts; all keys are tried on decrypt (rotation).
        return MultiFernet([Fernet(_derive_key(k, purpose)) for k in self._master_keys])


def _derive_key(master_key: bytes, purpose: str) -> bytes:
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=32,
        salt=_KDF_SALT,
        info=purpose.encode("utf-8"),
    )
    return base64.urlsafe_b64encode(hkdf.derive(master_key))


class EncryptionService:
    def __init__(self, provider: KeyProvider, *, purpose: str = "SecretProtection") -> None:
        require(provider, "provider")
        self._protector = provider.create_protector(purpose)
        self.purpose = purpose

    async def encrypt(self, plaintext: str) -> str:
        _require_text(plaintext, "plaintext")
        log.debug("encrypting_data", purpose=self.purpose)
        try:
            return self._protector.encrypt(plaintext.encode("utf-8")).decode("ascii")
        except UnicodeEncodeError as e:
            log.error("encryption_failed", purpose=self.purpose, error=type(e).__name__)
            raise EncryptionError("failed to encrypt data", operation="encrypt") from e

    async def decrypt(self, token: str) -> str:
        _require_text(token, "token")
        log.debug("decrypting_data", purpose=self.purpose)
        try:
            return self._protector.decrypt(token.encode("ascii")).decode("utf-8")
        except (InvalidToken, UnicodeError) as e:
            # Never log the token itself.
            log.error(
                "decryption_failed",
                purpose=self.purpose,
                error=type(e).__name__,
                reason="data may be corrupted or tampered",
            )
            raise EncryptionError("failed to decrypt data", operation="decrypt") from e


def _require_text(value: object, name: str) -> None:
    require(value, name)
    if not isinstance(value, str):
        raise InvalidArgumentError(f"{name} must be a string")


# --- Module Notes -----------------------------------------------------------
# Rotation/storage of master keys is the KeyProvider's concern only; the service
# never sees raw key bytes.
