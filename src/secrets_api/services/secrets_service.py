"""
secrets_api.services.secrets_service

Secrets domain service.

Responsibilities:
- Encrypt secrets before they reach the store; the store only sees ciphertext.
- Decrypt a user's secrets on read, all-or-nothing.

Note:
- The ciphertext token doubles as the stored secret's id. There is no
  separate id space.
"""

from __future__ import annotations

from secrets_api.errors import SecretsApiError
from secrets_api.observability.logging import get_logger
from secrets_api.security.encryption import EncryptionService
from secrets_api.storage.user_store import UserKeyedStore

log = get_logger(__name__)


class SecretsService:
    def __init__(
        self,
        *,
        store: UserKeyedStore[str],
        encryption: EncryptionService,
    ) -> None:
        self._store = store
        self._encryption = encryption

    async def add_secret(self, user_id: str, secret: str) -> str:
        log.info("adding_secret", user_id=user_id)
        try:
            token = await self._encryption.encrypt(secret)
            result = self._store.add(user_id, token)
        except SecretsApiError as e:
            log.error("add_secret_failed", user_id=user_id, error=type(e).__name__)
            raise
        log.info("secret_added", user_id=user_id)
        return result

    async def get_secrets(self, user_id: str) -> list[str]:
        log.info("retrieving_secrets", user_id=user_id)
        try:
            tokens = self._store.get_by_user_id(user_id)
            # One bad token fails the whole read; no partial results.
            secrets = [await self._encryption.decrypt(t) for t in tokens]
        except SecretsApiError as e:
            log.error("get_secrets_failed", user_id=user_id, error=type(e).__name__)
            raise
        log.info("secrets_retrieved", user_id=user_id, count=len(secrets))
        return secrets


# --- Module Notes -----------------------------------------------------------
# Errors are re-raised unchanged; `api.errors` maps them to HTTP responses.
