"""
secrets_api.services.names_service

Names domain service.

Responsibilities:
- Store and list plain names per user (direct delegation to the store).
"""

from __future__ import annotations

from secrets_api.errors import SecretsApiError
from secrets_api.observability.logging import get_logger
from secrets_api.storage.user_store import UserKeyedStore

log = get_logger(__name__)


class NamesService:
    def __init__(self, *, store: UserKeyedStore[str]) -> None:
        self._store = store

    async def add_name(self, user_id: str, name: str) -> str:
        log.info("adding_name", user_id=user_id)
        try:
            result = self._store.add(user_id, name)
        except SecretsApiError as e:
            log.error("add_name_failed", user_id=user_id, error=type(e).__name__)
            raise
        log.info("name_added", user_id=user_id)
        return result

    async def get_names(self, user_id: str) -> list[str]:
        log.info("retrieving_names", user_id=user_id)
        try:
            names = list(self._store.get_by_user_id(user_id))
        except SecretsApiError as e:
            log.error("get_names_failed", user_id=user_id, error=type(e).__name__)
            raise
        log.info("names_retrieved", user_id=user_id, count=len(names))
        return names
