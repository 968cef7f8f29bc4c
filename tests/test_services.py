"""
tests.test_services

Names/Secrets domain services over real in-memory collaborators.
"""

from __future__ import annotations

import asyncio

import pytest

from secrets_api.errors import EncryptionError, InvalidArgumentError
from secrets_api.security.encryption import EncryptionService, KeyProvider
from secrets_api.services.names_service import NamesService
from secrets_api.services.secrets_service import SecretsService
from secrets_api.storage.user_store import UserKeyedStore


@pytest.fixture
def names() -> NamesService:
    return NamesService(store=UserKeyedStore())


@pytest.fixture
def secret_store() -> UserKeyedStore[str]:
    return UserKeyedStore()


@pytest.fixture
def encryption() -> EncryptionService:
    return EncryptionService(KeyProvider(["service-test-key"]))


@pytest.fixture
def secrets(secret_store: UserKeyedStore[str], encryption: EncryptionService) -> SecretsService:
    return SecretsService(store=secret_store, encryption=encryption)


@pytest.mark.asyncio
async def test_names_add_and_list(names: NamesService) -> None:
    assert await names.add_name("user-a", "Jane Smith") == "Jane Smith"
    assert await names.get_names("user-a") == ["Jane Smith"]
    assert await names.get_names("user-b") == []


@pytest.mark.asyncio
async def test_names_propagate_invalid_argument(names: NamesService) -> None:
    with pytest.raises(InvalidArgumentError):
        await names.add_name(None, "x")  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_concurrent_name_adds(names: NamesService) -> None:
    await asyncio.gather(*(names.add_name("user-a", f"name-{i}") for i in range(100)))
    assert sorted(await names.get_names("user-a")) == sorted(f"name-{i}" for i in range(100))


@pytest.mark.asyncio
async def test_secret_is_stored_encrypted(
    secrets: SecretsService, secret_store: UserKeyedStore[str]
) -> None:
    stored_id = await secrets.add_secret("user-a", "confidential-data")

    assert stored_id != "confidential-data"
    assert secret_store.get_by_user_id("user-a") == (stored_id,)
    assert await secrets.get_secrets("user-a") == ["confidential-data"]


@pytest.mark.asyncio
async def test_secrets_are_per_user(secrets: SecretsService) -> None:
    await secrets.add_secret("user-a", "a-secret")
    await secrets.add_secret("user-b", "b-secret")
    assert await secrets.get_secrets("user-a") == ["a-secret"]
    assert await secrets.get_secrets("user-b") == ["b-secret"]
    assert await secrets.get_secrets("user-c") == []


@pytest.mark.asyncio
async def test_one_corrupt_secret_fails_the_whole_read(
    secrets: SecretsService, secret_store: UserKeyedStore[str]
) -> None:
    await secrets.add_secret("user-a", "fine")
    secret_store.add("user-a", "corrupted-token")

    with pytest.raises(EncryptionError):
        await secrets.get_secrets("user-a")


@pytest.mark.asyncio
async def test_secrets_from_another_key_fail(secret_store: UserKeyedStore[str]) -> None:
    writer = SecretsService(
        store=secret_store, encryption=EncryptionService(KeyProvider(["key-one"]))
    )
    reader = SecretsService(
        store=secret_store, encryption=EncryptionService(KeyProvider(["key-two"]))
    )
    await writer.add_secret("user-a", "confidential-data")

    with pytest.raises(EncryptionError):
        await reader.get_secrets("user-a")


@pytest.mark.asyncio
async def test_add_secret_rejects_none(secrets: SecretsService) -> None:
    with pytest.raises(InvalidArgumentError):
        await secrets.add_secret("user-a", None)  # type: ignore[arg-type]
