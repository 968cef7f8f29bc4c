"""
secrets_api.storage.user_store

Generic per-user keyed store.

Responsibilities:
- Map a user id to an append-only, insertion-ordered list of items.
- Allow concurrent writers on the same user without a caller-held lock.
- Return point-in-time snapshots that never include another user's items.
"""

from __future__ import annotations

import threading
from typing import Generic, TypeVar

from secrets_api.errors import require

T = TypeVar("T")


class _Partition(Generic[T]):
    __slots__ = ("_items", "_lock")

    def __init__(self) -> None:
        self._items: list[T] = []
        self._lock = threading.Lock()

    def append(self, item: T) -> None:
        with self._lock:
            self._items.append(item)

    def snapshot(self) -> tuple[T, ...]:
        with self._lock:
            return tuple(self._items)


class UserKeyedStore(Generic[T]):
    """
    Append-only store partitioned by user id.

    The partition map is guarded by one lock used only for get-or-create;
    each partition has its own lock for append/snapshot, so traffic for one
    user never waits on another user's writers.
    """

    def __init__(self) -> None:
        self._partitions: dict[str, _Partition[T]] = {}
        self._create_lock = threading.Lock()

    def _get_or_create(self, user_id: str) -> _Partition[T]:
        partition = self._partitions.get(user_id)
        if partition is not None:
            return partition
        with self._create_lock:
            # Re-check under the lock: a concurrent first writer may have won.
            partition = self._partitions.get(user_id)
            if partition is None:
                partition = _Partition()
                self._partitions[user_id] = partition
            return partition

    def add(self, user_id: str, item: T) -> T:
        # Empty strings are valid keys and values; only None is rejected.
        require(user_id, "user_id")
        require(item, "item")
        self._get_or_create(user_id).append(item)
        return item

    def get_by_user_id(self, user_id: str) -> tuple[T, ...]:
        require(user_id, "user_id")
        partition = self._partitions.get(user_id)
        if partition is None:
            return ()
        return partition.snapshot()

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._partitions


# --- Module Notes -----------------------------------------------------------
# One instance per item kind (names, secrets) is created in `api.app.create_app`
# and handed to the owning service; there is no module-level instance.
