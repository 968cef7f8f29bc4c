"""
secrets_api.auth.models

Auth domain models.

Responsibilities:
- Represent token claims as an explicit ordered multimap (`ClaimSet`).
- Define the authenticated identity type (`Principal`) injected into endpoints.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Claim:
    type: str
    value: str


class ClaimSet:
    """
    Ordered multimap of claim type -> values.

    A principal may carry several claims of the same type; `find_all` returns
    them in the order they were added.
    """

    __slots__ = ("_claims",)

    def __init__(self, claims: Iterable[Claim] = ()) -> None:
        self._claims: tuple[Claim, ...] = tuple(claims)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> ClaimSet:
        return cls(Claim(t, v) for t, v in pairs)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> ClaimSet:
        """
        Flatten a decoded JWT payload.

        List values become one claim per element (Auth0 emits `permissions`
        as a JSON array); scalars become a single claim. Nested objects are
        kept as their string form.
        """

        claims: list[Claim] = []
        for claim_type, raw in payload.items():
            values = raw if isinstance(raw, (list, tuple)) else [raw]
            for value in values:
                if value is None:
                    continue
                claims.append(Claim(claim_type, value if isinstance(value, str) else str(value)))
        return cls(claims)

    def find_all(self, claim_type: str) -> list[str]:
        return [c.value for c in self._claims if c.type == claim_type]

    def find_first(self, claim_type: str) -> str | None:
        for c in self._claims:
            if c.type == claim_type:
                return c.value
        return None

    def __iter__(self) -> Iterator[Claim]:
        return iter(self._claims)

    def __len__(self) -> int:
        return len(self._claims)

    def __repr__(self) -> str:
        return f"ClaimSet({list(self._claims)!r})"


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity.
    """

    claims: ClaimSet
    user_id: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], *, user_id_claim: str = "sub") -> Principal:
        claims = ClaimSet.from_payload(payload)
        return cls(claims=claims, user_id=claims.find_first(user_id_claim) or None)


# --- Module Notes -----------------------------------------------------------
# Keep these models minimal; they are used across API, services and the policy layer.
