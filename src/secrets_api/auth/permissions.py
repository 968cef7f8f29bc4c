"""
secrets_api.auth.permissions

Permission-based authorization.

Responsibilities:
- Evaluate a required permission against a principal's claims, accepting both
  Auth0 encodings (one comma-joined claim, or one claim per permission).
- Aggregate handlers into named policies.
- Register the application's policies.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from secrets_api.auth.models import ClaimSet
from secrets_api.errors import require

PERMISSIONS_CLAIM = "permissions"

WRITE_SECRETS_POLICY = "WriteSecrets"
WRITE_SECRETS_PERMISSION = "write:secrets"


class AuthorizationResult(str, Enum):
    ALLOWED = "allowed"
    # Not a denial: other handlers for the same requirement may still succeed.
    NOT_MATCHED = "not_matched"


@dataclass(frozen=True, slots=True)
class PermissionRequirement:
    permission: str


class AuthorizationHandler(Protocol):
    def handle(self, claims: ClaimSet, requirement: PermissionRequirement) -> AuthorizationResult: ...


def split_permissions(values: Iterable[str]) -> list[str]:
    tokens: list[str] = []
    for value in values:
        tokens.extend(t.strip() for t in value.split(","))
    return [t for t in tokens if t]


class PermissionAuthorizationHandler:
    """
    Succeeds when any permission claim carries the exact required permission.

    Matching is exact and case-sensitive; no wildcards or prefixes.
    """

    def __init__(self, claim_type: str = PERMISSIONS_CLAIM) -> None:
        self.claim_type = claim_type

    def handle(self, claims: ClaimSet, requirement: PermissionRequirement) -> AuthorizationResult:
        require(claims, "claims")
        require(requirement, "requirement")
        if requirement.permission in split_permissions(claims.find_all(self.claim_type)):
            return AuthorizationResult.ALLOWED
        return AuthorizationResult.NOT_MATCHED


@dataclass(frozen=True, slots=True)
class AuthorizationPolicy:
    """
    Every requirement must be satisfied by at least one handler.
    """

    name: str
    requirements: tuple[PermissionRequirement, ...]
    handlers: tuple[AuthorizationHandler, ...]

    def evaluate(self, claims: ClaimSet) -> bool:
        require(claims, "claims")
        if not self.requirements or not self.handlers:
            return False
        return all(
            any(h.handle(claims, req) is AuthorizationResult.ALLOWED for h in self.handlers)
            for req in self.requirements
        )


def build_policies(
    *,
    permissions_claim: str = PERMISSIONS_CLAIM,
    extra_handlers: Sequence[AuthorizationHandler] = (),
) -> dict[str, AuthorizationPolicy]:
    handlers: tuple[AuthorizationHandler, ...] = (
        PermissionAuthorizationHandler(permissions_claim),
        *extra_handlers,
    )
    return {
        WRITE_SECRETS_POLICY: AuthorizationPolicy(
            name=WRITE_SECRETS_POLICY,
            requirements=(PermissionRequirement(WRITE_SECRETS_PERMISSION),),
            handlers=handlers,
        ),
    }


# --- Module Notes -----------------------------------------------------------
# Policies are built once in `api.app.create_app` and looked up by name from
# `auth.deps.require_policy`.
