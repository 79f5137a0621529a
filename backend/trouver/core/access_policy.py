"""Ownership Policy - decides whether a principal may mutate a document.

Invariants:
    - All functions are PURE: no IO, no async, no store access
    - A principal may mutate a document iff it owns it or has Role.ADMIN
    - The owner passed in is always the STORED owner, never one taken from a request body
"""

from trouver.core.domain_types import Principal, Role
from trouver.core.errors import ForbiddenError


def can_mutate(principal: Principal, resource_owner_id: str) -> bool:
    """True when the principal owns the resource or is an admin."""
    return principal.user_id == resource_owner_id or principal.role is Role.ADMIN


def ensure_can_mutate(
    principal: Principal,
    resource_owner_id: str,
    resource_type: str,
    resource_id: str,
) -> None:
    """Raise ForbiddenError unless can_mutate() allows the operation."""
    if not can_mutate(principal, resource_owner_id):
        raise ForbiddenError(resource_type, resource_id, principal.user_id)
