"""Ownership Policy - tests for pure mutate-permission decisions.

Tests cover:
    - owner may mutate, stranger may not
    - admin may mutate anything
    - ensure_can_mutate raises ForbiddenError (never NotFoundError) with context
"""

import pytest

from trouver.core.access_policy import can_mutate, ensure_can_mutate
from trouver.core.domain_types import Principal, Role, UserId
from trouver.core.errors import ForbiddenError, NotFoundError


OWNER = Principal(UserId("u1"))
STRANGER = Principal(UserId("u2"))
ADMIN = Principal(UserId("root"), Role.ADMIN)


# ─── can_mutate ──────────────────────────────────────────────────

def test_owner_can_mutate():
    assert can_mutate(OWNER, "u1") is True


def test_stranger_cannot_mutate():
    assert can_mutate(STRANGER, "u1") is False


@pytest.mark.parametrize("owner_id", ["u1", "u2", "someone-else", ""])
def test_admin_can_mutate_regardless_of_owner(owner_id):
    assert can_mutate(ADMIN, owner_id) is True


def test_owner_match_is_exact():
    assert can_mutate(Principal(UserId("U1")), "u1") is False


# ─── ensure_can_mutate ───────────────────────────────────────────

def test_ensure_passes_for_owner():
    ensure_can_mutate(OWNER, "u1", "Place", "p1")


def test_ensure_raises_forbidden_for_stranger():
    with pytest.raises(ForbiddenError) as exc_info:
        ensure_can_mutate(STRANGER, "u1", "Place", "p1")
    error = exc_info.value
    assert not isinstance(error, NotFoundError)
    assert error.http_status == 403
    assert error.code == "FORBIDDEN"
    assert error.context.resource_id == "p1"
    assert error.context.principal_id == "u2"
