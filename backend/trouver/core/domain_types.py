"""Domain Types - identity aliases, roles and the request principal.

Invariants:
    - PlaceId, ReviewId, UserId are opaque strings assigned by the core, never by the store
    - Role is a closed Enum; anything that is not exactly "admin" resolves to Role.USER
    - Principal is immutable and threaded explicitly through every mutating call

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Role.parse accepts arbitrary claim values so a malformed claim degrades to
      least privilege instead of failing at runtime
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import uuid4


# ─── Identity Types ──────────────────────────────────────────────

PlaceId = NewType("PlaceId", str)
ReviewId = NewType("ReviewId", str)
UserId = NewType("UserId", str)


def new_document_id() -> str:
    """Fresh opaque identifier for a new document."""
    return str(uuid4())


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Caller roles recognised by the ownership policy."""
    ADMIN = "admin"
    USER = "user"

    @classmethod
    def parse(cls, raw: object) -> "Role":
        if isinstance(raw, str) and raw.strip().lower() == cls.ADMIN.value:
            return cls.ADMIN
        return cls.USER


# ─── Principal ───────────────────────────────────────────────────

@dataclass(frozen=True)
class Principal:
    """Authenticated caller, already verified by the identity provider."""
    user_id: UserId
    role: Role = Role.USER

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
