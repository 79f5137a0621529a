"""Document Merge - applies a partial update onto a stored document.

Invariants:
    - PURE: inputs are never mutated, a new dict is returned
    - Only keys present in `changes` are touched; absent keys keep their stored value
    - Nested mappings merge recursively; lists and scalars are replaced wholesale
    - Keys listed in `immutable` always keep the stored value
"""

from collections.abc import Iterable, Mapping
from typing import Any


def merge_changes(
    existing: Mapping[str, Any],
    changes: Mapping[str, Any],
    immutable: Iterable[str] = (),
) -> dict[str, Any]:
    """Return `existing` with `changes` applied on top."""
    locked = set(immutable)
    merged = dict(existing)
    for key, value in changes.items():
        if key in locked:
            continue
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_changes(current, value)
        else:
            merged[key] = value
    return merged
