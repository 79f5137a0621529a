"""Core Layer - pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - core/ may import schemas/ (pydantic shapes, no IO)
    - All functions outside repository_protocols are pure and deterministic
"""
