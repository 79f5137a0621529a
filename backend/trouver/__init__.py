"""Trouver - places and reviews backend.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
