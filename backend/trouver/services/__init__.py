"""Service Layer - orchestrates validation, ownership policy and repositories.

Invariants:
    - Services are the only callers of repositories
    - Every public coroutine runs under one deadline covering all of its store calls
"""
