"""Operation Deadline - bounds a whole service operation in time.

Invariants:
    - The deadline starts when the operation starts and covers every store call in it
    - Expiry raises OperationTimeoutError, never PersistenceError
    - No retry: callers decide whether to try again
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from trouver.core.errors import OperationTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def run_with_deadline(
    operation: str, awaitable: Awaitable[T], timeout_seconds: float,
) -> T:
    """Await `awaitable`, cancelling it once `timeout_seconds` elapse."""
    try:
        return await asyncio.wait_for(awaitable, timeout=timeout_seconds)
    except asyncio.TimeoutError as e:
        logger.error(
            f"Operation '{operation}' timed out",
            extra={"operation": operation, "timeout_seconds": timeout_seconds},
        )
        raise OperationTimeoutError(operation, timeout_seconds) from e
