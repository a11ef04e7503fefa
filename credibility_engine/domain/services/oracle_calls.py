"""Caller-side timeout and failure boundary for oracle calls."""

import asyncio
import logging
from typing import Awaitable

from ..models.oracle_result import Err, OracleResult

logger = logging.getLogger(__name__)

DEFAULT_ORACLE_TIMEOUT = 60.0


async def call_oracle(
    operation: str,
    call: Awaitable[OracleResult],
    timeout: float = DEFAULT_ORACLE_TIMEOUT,
) -> OracleResult:
    """Await an oracle call, turning timeouts and exceptions into ``Err``.

    Args:
        operation: Name of the call, for logging
        call: The pending oracle call
        timeout: Seconds to wait before giving up

    Returns:
        The oracle's result, or ``Err`` describing the failure
    """
    try:
        result = await asyncio.wait_for(call, timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f"⏱️ Oracle {operation} timed out after {timeout:.1f}s")
        return Err(f"{operation} timed out after {timeout:.1f}s")
    except Exception as e:
        logger.warning(f"⚠️ Oracle {operation} failed: {type(e).__name__}: {e}")
        return Err(f"{operation} failed: {e}")

    if not result.is_ok:
        logger.warning(f"⚠️ Oracle {operation} returned an error: {result.reason}")
    return result
