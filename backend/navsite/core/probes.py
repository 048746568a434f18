"""
Health probe functions for dependency checks.

Each probe function:
- Returns bool (True = healthy, False = unhealthy)
- Handles exceptions gracefully
- Includes appropriate timeouts
"""

import asyncio

from navsite.core.database import ping
from navsite.core.logging_config import get_logger


logger = get_logger(__name__)


async def check_storage(timeout_seconds: float = 2.0) -> bool:
    """
    Check that the database behind the key-value store answers.

    Args:
        timeout_seconds: Maximum time to wait for response (default: 2.0)

    Returns:
        True if the database is reachable and healthy, False otherwise
    """
    try:
        await asyncio.wait_for(ping(), timeout=timeout_seconds)
        return True
    except asyncio.TimeoutError:
        logger.warning("Storage probe timed out", extra={"timeout_s": timeout_seconds})
        return False
    except Exception as e:
        # Any connection or query failure means not ready
        logger.warning(
            "Storage probe failed",
            extra={"exception_type": type(e).__name__},
        )
        return False
