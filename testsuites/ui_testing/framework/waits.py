"""
================================================================================
Wait Helpers
================================================================================

Polling primitives behind every explicit wait in the UI framework.

Key Features:
    - Bounded polling with a fixed interval (default 0.5s)
    - Staleness inside a predicate counts as "not yet"
    - A single named retry policy for actions racing a re-render

Usage:
    element = await wait_until(find_visible, timeout=10, description="login button")
    await with_stale_retry(lambda: click_once(selector))

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
import inspect
import time
from typing import Any, Awaitable, Callable, Optional, TypeVar, Union

from loguru import logger

from .exceptions import StaleElementError, WaitTimeoutError


T = TypeVar("T")

DEFAULT_POLL_INTERVAL = 0.5

Condition = Callable[[], Union[Any, Awaitable[Any]]]


async def wait_until(
    condition: Condition,
    timeout: float,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    description: str = "condition",
) -> Any:
    """
    Poll a condition until it returns a truthy value.

    Args:
        condition: Sync or async callable evaluated once per poll
        timeout: Deadline in seconds
        poll_interval: Delay between evaluations in seconds
        description: Human-readable name used in logs and the timeout message

    Returns:
        The first truthy value returned by the condition

    Raises:
        WaitTimeoutError: If the deadline elapses first
    """
    deadline = time.monotonic() + timeout
    last_error: Optional[BaseException] = None
    attempts = 0

    while True:
        attempts += 1
        try:
            result = condition()
            if inspect.isawaitable(result):
                result = await result
            if result:
                logger.debug(f"Wait satisfied: {description} (attempt {attempts})")
                return result
        except StaleElementError as e:
            last_error = e

        remaining = deadline - time.monotonic()
        if remaining <= 0:
            logger.debug(f"Wait timed out: {description} after {attempts} attempts")
            raise WaitTimeoutError(description, timeout, last_error)
        await asyncio.sleep(min(poll_interval, remaining))


async def with_stale_retry(
    action: Callable[[], Awaitable[T]],
    max_attempts: int = 2,
    description: str = "action",
) -> T:
    """
    Run an async action, re-running it when the target went stale.

    The action must re-resolve its element on each call. After
    ``max_attempts`` consecutive stale failures the last one propagates.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    for attempt in range(1, max_attempts + 1):
        try:
            return await action()
        except StaleElementError:
            if attempt == max_attempts:
                logger.warning(f"{description}: element still stale after {attempt} attempts")
                raise
            logger.debug(f"{description}: stale element, retrying ({attempt}/{max_attempts})")

    raise AssertionError("unreachable")


__all__ = [
    "DEFAULT_POLL_INTERVAL",
    "wait_until",
    "with_stale_retry",
]
