# ================================================================================
# Wait Helpers Module
# ================================================================================
#
# Fixed-interval polling used by every blocking operation in pagekit
# (when_present, when_visible, when_not_visible, title and element waits).
#
# A wait polls its predicate until it holds or the timeout elapses. There is
# no cancellation other than the timeout and no retry after it.
#
# Usage:
#   wait_until(lambda: handle.exist(), timeout=5, message="Element not present")
#   wait_while(lambda: handle.visible(), timeout=5)
#
# ================================================================================

import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

import allure
from loguru import logger

from pagekit.common import get_config

from .errors import ElementNotFoundError, WaitTimeoutError


T = TypeVar('T')


@dataclass
class WaitConfig:
    """
    Configuration for wait operations.

    Attributes:
        interval: Seconds between two polls
        timeout: Total timeout in seconds
    """
    interval: float = 0.1
    timeout: float = 5.0

    @classmethod
    def from_config(
        cls,
        timeout: Optional[float] = None,
        interval: Optional[float] = None,
    ) -> "WaitConfig":
        """Fill unset values from the `timeouts` configuration section."""
        return cls(
            interval=interval if interval is not None else float(get_config("timeouts.poll_interval", 0.1)),
            timeout=timeout if timeout is not None else float(get_config("timeouts.element", 5)),
        )


@allure.step("Wait until: {message}")
def wait_until(
    predicate: Callable[[], T],
    timeout: Optional[float] = None,
    message: Optional[str] = None,
    interval: Optional[float] = None,
) -> T:
    """
    Poll `predicate` until it returns a truthy value.

    An ElementNotFoundError raised by the predicate counts as "not yet";
    any other exception propagates immediately.

    Args:
        predicate: Zero-argument callable
        timeout: Seconds before giving up (config `timeouts.element`)
        message: Failure message; a default naming the timeout is used
        interval: Seconds between polls (config `timeouts.poll_interval`)

    Returns:
        The first truthy predicate result

    Raises:
        WaitTimeoutError: If the predicate never held within the timeout
    """
    config = WaitConfig.from_config(timeout, interval)
    deadline = time.monotonic() + config.timeout
    last_error = None

    while True:
        try:
            result = predicate()
            if result:
                return result
        except ElementNotFoundError as e:
            last_error = e

        if time.monotonic() >= deadline:
            error_msg = message or f"Timed out after {config.timeout} seconds"
            if last_error is not None:
                error_msg = f"{error_msg} (last error: {last_error})"
            logger.error(error_msg)
            raise WaitTimeoutError(error_msg, timeout=config.timeout)

        time.sleep(config.interval)


def wait_while(
    predicate: Callable[[], object],
    timeout: Optional[float] = None,
    message: Optional[str] = None,
    interval: Optional[float] = None,
) -> bool:
    """
    Poll `predicate` until it returns a falsy value.

    Raises:
        WaitTimeoutError: If the predicate still held at the timeout
    """
    return wait_until(lambda: not predicate(), timeout, message, interval)


__all__ = [
    "WaitConfig",
    "WaitTimeoutError",
    "wait_until",
    "wait_while",
]
