"""Bounded retry with a fixed delay between attempts."""

import logging
import time
from typing import Callable, Tuple, Type, TypeVar

import requests

from massmerge.adapters.base import GitPlatformError

T = TypeVar("T")

LOG = logging.getLogger("massmerge.retry")

TRANSIENT_ERRORS: Tuple[Type[BaseException], ...] = (GitPlatformError, requests.RequestException)


def with_retry(
    func: Callable[[], T],
    attempts: int = 3,
    delay: float = 2.0,
    label: str = "request",
    errors: Tuple[Type[BaseException], ...] = TRANSIENT_ERRORS,
) -> T:
    """Call func until it succeeds or attempts are exhausted.

    The last error is re-raised unchanged.
    """
    for attempt in range(1, attempts + 1):
        try:
            return func()
        except errors as e:
            if attempt >= attempts:
                LOG.error("%s failed after %s attempts: %s", label, attempts, e)
                raise
            LOG.warning("%s failed (attempt %s/%s): %s; retrying in %ss", label, attempt, attempts, e, delay)
            time.sleep(delay)
    raise ValueError("attempts must be >= 1")
