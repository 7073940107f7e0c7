"""Retry helper for transient store failures on read paths."""

import logging
import time
from typing import Callable, List, Optional, TypeVar

from sqlalchemy.exc import DBAPIError, OperationalError
from sqlmodel import Session

from matchday import config
from matchday.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_BACKOFF_SECONDS = [0.05, 0.15, 0.3]


def with_store_retry(
    operation: Callable[[], T],
    max_attempts: Optional[int] = None,
    backoff_seconds: List[float] = DEFAULT_BACKOFF_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
    session: Optional[Session] = None,
) -> T:
    """
    Run a read-only store operation, retrying on connectivity errors.

    Only OperationalError and disconnect-flagged DBAPIErrors are retried.
    When `session` is given it is rolled back after every failed attempt, so
    the next attempt (or the caller) gets a usable session on a fresh connection.
    After the last attempt the failure is raised as StoreUnavailableError.
    Never wrap writes with this helper.
    """
    attempts = max(1, max_attempts or config.STORE_RETRY_ATTEMPTS)
    for attempt in range(attempts):
        try:
            return operation()
        except DBAPIError as e:
            if not isinstance(e, OperationalError) and not e.connection_invalidated:
                raise
            if session is not None:
                session.rollback()
            if attempt == attempts - 1:
                raise StoreUnavailableError(f"Store unavailable after {attempts} attempts: {e.orig}") from e
            delay = backoff_seconds[min(attempt, len(backoff_seconds) - 1)]
            logger.warning(f"Store retry {attempt + 1}/{attempts} after error: {e.orig}. Waiting {delay}s")
            sleep(delay)
    raise StoreUnavailableError("Store unavailable")
