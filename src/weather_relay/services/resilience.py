"""Retry with exponential backoff under an overall deadline."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from weather_relay.domain.errors import FetchError, FetchTimeoutError
from weather_relay.domain.weather import WeatherData

_logger = logging.getLogger(__name__)

FetchOne = Callable[[str], Awaitable[WeatherData]]
RetryHook = Callable[[str, int, FetchError], None]
Sleep = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    """Retry configuration for remote fetches."""

    base_delay_seconds: float = 1.0
    max_attempts: int = 4
    overall_timeout_seconds: float = 10.0

    def __post_init__(self) -> None:
        if self.base_delay_seconds <= 0:
            raise ValueError("base_delay_seconds must be positive")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.overall_timeout_seconds <= 0:
            raise ValueError("overall_timeout_seconds must be positive")

    def backoff_delay(self, attempt: int) -> float:
        """Return the delay after failed attempt number ``attempt`` (from 1)."""
        return self.base_delay_seconds * 2 ** (attempt - 1)


async def resilient_fetch(
    fetch_one: FetchOne,
    city: str,
    policy: RetryPolicy,
    *,
    on_retry: RetryHook | None = None,
    sleep: Sleep = asyncio.sleep,
) -> WeatherData:
    """Fetch with retries, raising the last error or ``FetchTimeoutError``.

    The whole attempt chain, backoff sleeps included, runs under
    ``policy.overall_timeout_seconds``. When the deadline passes the pending
    attempt is cancelled and a timeout is raised no matter how many attempts
    remain.
    """
    try:
        return await asyncio.wait_for(
            _attempt_chain(fetch_one, city, policy, on_retry, sleep),
            timeout=policy.overall_timeout_seconds,
        )
    except TimeoutError as exc:
        _logger.warning(
            "Weather fetch for %s timed out after %ss",
            city,
            policy.overall_timeout_seconds,
        )
        raise FetchTimeoutError() from exc


async def _attempt_chain(
    fetch_one: FetchOne,
    city: str,
    policy: RetryPolicy,
    on_retry: RetryHook | None,
    sleep: Sleep,
) -> WeatherData:
    attempt = 1
    while True:
        try:
            return await fetch_one(city)
        except Exception as exc:
            error = FetchError.coerce(exc)
            if not error.retryable or attempt >= policy.max_attempts:
                if attempt > 1:
                    _logger.warning(
                        "Weather fetch for %s failed after %s attempts: %r",
                        city,
                        attempt,
                        error,
                    )
                if error is exc:
                    raise
                raise error from exc
            delay = policy.backoff_delay(attempt)
            attempt += 1
            _notify_retry(city, attempt, error, on_retry)
            await sleep(delay)


def _notify_retry(
    city: str, attempt: int, error: FetchError, on_retry: RetryHook | None
) -> None:
    """Report a retry; hook failures never affect the fetch."""
    _logger.info("Retry attempt: %s (city=%s, last error=%r)", attempt, city, error)
    if on_retry is None:
        return
    try:
        on_retry(city, attempt, error)
    except Exception:
        _logger.exception("Retry hook failed for %s", city)
