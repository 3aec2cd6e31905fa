"""Retry policy for the HTTP transport.

Rate-limited responses (429) are always retried. Server errors (>= 500) and
transport failures are retried only when server-error retries are enabled.
Waits grow exponentially between ``wait_min`` and ``wait_max``; a numeric
``Retry-After`` header on 429/503 responses takes precedence.
"""

from __future__ import annotations

import logging
import threading

import httpx

from scalr.config import RetryLogHook
from scalr.context import Context

logger = logging.getLogger("scalr.retry")

RETRY_WAIT_MIN = 0.1  # seconds
RETRY_WAIT_MAX = 0.4  # seconds
RETRY_MAX = 30


class RetryPolicy:
    """Decides whether an attempt is retried and drives the attempt loop."""

    def __init__(
        self,
        *,
        retry_server_errors: bool = False,
        wait_min: float = RETRY_WAIT_MIN,
        wait_max: float = RETRY_WAIT_MAX,
        max_retries: int = RETRY_MAX,
        log_hook: RetryLogHook | None = None,
    ):
        self.wait_min = wait_min
        self.wait_max = wait_max
        self.max_retries = max_retries
        self.log_hook = log_hook
        self._lock = threading.Lock()
        self._retry_server_errors = retry_server_errors

    @property
    def retry_server_errors(self) -> bool:
        with self._lock:
            return self._retry_server_errors

    @retry_server_errors.setter
    def retry_server_errors(self, enabled: bool) -> None:
        with self._lock:
            self._retry_server_errors = enabled

    def should_retry(
        self,
        ctx: Context,
        response: httpx.Response | None,
        error: BaseException | None,
    ) -> tuple[bool, BaseException | None]:
        """Return ``(retry, error_to_surface)`` for one finished attempt."""
        if ctx.done():
            return False, ctx.err()
        if error is not None:
            return self.retry_server_errors, error
        if response is None:
            return False, None
        if response.status_code == 429:
            return True, None
        if self.retry_server_errors and response.status_code >= 500:
            return True, None
        return False, None

    def backoff(self, attempt: int, response: httpx.Response | None) -> float:
        """Seconds to wait before retry number ``attempt + 1``."""
        if response is not None and response.status_code in (429, 503):
            retry_after = response.headers.get("Retry-After", "")
            if retry_after.isdigit():
                return float(retry_after)
        return min(self.wait_min * (2 ** attempt), self.wait_max)

    def _notify(self, attempt: int, response: httpx.Response | None) -> None:
        if self.log_hook is None:
            return
        try:
            self.log_hook(attempt, response)
        except Exception:
            logger.exception("Retry log hook failed on attempt %d", attempt)

    def send(self, http: httpx.Client, request: httpx.Request, ctx: Context) -> httpx.Response:
        """Send *request*, retrying per this policy.

        Returns the final response, whatever its status. Raises the context
        error if *ctx* finishes first, or the last transport error when the
        attempt is not retried or retries run out.
        """
        attempt = 0
        while True:
            if ctx.done():
                raise ctx.err()

            response: httpx.Response | None = None
            error: httpx.TransportError | None = None
            try:
                response = http.send(request)
            except httpx.TransportError as exc:
                error = exc

            retry, surfaced = self.should_retry(ctx, response, error)
            if not retry:
                if surfaced is not None:
                    if response is not None:
                        response.close()
                    raise surfaced
                return response

            if attempt >= self.max_retries:
                logger.warning(
                    "Giving up on %s %s after %d retries",
                    request.method, request.url.path, attempt,
                )
                if error is not None:
                    raise error
                return response

            wait = self.backoff(attempt, response)
            attempt += 1
            if response is not None:
                response.close()
            logger.warning(
                "Retrying %s %s (attempt %d, %s) in %.2fs",
                request.method,
                request.url.path,
                attempt,
                response.status_code if response is not None else error,
                wait,
            )
            self._notify(attempt, response)
            if ctx.wait(wait):
                raise ctx.err()
