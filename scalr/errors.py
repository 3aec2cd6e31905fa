"""Exception taxonomy and HTTP status mapping for the Scalr API."""

from __future__ import annotations

import json
import logging

import httpx

logger = logging.getLogger("scalr.errors")


class ScalrError(Exception):
    """Base class for every error raised by this library."""


class UnauthorizedError(ScalrError):
    """The API rejected the token (HTTP 401)."""

    def __init__(self, message: str = "unauthorized"):
        super().__init__(message)


class ResourceConflictError(ScalrError):
    """A lock action conflicted with the current lock state (HTTP 409)."""

    kind: str = ""

    def __init__(self, message: str):
        super().__init__(message)


class WorkspaceLockedError(ResourceConflictError):
    """Returned when trying to lock a locked workspace."""

    kind = "locked"

    def __init__(self, message: str = "workspace already locked"):
        super().__init__(message)


class WorkspaceNotLockedError(ResourceConflictError):
    """Returned when trying to unlock an unlocked workspace."""

    kind = "unlocked"

    def __init__(self, message: str = "workspace already unlocked"):
        super().__init__(message)


class ResourceNotFoundError(ScalrError):
    """The requested resource does not exist (HTTP 404).

    The class itself is the sentinel: ``except ResourceNotFoundError``
    matches whether or not the server sent a message.
    """

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message or "resource not found")


class APIError(ScalrError):
    """Any other non-2xx response."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class PayloadError(ScalrError, ValueError):
    """A JSON:API document could not be encoded or decoded."""


class InvalidValueError(ScalrError, ValueError):
    """An argument failed client-side validation. Raised before any I/O."""


class ContextCanceled(ScalrError):
    """The caller cancelled the request context."""

    def __init__(self, message: str = "context canceled"):
        super().__init__(message)


class DeadlineExceeded(ScalrError, TimeoutError):
    """The request context deadline elapsed."""

    def __init__(self, message: str = "context deadline exceeded"):
        super().__init__(message)


class ParameterChangeError(ScalrError):
    """First error raised while applying a batch of parameter changes.

    ``changes`` holds whatever completed before the failure was observed;
    ``error`` is the original exception (also set as ``__cause__``).
    """

    def __init__(self, error: BaseException, changes):
        self.error = error
        self.changes = changes
        super().__init__(str(error))


def is_not_found(exc: BaseException | None) -> bool:
    """Return True if *exc*, or anything in its cause chain, is a not-found error."""
    seen: set[int] = set()
    while exc is not None and id(exc) not in seen:
        if isinstance(exc, ResourceNotFoundError):
            return True
        seen.add(id(exc))
        exc = exc.__cause__
    return False


# ---------------------------------------------------------------------------
# Status mapping
# ---------------------------------------------------------------------------


def _error_messages(response: httpx.Response) -> list[str]:
    """Format the entries of a JSON:API error document, one string each."""
    try:
        payload = json.loads(response.content or b"null")
    except ValueError:
        return []
    if not isinstance(payload, dict):
        return []
    entries = payload.get("errors")
    if not isinstance(entries, list):
        return []

    messages = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        title = entry.get("title") or ""
        detail = entry.get("detail") or ""
        messages.append(f"{title}\n\n{detail}" if detail else title)
    return messages


def check_response(response: httpx.Response) -> None:
    """Raise the error matching a non-2xx *response*; return on success.

    Raises:
        UnauthorizedError: On 401.
        WorkspaceLockedError: On 409 from an ``actions/lock`` call.
        WorkspaceNotLockedError: On 409 from ``actions/unlock`` or ``actions/force-unlock``.
        ResourceNotFoundError: On 404, carrying the server message if any.
        APIError: On any other non-2xx status.
    """
    status = response.status_code
    if 200 <= status <= 299:
        return

    if status == 401:
        raise UnauthorizedError()

    if status == 409:
        path = response.request.url.path
        if path.endswith("actions/lock"):
            raise WorkspaceLockedError()
        if path.endswith(("actions/unlock", "actions/force-unlock")):
            raise WorkspaceNotLockedError()

    messages = _error_messages(response)
    if not messages:
        if status == 404:
            raise ResourceNotFoundError()
        raise APIError(f"{status} {response.reason_phrase}".strip(), status)

    message = "\n".join(messages)
    logger.debug("API error %d: %s", status, message)
    if status == 404:
        raise ResourceNotFoundError(message)
    raise APIError(message, status)
