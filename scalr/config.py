"""Client configuration -- layered: explicit config > env vars > defaults."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace

import httpx

logger = logging.getLogger("scalr.config")

USER_AGENT = "pyscalr"

# Address of Scalr.
DEFAULT_ADDRESS = "https://scalr.io"
# Base path on which the API is served.
DEFAULT_BASE_PATH = "/api/iacp/v3/"
# API profile requested unless the caller overrides the Prefer header.
DEFAULT_PROFILE = "preview"
# Per-attempt HTTP timeout in seconds.
DEFAULT_TIMEOUT = 30.0
# Worker count for batched parameter changes.
NUM_PARALLEL = 10

# Invoked before each retry with the attempt number and the triggering
# response (None when the attempt failed at the transport level).
RetryLogHook = Callable[[int, "httpx.Response | None"], None]


@dataclass(frozen=True)
class ScalrConfig:
    """Configuration for connecting to the Scalr API.

    Blank fields fall back to the environment-derived defaults when the
    client is built; see :func:`merge_config`.
    """

    address: str = ""
    base_path: str = ""
    token: str = ""
    headers: Mapping[str, str] = field(default_factory=dict)
    http_client: httpx.Client | None = None
    retry_log_hook: RetryLogHook | None = None
    retry_server_errors: bool = False
    num_parallel: int = 0
    timeout: float = 0.0


def default_config() -> ScalrConfig:
    """Build the baseline config from ``SCALR_*`` environment variables."""
    return ScalrConfig(
        address=os.environ.get("SCALR_ADDRESS") or DEFAULT_ADDRESS,
        base_path=DEFAULT_BASE_PATH,
        token=os.environ.get("SCALR_TOKEN", ""),
        headers={
            "User-Agent": USER_AGENT,
            "Prefer": f"profile={DEFAULT_PROFILE}",
        },
        num_parallel=int(os.environ.get("SCALR_NUM_PARALLEL") or NUM_PARALLEL),
        timeout=float(os.environ.get("SCALR_TIMEOUT") or DEFAULT_TIMEOUT),
    )


def merge_config(config: ScalrConfig | None = None) -> ScalrConfig:
    """Layer the non-blank fields of *config* over :func:`default_config`.

    Headers merge key by key, so a caller can override ``Prefer`` without
    losing ``User-Agent``.
    """
    merged = default_config()
    headers = httpx.Headers(merged.headers)
    if config is None:
        return replace(merged, headers=headers)
    headers.update(config.headers)

    overrides: dict = {"headers": headers}
    for name in ("address", "base_path", "token", "http_client", "retry_log_hook"):
        value = getattr(config, name)
        if value:
            overrides[name] = value
    if config.retry_server_errors:
        overrides["retry_server_errors"] = True
    if config.num_parallel > 0:
        overrides["num_parallel"] = config.num_parallel
    if config.timeout > 0:
        overrides["timeout"] = config.timeout

    merged = replace(merged, **overrides)
    logger.debug("Resolved Scalr address %s", merged.address)
    return merged
