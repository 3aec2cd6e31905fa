"""Shape checks for identifiers and user supplied fields.

All checks are pure and run before any request is built, so an invalid
argument never reaches the network.
"""

from __future__ import annotations

import ipaddress
import re

# Common string ID pattern shared by every Scalr resource.
_STRING_ID = re.compile(r"^[a-zA-Z0-9\-._]+$")


def valid_string(value: str | None) -> bool:
    """Return True if *value* is present and not blank."""
    return value is not None and value.strip() != ""


def valid_string_id(value: str | None) -> bool:
    """Return True if *value* looks like a resource identifier."""
    return value is not None and _STRING_ID.fullmatch(value) is not None


def valid_ipv4_network(value: str | None) -> bool:
    """Return True for an IPv4 address or an IPv4 CIDR block.

    Host bits are allowed in the CIDR form (``10.0.0.1/24``).
    """
    if value is None:
        return False
    try:
        network = ipaddress.ip_network(value, strict=False)
    except ValueError:
        return False
    return network.version == 4
