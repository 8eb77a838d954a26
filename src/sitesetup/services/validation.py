"""Domain and server-type validation."""

from __future__ import annotations

import re

from sitesetup import constants
from sitesetup.errors import InvalidDomain, UnsupportedServer

_DOMAIN_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9.-]*[A-Za-z0-9]$")

REQUESTED_SERVER_TYPES = (
    constants.SERVER_UNSET,
    constants.SERVER_AUTO,
    constants.SERVER_APACHE,
    constants.SERVER_NGINX,
)
RESOLVED_SERVER_TYPES = (constants.SERVER_APACHE, constants.SERVER_NGINX)


def validate_domain(domain: str) -> None:
    """Raise InvalidDomain unless ``domain`` is a dotted host name."""
    if not _DOMAIN_RE.match(domain):
        raise InvalidDomain(f"Invalid domain '{domain}'.")
    if "." not in domain:
        raise InvalidDomain(f"Domain '{domain}' must include at least one dot.")


def validate_requested_server_type(server_type: str) -> None:
    if server_type not in REQUESTED_SERVER_TYPES:
        raise UnsupportedServer(f"Unsupported server '{server_type}'. Use apache, nginx, or auto.")


def validate_server_type(server_type: str) -> None:
    """Check a fully resolved server type."""
    if server_type not in RESOLVED_SERVER_TYPES:
        raise UnsupportedServer(f"Unsupported server '{server_type}'. Use apache or nginx.")
