"""
core/models.py -- Domain dataclasses for the subnet authentication engine.

Pure data containers. Parsing lives in core/address.py, subnet math in
core/subnet.py, and the decision procedure in auth/adapter.py.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

# ---------------------------------------------------------------------------
# Domain constants
# ---------------------------------------------------------------------------

# Attribute contract advertised by the adapter and returned on SUCCESS.
ATTR_IP_ADDRESS = "ip_address"
ATTR_ROLE = "role"

# The only chained attribute this engine inspects.
CHAINED_ATTR_USERNAME = "username"

ROLE_GUEST = "GUEST"
ROLE_CORP_USER = "CORP_USER"

IPV4_LOOPBACK = "127.0.0.1"


@dataclass(frozen=True)
class IPv4Address:
    """Four octets in left-to-right order, each in [0, 255].

    Only core.address.parse_ipv4 should construct these from user input.
    """

    octets: tuple[int, int, int, int]

    def __str__(self) -> str:
        return ".".join(str(o) for o in self.octets)


@dataclass(frozen=True)
class SubnetConfig:
    base: IPv4Address
    mask: IPv4Address


class AuthnStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"


@dataclass(frozen=True)
class AuthnOutcome:
    """Result of one lookup. attributes is empty on FAILURE."""

    status: AuthnStatus
    attributes: Mapping[str, Any] = field(default_factory=dict)

    @property
    def authenticated(self) -> bool:
        return self.status is AuthnStatus.SUCCESS
