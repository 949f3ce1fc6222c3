"""
core/address.py -- IPv4 dotted-quad codec and source-address classification.

parse_ipv4() is the single validation primitive for addresses. Configuration
(core/config.py, auth/validation.py) and runtime decoding (auth/adapter.py)
both call it, so a value is rejected for the same reason everywhere.

No side effects. No logging. Callers decide what a bad address means: a
fatal configuration error, a field-level message, or a processing fault.
"""

import ipaddress
import re
from typing import Optional

from core.models import IPV4_LOOPBACK, IPv4Address

_NUM_OCTETS = 4

# 0-255, unsigned, ASCII digits only. Used with fullmatch().
_OCTET_RE = re.compile(r"25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?")


class InvalidAddressFormat(ValueError):
    """Raised when text is not a well-formed dotted quad with octets in [0, 255]."""


def parse_ipv4(text: str) -> IPv4Address:
    """Parse a dotted-quad string into an IPv4Address.

    Exactly four '.'-separated components are required, so trailing or doubled
    dots fail. Leading zeros within the three-character limit are accepted and
    normalized away ("010" -> 10).

    Raises InvalidAddressFormat on any malformed input.
    """
    if not isinstance(text, str):
        raise InvalidAddressFormat(f"Expected a string address, got {type(text).__name__}")

    parts = text.split(".")
    if len(parts) != _NUM_OCTETS:
        raise InvalidAddressFormat(f"Invalid IPv4 address: {text!r}")

    octets: list[int] = []
    for part in parts:
        if not _OCTET_RE.fullmatch(part):
            raise InvalidAddressFormat(f"Invalid IPv4 address: {text!r}")
        octets.append(int(part))

    return IPv4Address(octets=tuple(octets))


def to_dotted_quad(addr: IPv4Address) -> str:
    """Return the canonical dotted-quad form (no leading zeros)."""
    return str(addr)


def classify_source_address(text: str) -> Optional[str]:
    """Map a raw source address onto the IPv4 candidate the decision should parse.

    - IPv6 loopback ("::1" in any spelling, with or without a scope) -> "127.0.0.1"
    - any other IPv6 literal -> None (caller rejects the request)
    - anything else -> returned unchanged as an IPv4 candidate

    Scoped literals ("fe80::1%eth0") and IPv4-mapped forms ("::ffff:127.0.0.1")
    count as IPv6; only ::1 itself is loopback. Hostnames are never resolved.
    """
    try:
        addr = ipaddress.IPv6Address(text)
    except ValueError:
        return text

    # is_loopback ignores the scope id; on newer Pythons it also accepts
    # IPv4-mapped 127.x, which stays rejected here.
    if addr.ipv4_mapped is None and addr.is_loopback:
        return IPV4_LOOPBACK
    return None
