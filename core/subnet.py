"""
core/subnet.py -- Subnet membership by base address and mask.

Inputs are always parsed IPv4Address values, so there is no failure mode.
"""

from core.models import IPv4Address


def contains(addr: IPv4Address, base: IPv4Address, mask: IPv4Address) -> bool:
    """Return True if addr lies in the subnet described by base/mask.

    An address is inside the subnet when masking it yields the same bits as
    masking the base, octet by octet. A 0.0.0.0 mask matches every address.
    """
    return all(
        (a & m) == (b & m)
        for a, b, m in zip(addr.octets, base.octets, mask.octets)
    )
