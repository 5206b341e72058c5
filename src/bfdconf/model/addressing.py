"""IP addressing utilities.

Parses neighbor and source addresses of BFD instances and reports
their address family.
"""

from enum import Enum
from ipaddress import IPv4Address, IPv6Address, ip_address

BfdAddress = IPv4Address | IPv6Address


class AddressFamily(str, Enum):
    """Address family of a BFD session."""

    IPV4 = "inet"
    IPV6 = "inet6"


def parse_address(text: str) -> BfdAddress:
    """Parse an IPv4 or IPv6 literal.

    IPv6 literals may be wrapped in brackets and may carry a scope
    (e.g. ``fe80::1%eth0``).

    Raises:
        ValueError: If text is not a valid address literal

    Example:
        >>> parse_address("[2001:db8::1]")
        IPv6Address('2001:db8::1')
    """
    candidate = text.strip()
    if candidate.startswith("[") and candidate.endswith("]"):
        address = ip_address(candidate[1:-1])
        if address.version != 6:
            raise ValueError(f"brackets are only valid around IPv6 addresses: {text}")
        return address
    if not candidate:
        raise ValueError("empty address")
    return ip_address(candidate)


def address_family(address: BfdAddress) -> AddressFamily:
    """Get the address family of a parsed address."""
    if address.version == 4:
        return AddressFamily.IPV4
    return AddressFamily.IPV6


def same_family(a: BfdAddress, b: BfdAddress) -> bool:
    """Check whether two addresses belong to the same family."""
    return a.version == b.version
