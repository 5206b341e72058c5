"""BFD instance data model.

A BfdInstance is one configured neighbor-monitoring session, owned by
the BFD (monitor) process. It is built field by field while its
``bfd_instance`` block is parsed and only becomes final once the block
closes and validation passes.
"""

from ipaddress import IPv4Address, IPv6Address

from pydantic import BaseModel, Field

from bfdconf.model.addressing import AddressFamily, address_family
from bfdconf.model.limits import (
    BFD_IDLETX_DEFAULT,
    BFD_INAME_MAX,
    BFD_MAX_HOPS_DEFAULT,
    BFD_MINRX_DEFAULT,
    BFD_MINTX_DEFAULT,
    BFD_MULTIPLIER_DEFAULT,
    BFD_TTL_UNSET,
    USEC_PER_MSEC,
)


class BfdInstance(BaseModel):
    """A configured BFD session.

    Intervals are stored in microseconds. ``ttl`` of 0 means "not
    configured" until the block closes, when it is resolved from the
    neighbor address family. ``max_hops`` of -1 means unlimited.
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=BFD_INAME_MAX - 1,
        description="Unique instance name",
    )

    neighbor_address: IPv4Address | IPv6Address | None = Field(
        default=None,
        description="Neighbor address (mandatory once the block closes)",
    )

    source_address: IPv4Address | IPv6Address | None = Field(
        default=None,
        description="Local source address",
    )

    min_rx: int = Field(
        default=BFD_MINRX_DEFAULT * USEC_PER_MSEC,
        description="Required min RX interval in microseconds",
    )

    min_tx: int = Field(
        default=BFD_MINTX_DEFAULT * USEC_PER_MSEC,
        description="Desired min TX interval in microseconds",
    )

    idle_tx: int = Field(
        default=BFD_IDLETX_DEFAULT * USEC_PER_MSEC,
        description="TX interval while the session is down, in microseconds",
    )

    detect_multiplier: int = Field(
        default=BFD_MULTIPLIER_DEFAULT,
        description="Detection time multiplier",
    )

    passive: bool = Field(
        default=False,
        description="Wait for the neighbor to start the session",
    )

    ttl: int = Field(
        default=BFD_TTL_UNSET,
        description="TTL / hop limit of sent packets (0 = family default)",
    )

    max_hops: int = Field(
        default=BFD_MAX_HOPS_DEFAULT,
        description="Max hops accepted on received packets (-1 = unlimited)",
    )

    vrrp: bool = Field(
        default=False,
        description="Liveness is consumed by the VRRP process",
    )

    checker: bool = Field(
        default=False,
        description="Liveness is consumed by the checker process",
    )

    @property
    def family(self) -> AddressFamily | None:
        """Address family of the session, taken from the neighbor address."""
        if self.neighbor_address is None:
            return None
        return address_family(self.neighbor_address)

    @property
    def is_multihop(self) -> bool:
        """Whether packets from more than one hop away are accepted."""
        return self.max_hops != 0

    @property
    def min_rx_ms(self) -> int:
        return self.min_rx // USEC_PER_MSEC

    @property
    def min_tx_ms(self) -> int:
        return self.min_tx // USEC_PER_MSEC

    @property
    def idle_tx_ms(self) -> int:
        return self.idle_tx // USEC_PER_MSEC
