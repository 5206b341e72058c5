"""Tracked BFD references owned by consumer processes.

A tracked reference names a BFD instance; it never holds the instance
itself. The liveness flag belongs to the consumer and is only changed
at runtime by the BFD event channel.
"""

from pydantic import BaseModel, Field

from bfdconf.model.limits import (
    BFD_INAME_MAX,
    VRRP_TRACK_WEIGHT_MAX,
    VRRP_TRACK_WEIGHT_MIN,
)


class TrackedBfd(BaseModel):
    """Common fields of a tracked BFD reference."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=BFD_INAME_MAX - 1,
        description="Name of the referenced BFD instance",
    )

    bfd_up: bool = Field(
        default=False,
        description="Last liveness state reported for the instance",
    )


class VrrpTrackedBfd(TrackedBfd):
    """A BFD instance tracked by the VRRP process."""

    weight: int = Field(
        default=0,
        ge=VRRP_TRACK_WEIGHT_MIN,
        le=VRRP_TRACK_WEIGHT_MAX,
        description="Priority adjustment applied while the instance is down",
    )


class CheckerTrackedBfd(TrackedBfd):
    """A BFD instance tracked by the checker process."""
