"""BFD configuration data model."""

from bfdconf.model.addressing import (
    AddressFamily,
    BfdAddress,
    address_family,
    parse_address,
    same_family,
)
from bfdconf.model.instance import BfdInstance
from bfdconf.model.tracking import CheckerTrackedBfd, TrackedBfd, VrrpTrackedBfd

__all__ = [
    "AddressFamily",
    "BfdAddress",
    "BfdInstance",
    "CheckerTrackedBfd",
    "TrackedBfd",
    "VrrpTrackedBfd",
    "address_family",
    "parse_address",
    "same_family",
]
