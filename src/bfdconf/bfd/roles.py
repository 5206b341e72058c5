"""Process roles that read a BFD configuration."""

from enum import Enum


class Role(str, Enum):
    """Process role reading the configuration."""

    BFD = "bfd"
    VRRP = "vrrp"
    CHECKER = "checker"
    PARENT = "parent"


# Roles that may consume BFD instance liveness
CONSUMER_ROLES = (Role.VRRP, Role.CHECKER)
