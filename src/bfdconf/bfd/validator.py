"""End-of-block validation of BFD instances (BFD process).

Runs once every keyword of a ``bfd_instance`` block has been seen.
Commits the instance after resolving defaults, or drops it when a
mandatory field is missing or inconsistent.
"""

import logging

from bfdconf.bfd.context import ParseContext, Role
from bfdconf.model.addressing import AddressFamily, same_family
from bfdconf.model.limits import (
    BFD_CONTROL_HOPLIMIT,
    BFD_CONTROL_TTL,
    BFD_TTL_UNSET,
)

logger = logging.getLogger(__name__)


def bfd_end_handler(ctx: ParseContext) -> None:
    """Check minimum configuration requirements of the closing instance."""
    bfd = ctx.current
    if bfd is None:
        return
    ctx.current = None

    if bfd.neighbor_address is None:
        logger.error(
            "Configuration error: BFD instance %s has no neighbor address set, "
            "disabling instance",
            bfd.name,
        )
        ctx.discard_instance(bfd)
        return

    if bfd.source_address is not None and not same_family(
        bfd.source_address, bfd.neighbor_address
    ):
        logger.error(
            "Configuration error: BFD instance %s source address %s and neighbor "
            "address %s are not of the same family, disabling instance",
            bfd.name,
            bfd.source_address,
            bfd.neighbor_address,
        )
        ctx.discard_instance(bfd)
        return

    if bfd.ttl == BFD_TTL_UNSET:
        if bfd.family is AddressFamily.IPV4:
            bfd.ttl = BFD_CONTROL_TTL
        else:
            bfd.ttl = BFD_CONTROL_HOPLIMIT

    if bfd.max_hops > bfd.ttl:
        logger.info(
            "BFD instance %s: max_hops exceeds ttl/hoplimit - setting to ttl/hoplimit",
            bfd.name,
        )
        bfd.max_hops = bfd.ttl

    # With no selector in the block, every enabled consumer monitors it
    selected = ctx.selected_roles
    if Role.VRRP in ctx.enabled_roles:
        bfd.vrrp = not selected or Role.VRRP in selected
    if Role.CHECKER in ctx.enabled_roles:
        bfd.checker = not selected or Role.CHECKER in selected

    ctx.have_bfd_instances = True
    logger.debug(
        "BFD instance %s committed (neighbor %s, vrrp=%s, checker=%s)",
        bfd.name,
        bfd.neighbor_address,
        bfd.vrrp,
        bfd.checker,
    )
