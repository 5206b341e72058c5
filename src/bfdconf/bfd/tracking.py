"""Tracked BFD reference handlers (VRRP and checker processes).

In a consumer process a ``bfd_instance`` block only creates a named
reference to the instance. References are provisional: once any
``vrrp``/``checker`` selector has been used in the load, a reference
survives only if its own block selected the consumer's role.
"""

import logging

from bfdconf.bfd.builder import parse_int
from bfdconf.bfd.context import ParseContext, Role
from bfdconf.bfd.registry import TrackedBfdRegistry
from bfdconf.model.limits import (
    BFD_INAME_MAX,
    VRRP_TRACK_WEIGHT_MAX,
    VRRP_TRACK_WEIGHT_MIN,
)
from bfdconf.model.tracking import CheckerTrackedBfd, TrackedBfd, VrrpTrackedBfd
from bfdconf.parser.keywords import HandlerResult

logger = logging.getLogger(__name__)


def _open_tracked(
    ctx: ParseContext,
    registry: TrackedBfdRegistry,
    ref: type[TrackedBfd],
    name: str,
) -> HandlerResult:
    ctx.open_block()

    if not name or len(name) >= BFD_INAME_MAX:
        logger.error(
            "Configuration error: tracked BFD instance name '%s' is not valid "
            "(1 to %d characters) - ignoring",
            name,
            BFD_INAME_MAX - 1,
        )
        return HandlerResult.ABORT_BLOCK

    if name in registry:
        logger.info("BFD %s already specified", name)
        return HandlerResult.ABORT_BLOCK

    registry.add(ref(name=name))
    return HandlerResult.CONTINUE


def _close_tracked(ctx: ParseContext, registry: TrackedBfdRegistry, role: Role) -> None:
    tracked = registry.tail
    if tracked is None:
        return

    registry.record_selection(tracked.name, ctx.selected_roles)
    if ctx.selectors_used and role not in ctx.selected_roles:
        logger.debug("BFD %s not tracked by %s", tracked.name, role.value)
        registry.discard(tracked)


def bfd_vrrp_handler(ctx: ParseContext, args: list[str]) -> HandlerResult:
    """Open a bfd_instance block in the VRRP process."""
    return _open_tracked(ctx, ctx.vrrp_tracked, VrrpTrackedBfd, args[0])


def bfd_vrrp_weight_handler(ctx: ParseContext, args: list[str]) -> HandlerResult:
    tracked = ctx.vrrp_tracked.tail
    if tracked is None:
        raise RuntimeError("weight used outside of a bfd_instance block")

    value = parse_int(args[0])

    if value is None or value < VRRP_TRACK_WEIGHT_MIN or value > VRRP_TRACK_WEIGHT_MAX:
        logger.error(
            "Configuration error: BFD instance %s weight value %s not valid "
            "(must be in range [%d-%d]), ignoring",
            tracked.name,
            args[0],
            VRRP_TRACK_WEIGHT_MIN,
            VRRP_TRACK_WEIGHT_MAX,
        )
    else:
        tracked.weight = value
    return HandlerResult.CONTINUE


def bfd_vrrp_end_handler(ctx: ParseContext) -> None:
    _close_tracked(ctx, ctx.vrrp_tracked, Role.VRRP)


def bfd_checker_handler(ctx: ParseContext, args: list[str]) -> HandlerResult:
    """Open a bfd_instance block in the checker process."""
    return _open_tracked(ctx, ctx.checker_tracked, CheckerTrackedBfd, args[0])


def bfd_checker_end_handler(ctx: ParseContext) -> None:
    _close_tracked(ctx, ctx.checker_tracked, Role.CHECKER)


def bfd_event_vrrp_handler(ctx: ParseContext, args: list[str]) -> HandlerResult:
    ctx.select_role(Role.VRRP)
    return HandlerResult.CONTINUE


def bfd_event_checker_handler(ctx: ParseContext, args: list[str]) -> HandlerResult:
    ctx.select_role(Role.CHECKER)
    return HandlerResult.CONTINUE


def reconcile_tracked(ctx: ParseContext) -> None:
    """Drop references committed before the first selector of the load.

    Block close can only judge against selectors seen so far; this pass
    applies the same rule once the whole load has been read.
    """
    registries = {
        Role.VRRP: ctx.vrrp_tracked,
        Role.CHECKER: ctx.checker_tracked,
    }
    for role, registry in registries.items():
        for tracked in registry.reconcile(role, ctx.selectors_used):
            logger.debug("BFD %s not tracked by %s", tracked.name, role.value)
