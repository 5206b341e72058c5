"""BFD instance keyword handlers (BFD process).

Each handler populates one field of the instance currently being built,
which is always the most recently opened ``bfd_instance`` block. Field
errors are logged and leave the field unchanged; a bad or duplicate
neighbor address drops the whole instance and aborts its block.
"""

import logging
import re

from bfdconf.bfd.context import ParseContext
from bfdconf.model.addressing import parse_address
from bfdconf.model.instance import BfdInstance
from bfdconf.model.limits import (
    BFD_IDLETX_MAX,
    BFD_IDLETX_MAX_SENSIBLE,
    BFD_IDLETX_MIN,
    BFD_INAME_MAX,
    BFD_MAX_HOPS_UNLIMITED,
    BFD_MINRX_MAX,
    BFD_MINRX_MAX_SENSIBLE,
    BFD_MINRX_MIN,
    BFD_MINTX_MAX,
    BFD_MINTX_MAX_SENSIBLE,
    BFD_MINTX_MIN,
    BFD_MULTIPLIER_MAX,
    BFD_MULTIPLIER_MIN,
    BFD_TTL_MAX,
    USEC_PER_MSEC,
)
from bfdconf.parser.keywords import Handler, HandlerResult

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_int(text: str) -> int | None:
    """Parse a base-10 integer, returning None if text is not one."""
    text = text.strip()
    if not _INTEGER_RE.fullmatch(text):
        return None
    return int(text, 10)


def check_new_bfd(ctx: ParseContext, name: str) -> bool:
    """Check that a new instance name is usable, logging why not."""
    if not name:
        logger.error("Configuration error: BFD instance with empty name - ignoring")
        return False

    if len(name) >= BFD_INAME_MAX:
        logger.error(
            "Configuration error: BFD instance %s name too long "
            "(maximum length is %d characters) - ignoring",
            name,
            BFD_INAME_MAX - 1,
        )
        return False

    if ctx.find_instance(name) is not None:
        logger.error(
            "Configuration error: BFD instance %s already configured - ignoring",
            name,
        )
        return False

    return True


def _current(ctx: ParseContext) -> BfdInstance:
    if ctx.current is None:
        raise RuntimeError("BFD instance keyword used outside of a bfd_instance block")
    return ctx.current


def bfd_handler(ctx: ParseContext, args: list[str]) -> HandlerResult:
    """Open a bfd_instance block."""
    name = args[0]
    if not check_new_bfd(ctx, name):
        return HandlerResult.ABORT_BLOCK

    instance = BfdInstance(name=name)
    ctx.instances.append(instance)
    ctx.current = instance
    ctx.open_block()
    return HandlerResult.CONTINUE


def bfd_parent_handler(ctx: ParseContext, args: list[str]) -> HandlerResult:
    """Note that BFD instances are configured, without building them."""
    ctx.have_bfd_instances = True
    return HandlerResult.ABORT_BLOCK


def bfd_nbrip_handler(ctx: ParseContext, args: list[str]) -> HandlerResult:
    bfd = _current(ctx)

    try:
        address = parse_address(args[0])
    except ValueError:
        logger.error(
            "Configuration error: BFD instance %s has malformed neighbor "
            "address %s, ignoring instance",
            bfd.name,
            args[0],
        )
        ctx.discard_instance(bfd)
        return HandlerResult.ABORT_BLOCK

    for other in ctx.instances:
        if other is not bfd and other.neighbor_address == address:
            logger.error(
                "Configuration error: BFD instance %s has duplicate neighbor "
                "address %s, ignoring instance",
                bfd.name,
                args[0],
            )
            ctx.discard_instance(bfd)
            return HandlerResult.ABORT_BLOCK

    bfd.neighbor_address = address
    return HandlerResult.CONTINUE


def bfd_srcip_handler(ctx: ParseContext, args: list[str]) -> HandlerResult:
    bfd = _current(ctx)

    try:
        bfd.source_address = parse_address(args[0])
    except ValueError:
        logger.error(
            "Configuration error: BFD instance %s has malformed source "
            "address %s, ignoring",
            bfd.name,
            args[0],
        )
    return HandlerResult.CONTINUE


def interval_handler(
    keyword: str,
    attribute: str,
    minimum: int,
    maximum: int,
    sensible: int,
) -> Handler:
    """Build a handler for a millisecond interval stored in microseconds.

    The sensible-maximum notice is independent of the range check: a
    parseable value above it is reported even when it is rejected.
    """

    def handler(ctx: ParseContext, args: list[str]) -> HandlerResult:
        bfd = _current(ctx)
        value = parse_int(args[0])

        if value is None or value < minimum or value > maximum:
            logger.error(
                "Configuration error: BFD instance %s %s value %s is not valid "
                "(must be in range [%d-%d]), ignoring",
                bfd.name,
                keyword,
                args[0],
                minimum,
                maximum,
            )
        else:
            setattr(bfd, attribute, value * USEC_PER_MSEC)

        if value is not None and value > sensible:
            logger.info(
                "Configuration warning: BFD instance %s %s value %d is larger "
                "than max sensible (%d)",
                bfd.name,
                keyword,
                value,
                sensible,
            )
        return HandlerResult.CONTINUE

    handler.__name__ = f"bfd_{keyword.replace('_', '')}_handler"
    return handler


bfd_minrx_handler = interval_handler(
    "min_rx", "min_rx", BFD_MINRX_MIN, BFD_MINRX_MAX, BFD_MINRX_MAX_SENSIBLE
)
bfd_mintx_handler = interval_handler(
    "min_tx", "min_tx", BFD_MINTX_MIN, BFD_MINTX_MAX, BFD_MINTX_MAX_SENSIBLE
)
bfd_idletx_handler = interval_handler(
    "idle_tx", "idle_tx", BFD_IDLETX_MIN, BFD_IDLETX_MAX, BFD_IDLETX_MAX_SENSIBLE
)


def bfd_multiplier_handler(ctx: ParseContext, args: list[str]) -> HandlerResult:
    bfd = _current(ctx)
    value = parse_int(args[0])

    if value is None or value < BFD_MULTIPLIER_MIN or value > BFD_MULTIPLIER_MAX:
        logger.error(
            "Configuration error: BFD instance %s multiplier value %s not valid "
            "(must be in range [%d-%d]), ignoring",
            bfd.name,
            args[0],
            BFD_MULTIPLIER_MIN,
            BFD_MULTIPLIER_MAX,
        )
    else:
        bfd.detect_multiplier = value
    return HandlerResult.CONTINUE


def bfd_passive_handler(ctx: ParseContext, args: list[str]) -> HandlerResult:
    _current(ctx).passive = True
    return HandlerResult.CONTINUE


def bfd_ttl_handler(ctx: ParseContext, args: list[str]) -> HandlerResult:
    """Handle both 'ttl' and 'hoplimit'."""
    bfd = _current(ctx)
    value = parse_int(args[0])

    if value is None or value < 1 or value > BFD_TTL_MAX:
        logger.error(
            "Configuration error: BFD instance %s ttl/hoplimit value %s not valid "
            "(must be in range [1-%d]), ignoring",
            bfd.name,
            args[0],
            BFD_TTL_MAX,
        )
    else:
        bfd.ttl = value
    return HandlerResult.CONTINUE


def bfd_maxhops_handler(ctx: ParseContext, args: list[str]) -> HandlerResult:
    bfd = _current(ctx)
    value = parse_int(args[0])

    if value is None or value < BFD_MAX_HOPS_UNLIMITED or value > BFD_TTL_MAX:
        logger.error(
            "Configuration error: BFD instance %s max_hops value %s not valid "
            "(must be in range [%d-%d]), ignoring",
            bfd.name,
            args[0],
            BFD_MAX_HOPS_UNLIMITED,
            BFD_TTL_MAX,
        )
    else:
        bfd.max_hops = value
    return HandlerResult.CONTINUE


# Child keywords of bfd_instance that build the instance: (keyword, handler, min_args)
BFD_FIELD_KEYWORDS: list[tuple[str, Handler, int]] = [
    ("source_ip", bfd_srcip_handler, 1),
    ("neighbor_ip", bfd_nbrip_handler, 1),
    ("min_rx", bfd_minrx_handler, 1),
    ("min_tx", bfd_mintx_handler, 1),
    ("idle_tx", bfd_idletx_handler, 1),
    ("multiplier", bfd_multiplier_handler, 1),
    ("passive", bfd_passive_handler, 0),
    ("ttl", bfd_ttl_handler, 1),
    ("hoplimit", bfd_ttl_handler, 1),
    ("max_hops", bfd_maxhops_handler, 1),
]
