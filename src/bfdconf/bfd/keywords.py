"""Role-dependent installation of BFD keywords.

Every process reads the same configuration, but each is interested in
different keywords. The ``bfd_instance`` root handler is chosen per
role from a strategy table; instance field keywords are live only in
the BFD process and accepted-but-ignored everywhere else.
"""

from collections.abc import Iterable
from typing import NamedTuple

from bfdconf.bfd.builder import BFD_FIELD_KEYWORDS, bfd_handler, bfd_parent_handler
from bfdconf.bfd.context import CONSUMER_ROLES, Role
from bfdconf.bfd.tracking import (
    bfd_checker_end_handler,
    bfd_checker_handler,
    bfd_event_checker_handler,
    bfd_event_vrrp_handler,
    bfd_vrrp_end_handler,
    bfd_vrrp_handler,
    bfd_vrrp_weight_handler,
)
from bfdconf.bfd.validator import bfd_end_handler
from bfdconf.errors import RoleError
from bfdconf.parser.keywords import EndHandler, Handler, Keyword, KeywordTable


class RootHandlers(NamedTuple):
    """Handlers wired to ``bfd_instance`` for one role."""

    handler: Handler
    end_handler: EndHandler | None
    builds_instances: bool
    min_args: int = 1


def role_handlers(enabled_roles: Iterable[Role]) -> dict[Role, RootHandlers]:
    """Build the role -> root handler strategy table.

    Consumer roles only appear when enabled in this deployment.
    """
    enabled = set(enabled_roles)
    table = {
        Role.BFD: RootHandlers(bfd_handler, bfd_end_handler, True),
        Role.PARENT: RootHandlers(bfd_parent_handler, None, False, min_args=0),
    }
    if Role.VRRP in enabled:
        table[Role.VRRP] = RootHandlers(bfd_vrrp_handler, bfd_vrrp_end_handler, False)
    if Role.CHECKER in enabled:
        table[Role.CHECKER] = RootHandlers(bfd_checker_handler, bfd_checker_end_handler, False)
    return table


def install_bfd_keywords(
    table: KeywordTable,
    role: Role,
    enabled_roles: Iterable[Role] = CONSUMER_ROLES,
) -> Keyword:
    """Install ``bfd_instance`` and its child keywords for a role.

    Raises:
        RoleError: If role is not available with enabled_roles
    """
    enabled = set(enabled_roles)
    handlers = role_handlers(enabled)
    if role not in handlers:
        raise RoleError(role.value, sorted(r.value for r in handlers))
    root_handlers = handlers[role]

    root = table.install_root(
        "bfd_instance",
        root_handlers.handler,
        min_args=root_handlers.min_args,
        end_handler=root_handlers.end_handler,
    )
    children = root.children

    for name, handler, min_args in BFD_FIELD_KEYWORDS:
        children.install_conditional(name, handler, root_handlers.builds_instances, min_args)

    if Role.VRRP in enabled:
        children.install_conditional("weight", bfd_vrrp_weight_handler, role is Role.VRRP, 1)
        children.install("vrrp", bfd_event_vrrp_handler)
    if Role.CHECKER in enabled:
        children.install("checker", bfd_event_checker_handler)

    return root


def build_keyword_table(
    role: Role,
    enabled_roles: Iterable[Role] = CONSUMER_ROLES,
) -> KeywordTable:
    """Build a fresh root keyword table for one configuration load."""
    table = KeywordTable()
    install_bfd_keywords(table, role, enabled_roles)
    return table
