"""BFD instance keyword handlers, validation and role wiring."""

from bfdconf.bfd.context import CONSUMER_ROLES, ParseContext, Role
from bfdconf.bfd.keywords import build_keyword_table, install_bfd_keywords, role_handlers
from bfdconf.bfd.registry import TrackedBfdRegistry
from bfdconf.bfd.tracking import reconcile_tracked
from bfdconf.bfd.validator import bfd_end_handler

__all__ = [
    "CONSUMER_ROLES",
    "ParseContext",
    "Role",
    "TrackedBfdRegistry",
    "bfd_end_handler",
    "build_keyword_table",
    "install_bfd_keywords",
    "reconcile_tracked",
    "role_handlers",
]
