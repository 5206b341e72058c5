"""Per-load parse state.

One ParseContext is created for every configuration load and handed to
every keyword handler. It owns the records each role builds and the
role-selection accumulators of the instance block being parsed.
"""

from dataclasses import dataclass, field

from bfdconf.bfd.registry import TrackedBfdRegistry
from bfdconf.bfd.roles import CONSUMER_ROLES, Role
from bfdconf.model.instance import BfdInstance
from bfdconf.model.tracking import CheckerTrackedBfd, VrrpTrackedBfd


@dataclass
class ParseContext:
    """Mutable state of a single configuration load."""

    role: Role
    enabled_roles: frozenset[Role] = frozenset(CONSUMER_ROLES)
    source: str = "<string>"

    # BFD process data
    instances: list[BfdInstance] = field(default_factory=list)
    current: BfdInstance | None = None

    # Consumer process data
    vrrp_tracked: TrackedBfdRegistry[VrrpTrackedBfd] = field(
        default_factory=TrackedBfdRegistry
    )
    checker_tracked: TrackedBfdRegistry[CheckerTrackedBfd] = field(
        default_factory=TrackedBfdRegistry
    )

    # Roles selected by 'vrrp' / 'checker' in the open block
    selected_roles: set[Role] = field(default_factory=set)
    # Roles selected anywhere in this load so far
    selectors_used: set[Role] = field(default_factory=set)

    # Parent process: at least one bfd_instance is declared
    have_bfd_instances: bool = False

    def open_block(self) -> None:
        """Start a new instance block."""
        self.selected_roles = set()

    def select_role(self, role: Role) -> None:
        """Record that the open block opted into monitoring by role."""
        self.selected_roles.add(role)
        self.selectors_used.add(role)

    def find_instance(self, name: str) -> BfdInstance | None:
        """Get a BFD instance by exact name."""
        for instance in self.instances:
            if instance.name == name:
                return instance
        return None

    def discard_instance(self, instance: BfdInstance) -> None:
        """Remove a partially built or invalid instance."""
        self.instances.remove(instance)
        if self.current is instance:
            self.current = None
