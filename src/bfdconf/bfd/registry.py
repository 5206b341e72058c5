"""Registry of tracked BFD references for one consumer role."""

from collections.abc import Iterator
from typing import Generic, TypeVar

from bfdconf.bfd.roles import Role
from bfdconf.model.tracking import TrackedBfd

T = TypeVar("T", bound=TrackedBfd)


class TrackedBfdRegistry(Generic[T]):
    """Ordered collection of tracked references, keyed by instance name.

    Besides the references, the registry remembers which roles each
    reference's block selected, so references committed before the
    first selector keyword of a load can be reconciled afterwards.
    """

    def __init__(self) -> None:
        self._refs: list[T] = []
        self._selections: dict[str, frozenset[Role]] = {}

    def find(self, name: str) -> T | None:
        """Get a reference by exact instance name."""
        for ref in self._refs:
            if ref.name == name:
                return ref
        return None

    def add(self, ref: T) -> None:
        self._refs.append(ref)

    def discard(self, ref: T) -> None:
        self._refs.remove(ref)
        self._selections.pop(ref.name, None)

    @property
    def tail(self) -> T | None:
        """Most recently added reference."""
        return self._refs[-1] if self._refs else None

    def record_selection(self, name: str, roles: set[Role]) -> None:
        """Remember the roles selected by the block of a reference."""
        self._selections[name] = frozenset(roles)

    def reconcile(self, role: Role, selectors_used: set[Role]) -> list[T]:
        """Drop references whose block never selected role.

        Selection is opt-in only once some selector was used in the load;
        with no selector used at all, every reference is kept.

        Returns:
            The references that were dropped
        """
        if not selectors_used:
            return []

        dropped = [
            ref for ref in self._refs
            if role not in self._selections.get(ref.name, frozenset())
        ]
        for ref in dropped:
            self.discard(ref)
        return dropped

    def to_list(self) -> list[T]:
        return list(self._refs)

    def __contains__(self, name: object) -> bool:
        return any(ref.name == name for ref in self._refs)

    def __iter__(self) -> Iterator[T]:
        return iter(self._refs)

    def __len__(self) -> int:
        return len(self._refs)
