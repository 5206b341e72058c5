"""Keyword tables.

A KeywordTable maps keyword strings to handlers at one nesting level.
Root keywords own a child table for the lines of the block they open,
plus an optional end handler run when that block closes normally.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

from bfdconf.errors import KeywordError


class HandlerResult(str, Enum):
    """What the scanner should do after a handler returns.

    ABORT_BLOCK skips the rest of the current block and suppresses its
    end handler. For a keyword that opens a block, the current block is
    the one it opens; otherwise it is the enclosing block.
    """

    CONTINUE = "continue"
    ABORT_BLOCK = "abort_block"


Handler = Callable[[Any, list[str]], HandlerResult]
EndHandler = Callable[[Any], None]


def ignore_handler(ctx: Any, args: list[str]) -> HandlerResult:
    """Accept a keyword without acting on it."""
    return HandlerResult.CONTINUE


@dataclass
class Keyword:
    """A registered keyword."""

    name: str
    handler: Handler
    min_args: int = 0
    active: bool = True
    children: "KeywordTable | None" = None
    end_handler: EndHandler | None = None

    @property
    def opens_block(self) -> bool:
        return self.children is not None


class KeywordTable:
    """Ordered registry of keywords at one nesting level."""

    def __init__(self) -> None:
        self._keywords: dict[str, Keyword] = {}

    def install(
        self,
        name: str,
        handler: Handler,
        min_args: int = 0,
    ) -> Keyword:
        """Install a keyword that does not open a block.

        Raises:
            KeywordError: If the keyword is already installed
        """
        return self._add(Keyword(name=name, handler=handler, min_args=min_args))

    def install_conditional(
        self,
        name: str,
        handler: Handler,
        want_handler: bool,
        min_args: int = 0,
    ) -> Keyword:
        """Install a keyword, wired to a no-op unless want_handler is set.

        The keyword is accepted either way, so shared configuration text
        parses identically whichever handlers are live.
        """
        keyword = Keyword(
            name=name,
            handler=handler if want_handler else ignore_handler,
            min_args=min_args,
            active=want_handler,
        )
        return self._add(keyword)

    def install_root(
        self,
        name: str,
        handler: Handler,
        min_args: int = 1,
        end_handler: EndHandler | None = None,
    ) -> Keyword:
        """Install a keyword that opens a block with its own child table."""
        keyword = Keyword(
            name=name,
            handler=handler,
            min_args=min_args,
            children=KeywordTable(),
            end_handler=end_handler,
        )
        return self._add(keyword)

    def get(self, name: str) -> Keyword | None:
        """Get keyword by name."""
        return self._keywords.get(name)

    def names(self) -> list[str]:
        """Keyword names in installation order."""
        return list(self._keywords)

    def active_names(self) -> list[str]:
        """Names of keywords wired to a real handler."""
        return [k.name for k in self._keywords.values() if k.active]

    def _add(self, keyword: Keyword) -> Keyword:
        if not keyword.name or any(c.isspace() for c in keyword.name):
            raise KeywordError(keyword.name, "keyword must be a single non-empty word")
        if keyword.name in self._keywords:
            raise KeywordError(keyword.name, "already installed")
        self._keywords[keyword.name] = keyword
        return keyword

    def __contains__(self, name: object) -> bool:
        return name in self._keywords

    def __iter__(self) -> Iterator[Keyword]:
        return iter(self._keywords.values())

    def __len__(self) -> int:
        return len(self._keywords)
