"""Block scanner.

Walks lexed statements, dispatches each keyword line to its handler,
recurses into blocks opened by root keywords and runs their end
handlers. A handler returning ABORT_BLOCK makes the scanner skip to the
end of the current block; the skipped block's end handler never runs.
"""

import logging
from typing import Any

from bfdconf.parser.keywords import HandlerResult, Keyword, KeywordTable
from bfdconf.parser.lexer import Statement, StatementKind

logger = logging.getLogger(__name__)


class BlockScanner:
    """Dispatches statements to keyword handlers.

    The context object is opaque to the scanner; it is handed to every
    handler unchanged.

    Example:
        scanner = BlockScanner(table, source="keepalived.conf")
        scanner.scan(tokenize(text), ctx)
    """

    def __init__(self, table: KeywordTable, source: str = "<string>") -> None:
        self.table = table
        self.source = source
        self._statements: list[Statement] = []
        self._pos = 0

    def scan(self, statements: list[Statement], ctx: Any) -> None:
        """Process all statements against the root keyword table.

        Statements must have balanced braces (as produced by tokenize()).
        """
        self._statements = statements
        self._pos = 0
        self._scan_block(self.table, ctx, nested=False)

    def _scan_block(self, table: KeywordTable, ctx: Any, nested: bool = True) -> bool:
        """Scan until the close of the current block.

        Returns:
            True if the block was aborted by a handler
        """
        while self._pos < len(self._statements):
            statement = self._statements[self._pos]
            self._pos += 1

            if statement.kind is StatementKind.CLOSE:
                return False

            if statement.kind is StatementKind.OPEN:
                logger.warning(
                    "%s:%d: block without a keyword - skipping",
                    self.source,
                    statement.line,
                )
                self._skip_block()
                continue

            opens_block = self._next_is_open()
            if opens_block:
                self._pos += 1

            keyword = table.get(statement.keyword)
            if keyword is None:
                logger.warning(
                    "%s:%d: unknown keyword '%s'",
                    self.source,
                    statement.line,
                    statement.keyword,
                )
                if opens_block:
                    self._skip_block()
                continue

            if len(statement.args) < keyword.min_args:
                logger.error(
                    "Configuration error: %s:%d: '%s' requires %d argument(s) - ignoring",
                    self.source,
                    statement.line,
                    keyword.name,
                    keyword.min_args,
                )
                if opens_block:
                    self._skip_block()
                continue

            if keyword.opens_block:
                self._run_block(keyword, statement, ctx, opens_block)
                continue

            if opens_block:
                logger.warning(
                    "%s:%d: keyword '%s' does not take a block - skipping block",
                    self.source,
                    statement.line,
                    keyword.name,
                )
                self._skip_block()

            result = keyword.handler(ctx, statement.args)
            if result is HandlerResult.ABORT_BLOCK and nested:
                logger.debug(
                    "%s:%d: '%s' aborted the enclosing block",
                    self.source,
                    statement.line,
                    keyword.name,
                )
                self._skip_block()
                return True

        return False

    def _run_block(
        self,
        keyword: Keyword,
        statement: Statement,
        ctx: Any,
        has_body: bool,
    ) -> None:
        """Run a root keyword handler, its block and its end handler."""
        result = keyword.handler(ctx, statement.args)
        if result is HandlerResult.ABORT_BLOCK:
            logger.debug(
                "%s:%d: skipping '%s' block",
                self.source,
                statement.line,
                keyword.name,
            )
            if has_body:
                self._skip_block()
            return

        aborted = False
        if has_body and keyword.children is not None:
            aborted = self._scan_block(keyword.children, ctx)

        if not aborted and keyword.end_handler is not None:
            keyword.end_handler(ctx)

    def _next_is_open(self) -> bool:
        return (
            self._pos < len(self._statements)
            and self._statements[self._pos].kind is StatementKind.OPEN
        )

    def _skip_block(self) -> None:
        """Consume statements up to and including the current block's close."""
        depth = 1
        while self._pos < len(self._statements):
            kind = self._statements[self._pos].kind
            self._pos += 1
            if kind is StatementKind.OPEN:
                depth += 1
            elif kind is StatementKind.CLOSE:
                depth -= 1
                if depth == 0:
                    return
