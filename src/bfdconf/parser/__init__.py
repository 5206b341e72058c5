"""Configuration tokenizer, keyword tables and block scanner."""

from bfdconf.parser.keywords import (
    EndHandler,
    Handler,
    HandlerResult,
    Keyword,
    KeywordTable,
    ignore_handler,
)
from bfdconf.parser.lexer import Statement, StatementKind, split_line, tokenize
from bfdconf.parser.scanner import BlockScanner

__all__ = [
    "BlockScanner",
    "EndHandler",
    "Handler",
    "HandlerResult",
    "Keyword",
    "KeywordTable",
    "Statement",
    "StatementKind",
    "ignore_handler",
    "split_line",
    "tokenize",
]
