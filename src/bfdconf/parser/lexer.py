"""Configuration tokenizer.

Turns keepalived-style configuration text into a flat sequence of
statements: keyword lines, block openings and block closings. Braces
are split out of the surrounding words, so ``bfd_instance x {`` and
``bfd_instance x`` followed by ``{`` on the next line are equivalent.
"""

import re
from dataclasses import dataclass
from enum import Enum

from bfdconf.errors import ConfigParseError

# A comment starts with '#' or '!' at the beginning of a token
_TOKEN_RE = re.compile(
    r"""\s*(?:
        (?P<comment>[#!].*)
        |"(?P<quoted>[^"]*)"
        |(?P<brace>[{}])
        |(?P<word>[^\s{}"]+)
    )""",
    re.VERBOSE,
)


class StatementKind(str, Enum):
    """Kind of a lexed statement."""

    KEYWORD = "keyword"
    OPEN = "open"
    CLOSE = "close"


@dataclass(frozen=True)
class Statement:
    """One keyword line, or a block brace."""

    kind: StatementKind
    line: int
    words: tuple[str, ...] = ()

    @property
    def keyword(self) -> str:
        return self.words[0] if self.words else ""

    @property
    def args(self) -> list[str]:
        return list(self.words[1:])


def split_line(text: str, line: int, source: str = "<string>") -> list[str]:
    """Split one physical line into tokens, dropping comments.

    Quoted tokens keep their inner whitespace; the quotes are removed.

    Raises:
        ConfigParseError: On an unterminated quoted string
    """
    tokens: list[str] = []
    pos = 0
    end = len(text.rstrip())
    while pos < end:
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise ConfigParseError(
                f"Unterminated quoted string at line {line}",
                line,
                source,
            )
        if match.group("comment") is not None:
            break
        if match.group("quoted") is not None:
            tokens.append(match.group("quoted"))
        elif match.group("brace") is not None:
            tokens.append(match.group("brace"))
        else:
            tokens.append(match.group("word"))
        pos = match.end()
    return tokens


def tokenize(text: str, source: str = "<string>") -> list[Statement]:
    """Tokenize configuration text into statements.

    Raises:
        ConfigParseError: On unbalanced braces or unterminated quotes
    """
    statements: list[Statement] = []
    depth = 0

    for number, raw in enumerate(text.splitlines(), start=1):
        words: list[str] = []
        for token in split_line(raw, number, source):
            if token not in ("{", "}"):
                words.append(token)
                continue

            if words:
                statements.append(Statement(StatementKind.KEYWORD, number, tuple(words)))
                words = []

            if token == "{":
                depth += 1
                statements.append(Statement(StatementKind.OPEN, number))
            else:
                if depth == 0:
                    raise ConfigParseError(
                        f"Unexpected '}}' at line {number}",
                        number,
                        source,
                    )
                depth -= 1
                statements.append(Statement(StatementKind.CLOSE, number))

        if words:
            statements.append(Statement(StatementKind.KEYWORD, number, tuple(words)))

    if depth:
        last_line = len(text.splitlines())
        raise ConfigParseError(
            f"Missing '}}' at end of input ({depth} block(s) still open)",
            last_line,
            source,
        )

    return statements
