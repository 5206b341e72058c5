"""Unit tests for the configuration tokenizer."""

import pytest

from bfdconf.errors import ConfigParseError
from bfdconf.parser.lexer import StatementKind, split_line, tokenize


class TestSplitLine:
    """Tests for splitting a single line into tokens."""

    def test_plain_words(self):
        assert split_line("neighbor_ip 10.0.0.1", 1) == ["neighbor_ip", "10.0.0.1"]

    def test_comments_are_dropped(self):
        assert split_line("min_rx 50  # fast", 1) == ["min_rx", "50"]
        assert split_line("! whole line comment", 1) == []
        assert split_line("# another", 1) == []

    def test_hash_inside_word_is_kept(self):
        assert split_line("name a#b", 1) == ["name", "a#b"]

    def test_quoted_argument(self):
        assert split_line('bfd_instance "two words"', 1) == ["bfd_instance", "two words"]

    def test_braces_are_split(self):
        assert split_line("bfd_instance x{", 1) == ["bfd_instance", "x", "{"]
        assert split_line("}", 1) == ["}"]

    def test_unterminated_quote(self):
        with pytest.raises(ConfigParseError) as exc_info:
            split_line('bfd_instance "oops', 7)
        assert exc_info.value.line == 7


class TestTokenize:
    """Tests for turning text into statements."""

    def test_block_on_same_line(self):
        statements = tokenize("bfd_instance a {\n  passive\n}\n")
        kinds = [s.kind for s in statements]
        assert kinds == [
            StatementKind.KEYWORD,
            StatementKind.OPEN,
            StatementKind.KEYWORD,
            StatementKind.CLOSE,
        ]
        assert statements[0].keyword == "bfd_instance"
        assert statements[0].args == ["a"]
        assert statements[2].line == 2

    def test_brace_on_next_line_is_equivalent(self):
        same_line = tokenize("bfd_instance a {\npassive\n}")
        next_line = tokenize("bfd_instance a\n{\npassive\n}")
        assert [(s.kind, s.words) for s in same_line] == [
            (s.kind, s.words) for s in next_line
        ]

    def test_one_line_block(self):
        statements = tokenize("bfd_instance a { neighbor_ip 10.0.0.1 }")
        assert [s.kind for s in statements] == [
            StatementKind.KEYWORD,
            StatementKind.OPEN,
            StatementKind.KEYWORD,
            StatementKind.CLOSE,
        ]
        assert statements[2].words == ("neighbor_ip", "10.0.0.1")

    def test_blank_and_comment_lines_produce_nothing(self):
        assert tokenize("\n   \n# comment\n! comment\n") == []

    def test_unexpected_close(self):
        with pytest.raises(ConfigParseError) as exc_info:
            tokenize("passive\n}\n", source="bad.conf")
        assert exc_info.value.line == 2
        assert exc_info.value.details["source"] == "bad.conf"

    def test_missing_close(self):
        with pytest.raises(ConfigParseError, match="still open"):
            tokenize("bfd_instance a {\n  passive\n")
