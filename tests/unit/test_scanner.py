"""Unit tests for keyword tables and the block scanner."""

import logging

import pytest

from bfdconf.errors import KeywordError
from bfdconf.parser.keywords import HandlerResult, KeywordTable, ignore_handler
from bfdconf.parser.lexer import tokenize
from bfdconf.parser.scanner import BlockScanner


class Recorder:
    """Context object that records handler calls."""

    def __init__(self):
        self.calls: list[tuple[str, tuple[str, ...]]] = []

    def handler(self, name, result=HandlerResult.CONTINUE):
        def handle(ctx, args):
            ctx.calls.append((name, tuple(args)))
            return result

        return handle

    def end(self, name):
        def handle(ctx):
            ctx.calls.append((f"end:{name}", ()))

        return handle


def build_table(rec: Recorder, abort_on: str | None = None) -> KeywordTable:
    table = KeywordTable()
    root = table.install_root("block", rec.handler("block"), end_handler=rec.end("block"))
    root.children.install("set", rec.handler("set"), min_args=1)
    root.children.install("flag", rec.handler("flag"))
    root.children.install(
        "fatal",
        rec.handler("fatal", HandlerResult.ABORT_BLOCK),
    )
    table.install_root(
        "skipme",
        rec.handler("skipme", HandlerResult.ABORT_BLOCK),
        end_handler=rec.end("skipme"),
    )
    return table


def scan(text: str) -> Recorder:
    rec = Recorder()
    BlockScanner(build_table(rec)).scan(tokenize(text), rec)
    return rec


class TestKeywordTable:
    """Tests for keyword registration."""

    def test_duplicate_keyword_rejected(self):
        table = KeywordTable()
        table.install("passive", ignore_handler)
        with pytest.raises(KeywordError):
            table.install("passive", ignore_handler)

    def test_keyword_must_be_one_word(self):
        table = KeywordTable()
        with pytest.raises(KeywordError):
            table.install("two words", ignore_handler)

    def test_conditional_install(self):
        rec = Recorder()
        table = KeywordTable()
        table.install_conditional("live", rec.handler("live"), True)
        table.install_conditional("dead", rec.handler("dead"), False)

        assert table.names() == ["live", "dead"]
        assert table.active_names() == ["live"]
        assert table.get("dead").handler is ignore_handler

    def test_root_keyword_owns_children(self):
        table = KeywordTable()
        root = table.install_root("block", ignore_handler)
        root.children.install("child", ignore_handler)

        assert root.opens_block
        assert "child" in root.children
        assert "child" not in table


class TestBlockScanner:
    """Tests for dispatch, nesting and block skipping."""

    def test_handlers_and_end_handler_run_in_order(self):
        rec = scan("block a {\n set 1\n flag\n}\n")
        assert rec.calls == [
            ("block", ("a",)),
            ("set", ("1",)),
            ("flag", ()),
            ("end:block", ()),
        ]

    def test_child_abort_skips_rest_and_end_handler(self):
        rec = scan("block a {\n set 1\n fatal\n set 2\n}\nblock b {\n set 3\n}\n")
        assert rec.calls == [
            ("block", ("a",)),
            ("set", ("1",)),
            ("fatal", ()),
            ("block", ("b",)),
            ("set", ("3",)),
            ("end:block", ()),
        ]

    def test_root_abort_skips_whole_block(self):
        rec = scan("skipme x {\n set 1\n nested {\n set 2\n }\n}\nblock b {\n}\n")
        assert rec.calls == [
            ("skipme", ("x",)),
            ("block", ("b",)),
            ("end:block", ()),
        ]

    def test_block_without_body_still_closes(self):
        rec = scan("block a\n")
        assert rec.calls == [("block", ("a",)), ("end:block", ())]

    def test_unknown_keyword_and_block_skipped(self, caplog):
        caplog.set_level(logging.WARNING)
        rec = scan("vrrp_instance VI_1 {\n set 9\n}\nblock a {\n bogus 1\n set 2\n}\n")

        assert rec.calls == [
            ("block", ("a",)),
            ("set", ("2",)),
            ("end:block", ()),
        ]
        assert "unknown keyword 'vrrp_instance'" in caplog.text
        assert "unknown keyword 'bogus'" in caplog.text

    def test_missing_argument_is_logged(self, caplog):
        caplog.set_level(logging.ERROR)
        rec = scan("block a {\n set\n}\nblock\n{\n set 1\n}\n")

        assert rec.calls == [("block", ("a",)), ("end:block", ())]
        assert "'set' requires 1 argument(s)" in caplog.text
        assert "'block' requires 1 argument(s)" in caplog.text

    def test_child_with_unexpected_block(self, caplog):
        caplog.set_level(logging.WARNING)
        rec = scan("block a {\n flag {\n set 1\n }\n set 2\n}\n")

        assert rec.calls == [
            ("block", ("a",)),
            ("flag", ()),
            ("set", ("2",)),
            ("end:block", ()),
        ]
        assert "does not take a block" in caplog.text

    def test_abort_at_top_level_does_not_eat_input(self):
        rec = Recorder()
        table = build_table(rec)
        table.install("stop", rec.handler("stop", HandlerResult.ABORT_BLOCK))
        BlockScanner(table).scan(tokenize("stop\nblock a {\n}\n"), rec)

        assert rec.calls == [("stop", ()), ("block", ("a",)), ("end:block", ())]

    def test_scanner_is_reusable(self):
        rec = Recorder()
        scanner = BlockScanner(build_table(rec))
        scanner.scan(tokenize("block a {\n}\n"), rec)
        scanner.scan(tokenize("block b {\n}\n"), rec)

        assert [c for c in rec.calls if not c[0].startswith("end")] == [
            ("block", ("a",)),
            ("block", ("b",)),
        ]
