"""Tests for the plain-text report format."""

from lspnav import rendering
from lspnav.locations import Position, Range, SourceLocation, SymbolCandidate
from lspnav.windows import DisplayWindow

FILE_LINES = [f"line {i + 1}" for i in range(12)]


class TestNumberLines:
    def test_numbers_are_right_aligned(self):
        assert rendering.number_lines(["a", "b", "c"], 9) == " 9|a\n10|b\n11|c\n"

    def test_explicit_width(self):
        assert rendering.number_lines(["a"], 3, width=3) == "  3|a\n"

    def test_empty_lines_are_kept(self):
        assert rendering.number_lines(["", "x"], 1) == "1|\n2|x\n"


class TestFormatWindows:
    def test_separator_between_windows(self):
        text = rendering.format_windows(FILE_LINES, [DisplayWindow(0, 1), DisplayWindow(9, 10)])
        assert text == " 1|line 1\n 2|line 2\n...\n10|line 10\n11|line 11\n"

    def test_no_windows(self):
        assert rendering.format_windows(FILE_LINES, []) == ""


class TestReferencesBlock:
    """Exact block layout consumed downstream."""

    def test_block_layout(self):
        hits = [SourceLocation.at("/src/a.py", 1, 4), SourceLocation.at("/src/a.py", 9, 0)]
        block = rendering.render_references_block(
            "/src/a.py", FILE_LINES, hits, [DisplayWindow(1, 1), DisplayWindow(9, 9)]
        )
        assert block == (
            "---\n\n"
            "/src/a.py\n"
            "References in File: 2\n"
            "At: L2:C5, L10:C1\n"
            "\n"
            " 2|line 2\n"
            "...\n"
            "10|line 10\n"
        )

    def test_unreadable_block_keeps_header(self):
        hits = [SourceLocation.at("/gone.py", 0, 0)]
        block = rendering.render_unreadable_block("/gone.py", hits, OSError("No such file"))
        assert block == (
            "---\n\n/gone.py\nReferences in File: 1\nAt: L1:C1\n"
            "\nError reading file: No such file"
        )


class TestDefinitionBlocks:
    def test_definition_at_position(self):
        loc = SourceLocation("/src/a.py", Range(Position(3, 0), Position(4, 8)))
        block = rendering.render_definition_block(loc, FILE_LINES, [DisplayWindow(2, 5)])
        assert block == (
            "---\n\n"
            "File: /src/a.py\n"
            "Definition at: L4:C1 - L5:C9\n\n"
            "3|line 3\n4|line 4\n5|line 5\n6|line 6\n"
            "\n"
        )

    def test_symbol_definition_with_kind_and_container(self):
        loc = SourceLocation("/src/server.go", Range(Position(9, 0), Position(10, 1)))
        candidate = SymbolCandidate("Start", "Method", loc, container_name="Server")
        block = rendering.render_symbol_definition(candidate, "func (s *Server) Start() {\n}", loc)
        assert block == (
            "---\n\n"
            "Symbol: Start\n"
            "File: /src/server.go\n"
            "Kind: Method\n"
            "Container Name: Server\n"
            "Range: L10:C1 - L11:C2\n\n"
            "10|func (s *Server) Start() {\n"
            "11|}\n"
            "\n"
        )

    def test_symbol_definition_without_optional_fields(self):
        loc = SourceLocation.at("/a.py", 0)
        block = rendering.render_symbol_definition(SymbolCandidate("x", None, loc), "x = 1", loc)
        assert "Kind:" not in block
        assert "Container Name:" not in block
        assert block.endswith("Range: L1:C1 - L1:C1\n\n1|x = 1\n\n")


class TestMessages:
    def test_not_found_messages(self):
        assert rendering.no_references_at("/a.py", 3, 7) == "No references found at /a.py:3:7"
        assert rendering.no_references_for("Foo") == "No references found for symbol: Foo"
        assert rendering.no_definition_at("/a.py", 3, 7) == "No definition found at /a.py:3:7"
        assert rendering.unreadable_definition_at("/a.py", 1, 1) == "Could not read definition at /a.py:1:1"
        assert rendering.symbol_not_found("Foo") == "Foo not found"
