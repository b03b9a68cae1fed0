"""Tests for the workspace symbol matching policy."""

import pytest

from lspnav.locations import SourceLocation, SymbolCandidate
from lspnav.symbol_matching import SymbolMatcher


def sym(name, kind="Function", container=None, path="/src/a.go", line=0):
    return SymbolCandidate(
        name=name,
        kind=kind,
        location=SourceLocation.at(path, line),
        container_name=container,
    )


@pytest.fixture
def matcher():
    return SymbolMatcher()


class TestUnqualifiedQuery:
    """Queries without a dot."""

    def test_exact_non_method(self, matcher):
        assert matcher.matches("Foo", sym("Foo"))
        assert not matcher.matches("Foo", sym("Bar"))

    def test_non_method_requires_exact_name(self, matcher):
        assert not matcher.matches("Foo", sym("Type.Foo", kind="Function"))
        assert not matcher.matches("Foo", sym("FooBar", kind="Class"))

    def test_method_with_qualified_index_name(self, matcher):
        assert matcher.matches("Foo", sym("Type.Foo", kind="Method"))
        assert matcher.matches("Foo", sym("Type::Foo", kind="Method"))
        assert matcher.matches("Foo", sym("Foo", kind="Method"))

    def test_method_suffix_needs_separator(self, matcher):
        assert not matcher.matches("Foo", sym("TypeFoo", kind="Method"))
        assert not matcher.matches("Foo", sym("Type.Foobar", kind="Method"))

    def test_kind_is_case_insensitive(self, matcher):
        assert matcher.matches("Foo", sym("Type.Foo", kind="method"))

    def test_unknown_kind_treated_as_non_method(self, matcher):
        assert matcher.matches("Foo", sym("Foo", kind=None))
        assert not matcher.matches("Foo", sym("Type.Foo", kind=None))


class TestQualifiedQuery:
    """Queries like Type.Method."""

    def test_exact_qualified(self, matcher):
        assert matcher.matches("Type.Foo", sym("Type.Foo", kind="Method"))

    def test_bare_method_name(self, matcher):
        assert matcher.matches("Type.Foo", sym("Foo", kind="Method"))
        assert matcher.matches("Type.Foo", sym("Foo", kind="Function"))

    def test_other_qualified_names_rejected(self, matcher):
        assert not matcher.matches("Type.Foo", sym("Other.Foo", kind="Method"))
        assert not matcher.matches("Type.Foo", sym("Type", kind="Class"))

    def test_deeply_qualified(self, matcher):
        assert matcher.matches("pkg.Type.Foo", sym("Foo", kind="Method"))
        assert matcher.matches("pkg.Type.Foo", sym("pkg.Type.Foo", kind="Method"))


class TestMatch:
    def test_keeps_index_order_and_all_matches(self, matcher):
        candidates = [
            sym("Foo", path="/b.go"),
            sym("Food"),
            sym("Type::Foo", kind="Method"),
            sym("Foo", path="/a.go"),
        ]
        result = matcher.match("Foo", candidates)
        assert [(c.name, c.location.file_path) for c in result] == [
            ("Foo", "/b.go"),
            ("Type::Foo", "/src/a.go"),
            ("Foo", "/a.go"),
        ]

    def test_no_match_is_empty(self, matcher):
        assert matcher.match("Missing", [sym("Foo")]) == []

    def test_custom_separators(self):
        matcher = SymbolMatcher(separators=("#",))
        assert matcher.matches("foo", sym("Klass#foo", kind="Method"))
        assert not matcher.matches("foo", sym("Klass.foo", kind="Method"))


class TestMatchDefinitions:
    """Method disambiguation for definition lookups."""

    def test_container_must_agree_with_qualifier(self, matcher):
        candidates = [
            sym("Foo", kind="Method", container="Type"),
            sym("Foo", kind="Method", container="Unrelated"),
            sym("Foo", kind="Method", container=None),
        ]
        result = matcher.match_definitions("Type.Foo", candidates)
        assert [c.container_name for c in result] == ["Type", None]

    def test_container_last_segment_compared(self, matcher):
        candidates = [
            sym("Foo", kind="Method", container="pkg.Type"),
            sym("Foo", kind="Method", container="ns::Type"),
        ]
        assert len(matcher.match_definitions("Type.Foo", candidates)) == 2

    def test_exact_qualified_kept_regardless_of_container(self, matcher):
        result = matcher.match_definitions("Type.Foo", [sym("Type.Foo", kind="Method", container="other")])
        assert len(result) == 1

    def test_non_methods_not_filtered(self, matcher):
        result = matcher.match_definitions("Type.Foo", [sym("Foo", kind="Function", container="x")])
        assert len(result) == 1

    def test_unqualified_same_as_match(self, matcher):
        candidates = [sym("Foo"), sym("Type::Foo", kind="Method"), sym("Bar")]
        assert matcher.match_definitions("Foo", candidates) == matcher.match("Foo", candidates)

    def test_last_segment(self, matcher):
        assert matcher.last_segment("a::b.C") == "C"
        assert matcher.last_segment("C") == "C"
