"""Source locations, symbol candidates and LSP payload conversion.

Everything here is 0-indexed internally. Conversion to the 1-indexed
``L<line>:C<col>`` form happens only when rendering for users.

Raw LSP payloads (plain dicts decoded from JSON-RPC) are converted with the
``from_lsp`` constructors so the rest of the pipeline only sees immutable
dataclasses.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import quote, unquote, urlparse

FILE_SCHEME = "file://"

# LSP SymbolKind table (textDocument/documentSymbol, workspace/symbol)
SYMBOL_KIND: Dict[int, str] = {
    1: "File",
    2: "Module",
    3: "Namespace",
    4: "Package",
    5: "Class",
    6: "Method",
    7: "Property",
    8: "Field",
    9: "Constructor",
    10: "Enum",
    11: "Interface",
    12: "Function",
    13: "Variable",
    14: "Constant",
    15: "String",
    16: "Number",
    17: "Boolean",
    18: "Array",
    19: "Object",
    20: "Key",
    21: "Null",
    22: "EnumMember",
    23: "Struct",
    24: "Event",
    25: "Operator",
    26: "TypeParameter",
}

METHOD_KIND = "Method"


def uri_to_path(uri: str) -> str:
    """Convert a ``file://`` URI to a plain path; other strings pass through."""
    if uri.startswith(FILE_SCHEME):
        # Handle file:///path and file://host/path
        parsed = urlparse(uri)
        return unquote(parsed.path)
    return uri


def path_to_uri(file_path: str) -> str:
    """Convert a plain path to a ``file://`` URI."""
    if file_path.startswith(FILE_SCHEME):
        return file_path
    return FILE_SCHEME + quote(str(Path(file_path)), safe="/:")


def symbol_kind_name(kind: Union[int, str, None]) -> Optional[str]:
    """Get human-readable symbol kind name."""
    if kind is None:
        return None
    if isinstance(kind, str):
        return kind
    return SYMBOL_KIND.get(kind, f"Unknown({kind})")


@dataclass(frozen=True, order=True)
class Position:
    """A zero-based line/character position."""

    line: int
    character: int = 0

    @classmethod
    def from_lsp(cls, data: Dict[str, Any]) -> "Position":
        return cls(line=int(data.get("line", 0)), character=int(data.get("character", 0)))

    def to_lsp(self) -> Dict[str, int]:
        return {"line": self.line, "character": self.character}


@dataclass(frozen=True, order=True)
class Range:
    """A span between two positions."""

    start: Position
    end: Position

    @classmethod
    def from_lsp(cls, data: Optional[Dict[str, Any]]) -> "Range":
        if not data:
            return cls(Position(0, 0), Position(0, 0))
        start = Position.from_lsp(data.get("start", {}))
        end = Position.from_lsp(data.get("end", data.get("start", {})))
        return cls(start, end)


@dataclass(frozen=True, order=True)
class SourceLocation:
    """A file plus a range inside it.

    ``file_path`` is always the plain path, never a URI, so it can be used
    directly as a grouping key and sort key.
    """

    file_path: str
    range: Range

    @classmethod
    def at(cls, file_path: str, line: int, character: int = 0) -> "SourceLocation":
        """Build a zero-width location at a 0-indexed line/character."""
        position = Position(line, character)
        return cls(uri_to_path(file_path), Range(position, position))

    @classmethod
    def from_lsp(cls, data: Dict[str, Any]) -> "SourceLocation":
        """Build from an LSP ``Location`` or ``LocationLink`` dict."""
        uri = data.get("uri", data.get("targetUri", ""))
        rng = data.get("range", data.get("targetRange"))
        return cls(uri_to_path(uri), Range.from_lsp(rng))

    @property
    def uri(self) -> str:
        return path_to_uri(self.file_path)

    @property
    def start(self) -> Position:
        return self.range.start

    @property
    def end(self) -> Position:
        return self.range.end

    def to_lsp(self) -> Dict[str, Any]:
        return {
            "uri": self.uri,
            "range": {"start": self.start.to_lsp(), "end": self.end.to_lsp()},
        }


def coerce_location(value: Union[SourceLocation, Dict[str, Any]]) -> SourceLocation:
    """Accept either a SourceLocation or a raw LSP location dict."""
    if isinstance(value, SourceLocation):
        return value
    return SourceLocation.from_lsp(value)


def coerce_locations(values: Optional[List[Any]]) -> List[SourceLocation]:
    if not values:
        return []
    return [coerce_location(value) for value in values]


@dataclass(frozen=True)
class SymbolCandidate:
    """An entry returned by a workspace symbol query."""

    name: str
    kind: Optional[str]
    location: SourceLocation
    container_name: Optional[str] = None

    @property
    def is_method(self) -> bool:
        return (self.kind or "").lower() == METHOD_KIND.lower()

    @classmethod
    def from_lsp(cls, data: Dict[str, Any]) -> "SymbolCandidate":
        """Build from an LSP ``SymbolInformation`` or ``WorkspaceSymbol`` dict.

        ``WorkspaceSymbol`` may carry a location without a range; the start of
        the file is used then.
        """
        return cls(
            name=data.get("name", ""),
            kind=symbol_kind_name(data.get("kind")),
            location=SourceLocation.from_lsp(data.get("location", {})),
            container_name=data.get("containerName") or None,
        )


def coerce_candidates(values: Optional[List[Any]]) -> List[SymbolCandidate]:
    if not values:
        return []
    return [
        value if isinstance(value, SymbolCandidate) else SymbolCandidate.from_lsp(value)
        for value in values
    ]


# ============================================================================
# DEFINITION RESULTS
# ============================================================================

class DefinitionShape(str, Enum):
    """Shapes a textDocument/definition response can take."""

    EMPTY = "empty"
    LOCATION = "location"  # a single Location
    LOCATIONS = "locations"  # Location[]
    LINKS = "links"  # LocationLink[]


def _is_link(value: Any) -> bool:
    return isinstance(value, dict) and "targetUri" in value


@dataclass(frozen=True)
class DefinitionResult:
    """Normalized textDocument/definition response.

    Example:
        >>> result = DefinitionResult.from_lsp(raw_response)
        >>> for location in result.to_locations():
        ...     print(location.file_path)
    """

    shape: DefinitionShape
    locations: Tuple[SourceLocation, ...] = ()

    @classmethod
    def from_lsp(cls, raw: Any) -> "DefinitionResult":
        if isinstance(raw, DefinitionResult):
            return raw
        if raw is None:
            return cls(DefinitionShape.EMPTY)
        if isinstance(raw, SourceLocation):
            return cls(DefinitionShape.LOCATION, (raw,))
        if isinstance(raw, dict):
            shape = DefinitionShape.LINKS if _is_link(raw) else DefinitionShape.LOCATION
            return cls(shape, (SourceLocation.from_lsp(raw),))
        if isinstance(raw, (list, tuple)):
            if not raw:
                return cls(DefinitionShape.EMPTY)
            shape = (
                DefinitionShape.LINKS
                if all(_is_link(item) for item in raw)
                else DefinitionShape.LOCATIONS
            )
            return cls(shape, tuple(coerce_location(item) for item in raw))
        raise TypeError(f"Unexpected definition result type: {type(raw).__name__}")

    def to_locations(self) -> List[SourceLocation]:
        """Flatten to a plain location list (link target ranges included)."""
        return list(self.locations)
