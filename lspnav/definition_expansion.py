"""Definition expansion using tree-sitter.

Expands a point location reported by the language server (usually the
symbol's name) to the full syntactic body of the enclosing definition.
Supports Python, TypeScript, JavaScript and Go.
"""

import logging
from pathlib import Path
from typing import Dict, FrozenSet, Optional, Tuple

import tree_sitter_go as tsgo
import tree_sitter_javascript as tsjs
import tree_sitter_python as tspython
import tree_sitter_typescript as tstype
from tree_sitter import Language, Node, Parser

from lspnav.errors import FileAccessError, UnsupportedLanguageError
from lspnav.locations import Position, Range, SourceLocation

logger = logging.getLogger(__name__)

LANGUAGE_BY_SUFFIX = {
    ".py": "python",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".go": "go",
}

DEFINITION_NODES: Dict[str, FrozenSet[str]] = {
    "python": frozenset({"function_definition", "class_definition", "decorated_definition"}),
    "typescript": frozenset({
        "function_declaration",
        "class_declaration",
        "method_definition",
        "interface_declaration",
        "type_alias_declaration",
        "enum_declaration",
        "lexical_declaration",
    }),
    "javascript": frozenset({
        "function_declaration",
        "class_declaration",
        "method_definition",
        "lexical_declaration",
    }),
    "go": frozenset({"function_declaration", "method_declaration", "type_declaration"}),
}
DEFINITION_NODES["tsx"] = DEFINITION_NODES["typescript"]

# Nodes that wrap a definition and belong to its body (decorators)
WRAPPER_NODES = frozenset({"decorated_definition"})


class TreeSitterDefinitionExpander:
    """Multi-language definition expander using tree-sitter."""

    def __init__(self, encoding: str = "utf-8"):
        """Initialize language parsers."""
        self.encoding = encoding
        self._parsers: Dict[str, Parser] = {}

        self._parsers["python"] = Parser(Language(tspython.language()))
        self._parsers["typescript"] = Parser(Language(tstype.language_typescript()))
        self._parsers["tsx"] = Parser(Language(tstype.language_tsx()))
        self._parsers["javascript"] = Parser(Language(tsjs.language()))
        self._parsers["go"] = Parser(Language(tsgo.language()))

    def detect_language(self, file_path: str) -> str:
        """Detect language from file extension."""
        return LANGUAGE_BY_SUFFIX.get(Path(file_path).suffix.lower(), "unknown")

    def supports_file(self, file_path: str) -> bool:
        return self.detect_language(file_path) in self._parsers

    def get_full_definition(self, location: SourceLocation) -> Tuple[str, SourceLocation]:
        """Return the enclosing definition's text and range.

        Args:
            location: Point or range reported by the language server

        Returns:
            (body text, expanded location). When no definition node encloses
            the location, the single line at the location is returned.

        Raises:
            UnsupportedLanguageError: If the file type has no parser.
            FileAccessError: If the file cannot be read.
        """
        file_path = location.file_path
        language = self.detect_language(file_path)
        if language not in self._parsers:
            raise UnsupportedLanguageError(file_path, f"language '{language}' is not supported")

        try:
            source = Path(file_path).read_bytes()
        except OSError as e:
            raise FileAccessError(file_path, str(e)) from e

        tree = self._parsers[language].parse(source)
        node = self._innermost_definition(tree.root_node, location.start.line, DEFINITION_NODES[language])
        lines = source.decode(self.encoding, errors="replace").split("\n")

        if node is None:
            line = min(location.start.line, len(lines) - 1)
            logger.debug(f"No enclosing definition at {file_path}:{line + 1}")
            text = lines[line]
            rng = Range(Position(line, 0), Position(line, len(text)))
            return text, SourceLocation(file_path, rng)

        start_row, start_col = node.start_point
        end_row, end_col = node.end_point
        body = source[node.start_byte:node.end_byte].decode(self.encoding, errors="replace")
        # Keep the indentation of the first line so numbered output lines up
        body = lines[start_row][:start_col] + body
        rng = Range(Position(start_row, start_col), Position(end_row, end_col))
        return body, SourceLocation(file_path, rng)

    @staticmethod
    def _innermost_definition(root: Node, line: int, kinds: FrozenSet[str]) -> Optional[Node]:
        found = None
        node = root
        while node is not None:
            if node.type in kinds:
                found = node
            next_node = None
            for child in node.children:
                if child.start_point[0] <= line <= child.end_point[0]:
                    next_node = child
                    break
            node = next_node
        if found is not None and found.parent is not None and found.parent.type in WRAPPER_NODES:
            found = found.parent
        return found
