"""Reference and definition lookups against a language server.

CodeNavigator exposes four operations, position based and name based for
both references and definitions. All of them share one pipeline:

    resolve query -> request locations -> group by file -> compute windows -> render

Example usage:
    navigator = CodeNavigator(client, config=NavigatorConfig(context_lines=3))
    print(navigator.find_references("Calculator.add"))
    print(navigator.go_to_definition("/src/app.py", 12, 8))
"""

import logging
from typing import Any, Callable, List, Optional

from lspnav import rendering
from lspnav.client import DefinitionExpander, DiskFileReader, FileReader, LanguageClient
from lspnav.config import NavigatorConfig, get_config
from lspnav.errors import FileAccessError, NavigationError, ProtocolError
from lspnav.grouping import HitSet, group
from lspnav.locations import (
    DefinitionResult,
    Position,
    SourceLocation,
    SymbolCandidate,
    coerce_candidates,
    coerce_locations,
)
from lspnav.symbol_matching import SymbolMatcher
from lspnav.windows import span_window, windows

logger = logging.getLogger(__name__)


class CodeNavigator:
    """Answers "who references this?" and "show me the definition" queries.

    Every call is a fresh round trip to the language server; nothing is cached
    between calls.

    Error policy:
        - a failed references/definition/symbol request raises ProtocolError
        - a file that cannot be opened or read is logged and skipped (or shown
          inline with an error in reference reports)
        - no results returns a "not found" message, never an exception
    """

    def __init__(
        self,
        client: LanguageClient,
        expander: Optional[DefinitionExpander] = None,
        file_reader: Optional[FileReader] = None,
        matcher: Optional[SymbolMatcher] = None,
        config: Optional[NavigatorConfig] = None,
    ):
        self.client = client
        self.config = config if config is not None else get_config()
        self.file_reader = file_reader or DiskFileReader()
        self.matcher = matcher or SymbolMatcher(self.config.symbol_separators)

        if expander is None and callable(getattr(client, "get_full_definition", None)):
            expander = client
        self._expander = expander

    @property
    def expander(self) -> DefinitionExpander:
        if self._expander is None:
            # tree-sitter grammars are only loaded when a definition is requested
            from lspnav.definition_expansion import TreeSitterDefinitionExpander
            self._expander = TreeSitterDefinitionExpander()
        return self._expander

    @property
    def context_lines(self) -> int:
        return self.config.context_lines

    # =========================================================================
    # REFERENCES
    # =========================================================================

    def find_references_at_position(
        self,
        file_path: str,
        line: int,
        column: int,
        include_declaration: bool = False,
    ) -> str:
        """Find all references to the symbol at a 1-indexed file position."""
        self._request("could not open file", self.client.open_file, file_path)

        position = Position(line - 1, column - 1)
        raw = self._request(
            "failed to get references",
            self.client.references,
            file_path,
            position,
            include_declaration,
        )
        refs = self._parse("failed to parse references", coerce_locations, raw)
        if not refs:
            return rendering.no_references_at(file_path, line, column)

        return self._render_references(group(refs))

    def find_references(self, symbol_name: str) -> str:
        """Find references to every indexed symbol matching a name.

        A name can resolve to several symbols (overloads, same method name on
        different types); all of their references go into one report.
        """
        candidates = self.matcher.match(symbol_name, self._workspace_symbols(symbol_name))

        all_refs: List[SourceLocation] = []
        for candidate in candidates:
            loc = candidate.location
            # File is likely to be opened already, but may not be
            try:
                self.client.open_file(loc.file_path)
            except Exception as e:
                logger.error(f"Error opening file {loc.file_path}: {e}")
                continue

            refs = self._request(
                "failed to get references",
                self.client.references,
                loc.file_path,
                loc.start,
                False,
            )
            all_refs.extend(self._parse("failed to parse references", coerce_locations, refs))

        if not all_refs:
            return rendering.no_references_for(symbol_name)

        return self._render_references(group(all_refs))

    def _render_references(self, hits: HitSet) -> str:
        blocks = []
        for file_path in hits.files():
            file_hits = hits.hits_for(file_path)
            try:
                lines = self.file_reader.read_lines(file_path)
            except (OSError, FileAccessError) as e:
                logger.error(f"Error reading file {file_path}: {e}")
                blocks.append(rendering.render_unreadable_block(file_path, file_hits, e))
                continue

            file_windows = windows([hit.start.line for hit in file_hits], len(lines), self.context_lines)
            blocks.append(rendering.render_references_block(file_path, lines, file_hits, file_windows))

        logger.debug(f"Rendered {len(hits)} references across {len(blocks)} files")
        return "\n".join(blocks)

    # =========================================================================
    # DEFINITIONS
    # =========================================================================

    def go_to_definition(self, file_path: str, line: int, column: int) -> str:
        """Show the full definition of the symbol at a 1-indexed file position."""
        self._request("could not open file", self.client.open_file, file_path)

        position = Position(line - 1, column - 1)
        raw = self._request("failed to get definition", self.client.definition, file_path, position)
        result = self._parse("failed to parse definition", DefinitionResult.from_lsp, raw)

        locations = result.to_locations()
        if not locations:
            return rendering.no_definition_at(file_path, line, column)

        definitions = []
        for loc in locations:
            block = self._render_definition_at(loc)
            if block is not None:
                definitions.append(block)

        if not definitions:
            return rendering.unreadable_definition_at(file_path, line, column)

        return "".join(definitions)

    def _render_definition_at(self, loc: SourceLocation) -> Optional[str]:
        try:
            self.client.open_file(loc.file_path)
        except Exception as e:
            logger.error(f"Error opening file {loc.file_path}: {e}")
            return None

        try:
            _, expanded = self.expander.get_full_definition(loc)
        except Exception as e:
            logger.error(f"Error getting full definition at {loc.file_path}: {e}")
            return None

        try:
            lines = self.file_reader.read_lines(expanded.file_path)
        except (OSError, FileAccessError) as e:
            logger.error(f"Error reading file {expanded.file_path}: {e}")
            return None

        # Padding goes around the whole body, not the point the server returned
        file_windows = span_window(expanded.start.line, expanded.end.line, len(lines), self.context_lines)
        return rendering.render_definition_block(expanded, lines, file_windows)

    def read_definition(self, symbol_name: str) -> str:
        """Show the full definition of every indexed symbol matching a name."""
        candidates = self.matcher.match_definitions(symbol_name, self._workspace_symbols(symbol_name))

        definitions = []
        for candidate in candidates:
            logger.debug(f"Found symbol: {candidate.name}")
            loc = candidate.location

            try:
                self.client.open_file(loc.file_path)
            except Exception as e:
                logger.error(f"Error opening file {loc.file_path}: {e}")
                continue

            try:
                body, expanded = self.expander.get_full_definition(loc)
            except Exception as e:
                logger.error(f"Error getting definition of {candidate.name}: {e}")
                continue

            definitions.append(rendering.render_symbol_definition(candidate, body, expanded))

        if not definitions:
            return rendering.symbol_not_found(symbol_name)

        return "".join(definitions)

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _workspace_symbols(self, query: str) -> List[SymbolCandidate]:
        raw = self._request("failed to fetch symbol", self.client.workspace_symbol, query)
        return self._parse("failed to parse results", coerce_candidates, raw)

    @staticmethod
    def _parse(operation: str, convert: Callable[[Any], Any], raw: Any) -> Any:
        """Convert a raw server payload, turning malformed data into ProtocolError."""
        try:
            return convert(raw)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ProtocolError(operation, e) from e

    @staticmethod
    def _request(operation: str, fn: Callable[..., Any], *args: Any) -> Any:
        """Call the client, turning any failure into ProtocolError."""
        try:
            return fn(*args)
        except NavigationError:
            raise
        except Exception as e:
            raise ProtocolError(operation, e) from e
