"""Collaborator interfaces used by the navigator.

The language server transport and session lifecycle live outside this
package. Anything that provides these methods can be plugged in, e.g. a thin
wrapper around a JSON-RPC stdio client.
"""

from pathlib import Path
from typing import Any, List, Protocol, Tuple, runtime_checkable

from lspnav.locations import Position, SourceLocation


@runtime_checkable
class LanguageClient(Protocol):
    """Requests the navigator issues against a language server.

    Methods raise on failure; the navigator turns those into ProtocolError.
    Results may be lspnav dataclasses or raw LSP dicts.
    """

    def open_file(self, file_path: str) -> None:
        """textDocument/didOpen; must be idempotent."""
        ...

    def references(self, file_path: str, position: Position, include_declaration: bool) -> List[Any]:
        """textDocument/references -> Location[]"""
        ...

    def definition(self, file_path: str, position: Position) -> Any:
        """textDocument/definition -> Location | Location[] | LocationLink[] | None"""
        ...

    def workspace_symbol(self, query: str) -> List[Any]:
        """workspace/symbol -> SymbolInformation[] | WorkspaceSymbol[]"""
        ...


@runtime_checkable
class DefinitionExpander(Protocol):
    """Expands a point location to its enclosing definition."""

    def get_full_definition(self, location: SourceLocation) -> Tuple[str, SourceLocation]:
        ...


@runtime_checkable
class FileReader(Protocol):
    def read_lines(self, file_path: str) -> List[str]:
        ...


class DiskFileReader:
    """Reads files from the local filesystem.

    Lines are split on ``\\n`` only, so a trailing newline produces a final
    empty line and line numbers match what the server reports.
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def read_lines(self, file_path: str) -> List[str]:
        text = Path(file_path).read_text(encoding=self.encoding, errors="replace")
        return text.split("\n")
