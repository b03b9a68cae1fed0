"""Plain-text report rendering.

Reference block format::

    ---

    /path/to/file.py
    References in File: 2
    At: L10:C5, L12:C9

     5|...
    ...
    17|...

Line and column numbers are always 1-indexed here. Downstream consumers parse
this text, so the layout must stay stable.
"""

from typing import List, Optional, Sequence

from lspnav.locations import Position, Range, SourceLocation, SymbolCandidate
from lspnav.windows import DisplayWindow

BANNER = "---\n\n"
WINDOW_SEPARATOR = "...\n"


def format_position(position: Position) -> str:
    return f"L{position.line + 1}:C{position.character + 1}"


def format_range(rng: Range) -> str:
    return f"{format_position(rng.start)} - {format_position(rng.end)}"


def number_lines(lines: Sequence[str], start_line: int, width: Optional[int] = None) -> str:
    """Prefix each line with its line number.

    Args:
        lines: Source lines without trailing newlines
        start_line: 1-indexed number of the first line
        width: Number column width (default: width of the last number)
    """
    if width is None:
        width = len(str(start_line + max(len(lines), 1) - 1))
    return "".join(f"{start_line + i:>{width}}|{line}\n" for i, line in enumerate(lines))


def format_windows(file_lines: Sequence[str], windows: Sequence[DisplayWindow]) -> str:
    """Render windows of a file, separating non-adjacent windows with ``...``."""
    if not windows:
        return ""
    width = len(str(windows[-1].end + 1))
    chunks: List[str] = []
    last_end = -1
    for window in windows:
        if chunks and window.start > last_end + 1:
            chunks.append(WINDOW_SEPARATOR)
        chunks.append(number_lines(file_lines[window.start:window.end + 1], window.start + 1, width))
        last_end = window.end
    return "".join(chunks)


def references_header(file_path: str, hits: Sequence[SourceLocation]) -> str:
    header = f"{BANNER}{file_path}\nReferences in File: {len(hits)}\n"
    if hits:
        header += "At: " + ", ".join(format_position(hit.start) for hit in hits) + "\n"
    return header


def render_references_block(
    file_path: str,
    file_lines: Sequence[str],
    hits: Sequence[SourceLocation],
    windows: Sequence[DisplayWindow],
) -> str:
    """Render one file's references with numbered excerpts."""
    return references_header(file_path, hits) + "\n" + format_windows(file_lines, windows)


def render_unreadable_block(file_path: str, hits: Sequence[SourceLocation], error: BaseException) -> str:
    """Header plus an inline error when the file cannot be read."""
    return references_header(file_path, hits) + f"\nError reading file: {error}"


def render_definition_block(
    location: SourceLocation,
    file_lines: Sequence[str],
    windows: Sequence[DisplayWindow],
) -> str:
    """Render an expanded definition found from a position."""
    info = f"File: {location.file_path}\nDefinition at: {format_range(location.range)}\n\n"
    return BANNER + info + format_windows(file_lines, windows) + "\n"


def render_symbol_definition(candidate: SymbolCandidate, body: str, location: SourceLocation) -> str:
    """Render the full definition of a named symbol."""
    info = f"Symbol: {candidate.name}\nFile: {location.file_path}\n"
    if candidate.kind:
        info += f"Kind: {candidate.kind}\n"
    if candidate.container_name:
        info += f"Container Name: {candidate.container_name}\n"
    info += f"Range: {format_range(location.range)}\n\n"
    return BANNER + info + number_lines(body.split("\n"), location.start.line + 1) + "\n"


# ============================================================================
# EMPTY RESULT MESSAGES
# ============================================================================

def no_references_at(file_path: str, line: int, column: int) -> str:
    return f"No references found at {file_path}:{line}:{column}"


def no_references_for(symbol_name: str) -> str:
    return f"No references found for symbol: {symbol_name}"


def no_definition_at(file_path: str, line: int, column: int) -> str:
    return f"No definition found at {file_path}:{line}:{column}"


def unreadable_definition_at(file_path: str, line: int, column: int) -> str:
    return f"Could not read definition at {file_path}:{line}:{column}"


def symbol_not_found(symbol_name: str) -> str:
    return f"{symbol_name} not found"
