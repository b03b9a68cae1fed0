"""Display window computation for source excerpts.

Turns a scattered set of hit lines in one file into the minimal, sorted list
of non-overlapping line ranges that cover every hit plus context padding.
Ranges that overlap or touch are merged so two nearby excerpts never print
as separate blocks with a one-line gap between them.
"""

from dataclasses import dataclass
from typing import Iterable, List


@dataclass(frozen=True, order=True)
class DisplayWindow:
    """Inclusive, 0-indexed line range chosen for rendering."""

    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __contains__(self, line: object) -> bool:
        return isinstance(line, int) and self.start <= line <= self.end


def merge(windows: Iterable[DisplayWindow]) -> List[DisplayWindow]:
    """Merge overlapping or adjacent windows.

    Merging an already merged list returns an equal list.
    """
    merged: List[DisplayWindow] = []
    for window in sorted(windows):
        if merged and window.start <= merged[-1].end + 1:
            last = merged[-1]
            merged[-1] = DisplayWindow(last.start, max(last.end, window.end))
        else:
            merged.append(window)
    return merged


def windows(hit_lines: Iterable[int], line_count: int, context_lines: int) -> List[DisplayWindow]:
    """Compute display windows for hits in a file.

    Args:
        hit_lines: 0-indexed lines containing hits (duplicates allowed)
        line_count: Number of lines in the file
        context_lines: Padding lines on each side of a hit

    Returns:
        Sorted, merged windows clipped to ``[0, line_count - 1]``.

    Raises:
        ValueError: If context_lines is negative.
    """
    if context_lines < 0:
        raise ValueError(f"context_lines must be >= 0, got {context_lines}")
    if line_count <= 0:
        return []

    last_line = line_count - 1
    candidates = []
    for line in set(hit_lines):
        # Stale index positions can point past the end of the file
        line = min(max(line, 0), last_line)
        candidates.append(
            DisplayWindow(max(0, line - context_lines), min(last_line, line + context_lines))
        )
    return merge(candidates)


def span_window(start_line: int, end_line: int, line_count: int, context_lines: int) -> List[DisplayWindow]:
    """Pad a multi-line range (e.g. an expanded definition body)."""
    if context_lines < 0:
        raise ValueError(f"context_lines must be >= 0, got {context_lines}")
    if line_count <= 0:
        return []
    last_line = line_count - 1
    start = min(max(start_line, 0), last_line)
    end = min(max(end_line, start), last_line)
    return [DisplayWindow(max(0, start - context_lines), min(last_line, end + context_lines))]
