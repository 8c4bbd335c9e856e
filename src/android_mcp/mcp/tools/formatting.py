"""
MCP Tool Output Formatting
==========================

Helpers shared by the listing tools: case-insensitive filtering, display
caps with a remainder note, and a few text fragments that recur across
tool responses.

Copyright (c) 2025 Hugo José Pinto & Contributors
"""

from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, TypeVar

T = TypeVar("T")


@dataclass
class Page:
    """
    A capped view of a listing.

    Attributes:
        shown: Entries to display (at most the cap)
        total: Number of entries before capping
    """
    shown: list
    total: int

    @property
    def remaining(self) -> int:
        return self.total - len(self.shown)


def filter_entries(
    entries: Iterable[T],
    text: Optional[str],
    key: Callable[[T], str] = str,
) -> List[T]:
    """Keep entries whose key contains `text`, ignoring case. No text keeps all."""
    entries = list(entries)
    if not text:
        return entries
    needle = text.casefold()
    return [e for e in entries if needle in key(e).casefold()]


def paginate(entries: Sequence[T], cap: int) -> Page:
    """Cap a listing to its first `cap` entries."""
    return Page(shown=list(entries[:cap]), total=len(entries))


def truncation_note(remaining: int, noun: str) -> str:
    """Note appended when a listing was capped. Empty when nothing was cut."""
    if remaining <= 0:
        return ""
    return f"... and {remaining} more {noun}. Use filter to narrow results."


def filter_suffix(text: Optional[str]) -> str:
    return f" (filtered by '{text}')" if text else ""


def numbered_list(lines: Iterable[str]) -> str:
    """Render lines as "1. first", "2. second", ..."""
    return "\n".join(f"{i}. {line}" for i, line in enumerate(lines, 1))


def format_size(size: int) -> str:
    return f"{size:,} bytes"
