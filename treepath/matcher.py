# -*- coding: utf-8 -*-
"""
@author:XuMing(xuming624@qq.com)
@description: Label matching and highlight rendering.

Two kinds of matching are used by the path walker and must stay separate:
  - exact_match: non-terminal path segments, whole label, case-insensitive
  - substring_match: the terminal segment, first case-insensitive occurrence

Both the substring matcher and the highlighter can be replaced through
``SearchOptions`` by anything implementing the protocols below.
"""
from typing import Any, NamedTuple, Optional, Protocol, runtime_checkable

from .tree import TreeNode


# ---------------------------------------------------------------------------
# Match / span values
# ---------------------------------------------------------------------------

class MatchResult(NamedTuple):
    """Outcome of matching a pattern against a node. start/end are only
    meaningful when ``matched`` is true."""
    matched: bool
    start: int = -1
    end: int = -1


NO_MATCH = MatchResult(False)


class HighlightSpan(NamedTuple):
    """``text[start:end]`` is the highlighted part of ``text``."""
    text: str
    start: int
    end: int

    @property
    def before(self) -> str:
        return self.text[:self.start]

    @property
    def matched(self) -> str:
        return self.text[self.start:self.end]

    @property
    def after(self) -> str:
        return self.text[self.end:]


# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------

@runtime_checkable
class Matcher(Protocol):
    """Strategy for matching the terminal segment against a node."""

    def __call__(self, node: TreeNode, pattern: str) -> MatchResult:
        ...


@runtime_checkable
class Highlighter(Protocol):
    """Turns a matched span into whatever the caller renders."""

    def __call__(self, text: str, start: int, end: int) -> Any:
        ...


# ---------------------------------------------------------------------------
# Matchers
# ---------------------------------------------------------------------------

def find_substring(text: str, pattern: str, folded: Optional[str] = None) -> MatchResult:
    """Case-insensitive first occurrence of ``pattern`` in ``text``.

    ``folded`` is ``text.lower()`` when the caller already has it. The span is
    returned in ``text`` coordinates even when lowercasing changes the length
    of some characters (``"İ".lower()`` is two code points).
    """
    if folded is None:
        folded = text.lower()
    needle = pattern.lower()
    index = folded.find(needle)
    if index < 0:
        return NO_MATCH
    if len(folded) == len(text):
        return MatchResult(True, index, index + len(needle))
    if not needle:
        return MatchResult(True, 0, 0)

    # folded position -> index of the source character it came from
    offsets = []
    for i, char in enumerate(text):
        offsets.extend([i] * len(char.lower()))
    return MatchResult(True, offsets[index], offsets[index + len(needle) - 1] + 1)


def substring_match(node: TreeNode, pattern: str) -> MatchResult:
    """Default matcher: case-insensitive substring of the node label."""
    return find_substring(node.label, pattern, folded=node.search_key)


def exact_match(label: str, segment: str) -> bool:
    """Whole-label comparison used for non-terminal path segments."""
    return label.lower() == segment.lower()


# ---------------------------------------------------------------------------
# Highlighters
# ---------------------------------------------------------------------------

def _has_span(text: str, start: int, end: int) -> bool:
    return 0 <= start < end <= len(text)


def span_highlighter(text: str, start: int, end: int) -> HighlightSpan:
    """Return the span itself, leaving rendering to the caller."""
    return HighlightSpan(text, start, end)


def marker_highlighter(open_mark: str = "[", close_mark: str = "]"):
    """Build a highlighter that wraps the matched part in markers."""

    def highlight(text: str, start: int, end: int) -> str:
        if not _has_span(text, start, end):
            return text
        return f"{text[:start]}{open_mark}{text[start:end]}{close_mark}{text[end:]}"

    return highlight


ANSI_HIGHLIGHT = "\033[1;33m"
ANSI_RESET = "\033[0m"

ansi_highlighter = marker_highlighter(ANSI_HIGHLIGHT, ANSI_RESET)
ansi_highlighter.__doc__ = "Bold yellow terminal highlight of the matched part."

plain_highlighter = marker_highlighter("[", "]")
