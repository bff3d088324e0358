# -*- coding: utf-8 -*-
"""
@author:XuMing(xuming624@qq.com)
@description: Query segment parsing.

A query such as ``system.query.`` is split on the separator into
``["system", "query", ""]``. Leading empty segments are dropped; once a
non-empty segment has been seen every later segment is kept, so empty strings
in the middle or at the end stay meaningful (a final one means "expand").
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class ParsedQuery:
    segments: tuple = ()
    has_trailing_separator: bool = False

    @property
    def is_empty(self) -> bool:
        """True when the query should leave the tree untouched."""
        return len(self.segments) == 0

    @property
    def is_global(self) -> bool:
        """Single segment, no trailing separator: match at every depth."""
        return len(self.segments) == 1 and not self.has_trailing_separator


def parse_query(query: str, separator: str = ".") -> ParsedQuery:
    """Split a raw query into path segments.

    Whitespace-only segments count as empty. Returns an empty ParsedQuery for
    ``""`` and for separator-only input like ``"..."``.
    """
    if not query:
        return ParsedQuery()

    segments = []
    seen_non_empty = False
    for segment in query.split(separator):
        if segment.strip() != "":
            seen_non_empty = True
            segments.append(segment)
        elif seen_non_empty:
            segments.append("")

    return ParsedQuery(
        segments=tuple(segments),
        has_trailing_separator=query.endswith(separator),
    )
