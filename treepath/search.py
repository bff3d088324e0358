# -*- coding: utf-8 -*-
"""
@author:XuMing(xuming624@qq.com)
@description: Dot-path tree search with highlight spans.

The query is split into segments (see ``segments.parse_query``) and every
root node is walked with a position cursor into that segment list:

  1. Non-terminal segment (position < last):
     - the node label must equal the segment (case-insensitive), otherwise the
       whole branch is pruned without looking at descendants
     - if the next segment is the final, empty one (``system.query.``) the node
       is an expansion point: emitted expanded with all direct children shown
     - otherwise children are walked at position + 1 and the node is kept only
       if at least one child resolved
  2. Terminal segment (position == last):
     - empty: the node expands itself (folders) or passes through (leaves)
     - non-empty: substring match, scoped by ``DescendantPolicy``
  3. Single segment without trailing separator: global search, the segment is
     matched against every node at every depth.

Nodes above ``start_level`` are never matched; they are kept, expanded, only
when something below them matched.

Examples, for ``system -> {query -> {query_log}, processes -> {query}}``:
  - "sys"            -> system (matched, children collapsed)
  - "system."        -> system expanded, query and processes shown collapsed
  - "system.query."  -> system -> query expanded, query_log shown collapsed
  - "system.query"   -> system -> query (depth_scoped); recursive policy also
                        yields system -> processes -> query
  - "system.."       -> [] (no child is named "")
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from . import config
from .config import ConfigurationError
from .matcher import (
    HighlightSpan,
    Highlighter,
    Matcher,
    exact_match,
    span_highlighter,
    substring_match,
)
from .result import (
    ResultNode,
    TreeDepthError,
    empty_children,
    matched,
    passthrough,
    passthrough_children,
)
from .segments import ParsedQuery, parse_query
from .tree import TreeNode

logger = logging.getLogger(__name__)


class DescendantPolicy(str, Enum):
    """How far below the matched prefix a terminal fuzzy segment may match."""
    DEPTH_SCOPED = "depth_scoped"
    RECURSIVE = "recursive"


# ---------------------------------------------------------------------------
# Options / context
# ---------------------------------------------------------------------------

@dataclass
class SearchOptions:
    """Caller configuration for :func:`search_tree`."""
    separator: str = config.DEFAULT_SEPARATOR
    start_level: int = config.DEFAULT_START_LEVEL
    matcher: Matcher = substring_match
    highlighter: Highlighter = span_highlighter
    descendant_policy: DescendantPolicy = DescendantPolicy(config.DEFAULT_DESCENDANT_POLICY)
    max_depth: int = config.DEFAULT_MAX_DEPTH

    def __post_init__(self):
        if not isinstance(self.separator, str) or self.separator == "":
            raise ConfigurationError("separator must be a non-empty string")
        if self.start_level < 0:
            raise ConfigurationError(f"start_level must be >= 0, got {self.start_level}")
        if self.max_depth < 1:
            raise ConfigurationError(f"max_depth must be >= 1, got {self.max_depth}")
        try:
            self.descendant_policy = DescendantPolicy(self.descendant_policy)
        except ValueError:
            choices = ", ".join(p.value for p in DescendantPolicy)
            raise ConfigurationError(
                f"Unknown descendant_policy {self.descendant_policy!r} (choose from: {choices})"
            ) from None
        if not callable(self.matcher) or not callable(self.highlighter):
            raise ConfigurationError("matcher and highlighter must be callable")

    @classmethod
    def from_env(cls, environ=None, **overrides) -> "SearchOptions":
        """Options from defaults, then environment, then explicit overrides."""
        settings = config.settings_from_env(environ)
        settings.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**settings)


@dataclass(frozen=True)
class SearchContext:
    """Immutable per-call state shared by every step of one walk."""
    segments: tuple
    has_trailing_separator: bool
    match: Matcher
    highlight: Highlighter
    start_level: int = 0
    descendant_policy: DescendantPolicy = DescendantPolicy.DEPTH_SCOPED
    max_depth: int = config.DEFAULT_MAX_DEPTH
    is_global: bool = field(init=False)

    def __post_init__(self):
        is_global = len(self.segments) == 1 and not self.has_trailing_separator
        object.__setattr__(self, "is_global", is_global)

    @classmethod
    def build(cls, parsed: ParsedQuery, options: SearchOptions) -> "SearchContext":
        return cls(
            segments=parsed.segments,
            has_trailing_separator=parsed.has_trailing_separator,
            match=options.matcher,
            highlight=options.highlighter,
            start_level=options.start_level,
            descendant_policy=options.descendant_policy,
            max_depth=options.max_depth,
        )

    @property
    def last_position(self) -> int:
        return len(self.segments) - 1


# ---------------------------------------------------------------------------
# Path walker
# ---------------------------------------------------------------------------

class PathWalker:
    """
    Recursive segment matcher over a tree of TreeNode.

    ``walk(node, position)`` returns the ResultNode for ``node`` when it (or
    its subtree, depending on the state) satisfies ``segments[position:]``,
    and ``None`` otherwise. Children are always resolved before their parent
    is assembled.
    """

    def __init__(self, context: SearchContext):
        self.context = context
        self._visited = 0

    @property
    def visited(self) -> int:
        return self._visited

    def run(self, roots: list[TreeNode]) -> list[ResultNode]:
        """Walk every root, honouring ``start_level``."""
        return self._walk_level(roots, level=0)

    def _walk_level(self, nodes: list[TreeNode], level: int) -> list[ResultNode]:
        results = []
        if level < self.context.start_level:
            # Structural levels: not matched, kept only if something below matched
            for node in nodes:
                self._enter(level)
                if not node.children:
                    continue
                children = self._walk_level(node.children, level + 1)
                if children:
                    results.append(passthrough(node, expanded=True, children=children))
            return results

        for node in nodes:
            result = self.walk(node, 0, level)
            if result is not None:
                results.append(result)
        return results

    def _enter(self, depth: int) -> None:
        if depth >= self.context.max_depth:
            raise TreeDepthError(
                f"Tree is deeper than max_depth={self.context.max_depth}"
            )
        self._visited += 1

    def _highlight(self, node: TreeNode, start: int, end: int):
        span = HighlightSpan(node.label, start, end)
        return span, self.context.highlight(node.label, start, end)

    def walk(self, node: TreeNode, position: int = 0, depth: int = 0) -> Optional[ResultNode]:
        self._enter(depth)
        ctx = self.context
        if ctx.is_global:
            return self._search_subtree(node, ctx.segments[0], depth, keep_unmatched=True)

        segment = ctx.segments[position]
        if position < ctx.last_position:
            return self._walk_path_segment(node, segment, position, depth)
        if segment == "":
            return self._expand_terminal(node, depth)
        if ctx.descendant_policy is DescendantPolicy.RECURSIVE:
            return self._search_subtree(node, segment, depth, keep_unmatched=False)
        return self._match_terminal(node, segment, depth)

    def _walk_path_segment(
        self, node: TreeNode, segment: str, position: int, depth: int
    ) -> Optional[ResultNode]:
        """Non-terminal segment: exact label match, then descend one level."""
        if not exact_match(node.label, segment):
            return None

        span, display = self._highlight(node, 0, len(node.label))
        next_position = position + 1
        if next_position == self.context.last_position and self.context.segments[next_position] == "":
            return matched(
                node, span, display,
                passthrough_children(node, depth, self.context.max_depth), expanded=True,
            )

        children = []
        for child in node.children:
            child_result = self.walk(child, next_position, depth + 1)
            if child_result is not None:
                children.append(child_result)
        if not children:
            return None
        return matched(node, span, display, children, expanded=True)

    def _expand_terminal(self, node: TreeNode, depth: int) -> ResultNode:
        """Terminal empty segment: a folder shows all its direct children."""
        if node.is_folder and node.children:
            span, display = self._highlight(node, 0, len(node.label))
            children = passthrough_children(node, depth, self.context.max_depth)
            return matched(node, span, display, children, expanded=True)
        return passthrough(node, depth=depth, max_depth=self.context.max_depth)

    def _match_terminal(self, node: TreeNode, segment: str, depth: int) -> Optional[ResultNode]:
        """Terminal fuzzy segment, this node only (depth-scoped policy)."""
        result = self.context.match(node, segment)
        if not result.matched:
            return None
        span, display = self._highlight(node, result.start, result.end)
        children = passthrough_children(node, depth, self.context.max_depth)
        return matched(node, span, display, children, expanded=False)

    def _search_subtree(
        self, node: TreeNode, segment: str, depth: int, keep_unmatched: bool
    ) -> Optional[ResultNode]:
        """Fuzzy match ``segment`` against the node and every descendant.

        With ``keep_unmatched`` a matched node also lists its non-matching
        direct children (collapsed); otherwise only qualifying descendants are
        attached.
        """
        result = self.context.match(node, segment)

        pairs = []
        any_child_matched = False
        for child in node.children:
            self._enter(depth + 1)
            child_result = self._search_subtree(child, segment, depth + 1, keep_unmatched)
            if child_result is not None:
                any_child_matched = True
            pairs.append((child, child_result))

        if not result.matched and not any_child_matched:
            return None

        if result.matched and keep_unmatched and node.children:
            children = [
                child_result if child_result is not None
                else passthrough(child, depth=depth + 1, max_depth=self.context.max_depth)
                for child, child_result in pairs
            ]
        elif any_child_matched:
            children = [child_result for _, child_result in pairs if child_result is not None]
        else:
            children = empty_children(node)

        if not result.matched:
            return passthrough(node, expanded=True, children=children)
        span, display = self._highlight(node, result.start, result.end)
        return matched(node, span, display, children, expanded=any_child_matched)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def search_tree(
    tree: Optional[list[TreeNode]],
    query: str,
    options: Optional[SearchOptions] = None,
    **kwargs: Any,
):
    """Filter ``tree`` by a dot-path ``query``.

    Args:
        tree: root nodes (``None`` is treated as empty)
        query: raw query string, e.g. ``"system.query."``
        options: SearchOptions; keyword arguments build one when omitted

    Returns:
        The input list itself for an empty (or separator-only) query,
        otherwise a new list of ResultNode in input order. ``[]`` means no match.
    """
    if options is None:
        options = SearchOptions(**kwargs)
    elif kwargs:
        raise TypeError("Pass either options or keyword options, not both")

    if query == "":
        return tree if tree is not None else []
    if not tree:
        return []

    parsed = parse_query(query, options.separator)
    if parsed.is_empty:
        return tree

    context = SearchContext.build(parsed, options)
    logger.debug(
        "Query %r -> segments=%s trailing=%s global=%s policy=%s",
        query, list(parsed.segments), parsed.has_trailing_separator,
        context.is_global, context.descendant_policy.value,
    )
    walker = PathWalker(context)
    results = walker.run(tree)
    logger.debug("Search %r: %d root result(s), %d node(s) visited",
                 query, len(results), walker.visited)
    return results
