# -*- coding: utf-8 -*-
"""
@author:XuMing(xuming624@qq.com)
@description: Search result nodes and the helpers that assemble them.

Result trees are always freshly allocated: the input TreeNode objects are
never mutated and never shared with the output, and sibling order follows the
input tree.
"""
from dataclasses import dataclass, field
from typing import Any, Optional

from .matcher import HighlightSpan
from .tree import NodeKind, TreeNode


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------

@dataclass
class ResultNode:
    """A node of a search result tree."""
    id: str
    label: str
    kind: NodeKind
    expanded: bool = False
    highlight: Optional[HighlightSpan] = None
    display: Any = None
    children: Optional[list] = None
    data: dict = field(default_factory=dict)

    def __post_init__(self):
        if self.display is None:
            self.display = self.label

    @property
    def matched(self) -> bool:
        """True if the node's own label satisfied a query segment."""
        return self.highlight is not None

    def walk(self):
        """Yield this node and its descendants, depth first."""
        yield self
        for child in self.children or []:
            yield from child.walk()

    def to_dict(self) -> dict:
        item = {
            "id": self.id,
            "label": self.label,
            "kind": self.kind.value,
            "expanded": self.expanded,
        }
        if self.highlight is not None:
            item["highlight"] = {"start": self.highlight.start, "end": self.highlight.end}
        if self.data:
            item["data"] = dict(self.data)
        if self.children is not None:
            item["children"] = [child.to_dict() for child in self.children]
        return item


# ---------------------------------------------------------------------------
# Assembly helpers
# ---------------------------------------------------------------------------

class TreeDepthError(ValueError):
    """Raised when a tree is nested deeper than ``max_depth``."""


def empty_children(node: TreeNode) -> Optional[list]:
    """``[]`` for folders, ``None`` for leaves."""
    return [] if node.is_folder else None


def _copy(node: TreeNode, expanded: bool, children: Optional[list]) -> ResultNode:
    return ResultNode(
        id=node.id,
        label=node.label,
        kind=node.resolved_kind,
        expanded=expanded,
        children=children,
        data=dict(node.data),
    )


def passthrough(
    node: TreeNode,
    expanded: bool = False,
    children: Optional[list] = None,
    depth: int = 0,
    max_depth: Optional[int] = None,
) -> ResultNode:
    """Copy a node that is shown for structure only (no highlight).

    Without explicit ``children`` the whole subtree is copied as collapsed
    passthrough nodes. ``depth`` is the node's level in the input tree; a
    subtree reaching ``max_depth`` raises TreeDepthError.
    """
    if children is not None:
        return _copy(node, expanded, children)

    root = _copy(node, expanded, None)
    stack = [(node, root, depth)]
    while stack:
        source, target, level = stack.pop()
        if not source.children:
            target.children = empty_children(source)
            continue
        if max_depth is not None and level + 1 >= max_depth:
            raise TreeDepthError(f"Tree is deeper than max_depth={max_depth}")
        target.children = [_copy(child, False, None) for child in source.children]
        for child, copied in zip(source.children, target.children):
            stack.append((child, copied, level + 1))
    return root


def passthrough_children(
    node: TreeNode, depth: int = 0, max_depth: Optional[int] = None
) -> Optional[list]:
    """All direct children of the node at ``depth`` as collapsed passthrough nodes."""
    if node.children:
        if max_depth is not None and depth + 1 >= max_depth:
            raise TreeDepthError(f"Tree is deeper than max_depth={max_depth}")
        return [passthrough(child, depth=depth + 1, max_depth=max_depth) for child in node.children]
    return empty_children(node)


def matched(
    node: TreeNode,
    span: HighlightSpan,
    display: Any,
    children: Optional[list],
    expanded: bool,
) -> ResultNode:
    """Build a node whose own label matched a segment."""
    return ResultNode(
        id=node.id,
        label=node.label,
        kind=node.resolved_kind,
        expanded=expanded,
        highlight=span,
        display=display,
        children=children,
        data=dict(node.data),
    )
