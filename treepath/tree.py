# -*- coding: utf-8 -*-
"""
@author:XuMing(xuming624@qq.com)
@description: Tree data models, tree builders and traversal / display helpers.
"""
import json
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------

class NodeKind(str, Enum):
    FOLDER = "folder"
    LEAF = "leaf"


@dataclass
class TreeNode:
    """A named node of the input tree. Treated as read-only by the search."""
    id: str
    label: str
    children: list = field(default_factory=list)
    kind: Optional[NodeKind] = None
    data: dict = field(default_factory=dict)

    def __post_init__(self):
        if self.kind is not None and not isinstance(self.kind, NodeKind):
            self.kind = NodeKind(self.kind)
        self._search_key = self.label.lower()

    @property
    def search_key(self) -> str:
        """Lowercased label, computed once per node."""
        return self._search_key

    @property
    def is_folder(self) -> bool:
        if self.kind is not None:
            return self.kind is NodeKind.FOLDER
        return len(self.children) > 0

    @property
    def resolved_kind(self) -> NodeKind:
        return NodeKind.FOLDER if self.is_folder else NodeKind.LEAF


# ---------------------------------------------------------------------------
# Tree builders
# ---------------------------------------------------------------------------

def _node_from_dict(item: dict, parent_path: str, separator: str) -> TreeNode:
    if not isinstance(item, dict):
        raise ValueError(f"Tree node must be a dict, got {type(item).__name__}")
    label = item.get("label", item.get("name"))
    if label is None:
        raise ValueError(f"Tree node has no 'label': {item!r}")
    label = str(label)
    path = f"{parent_path}{separator}{label}" if parent_path else label
    children = [
        _node_from_dict(child, path, separator)
        for child in item.get("children") or []
    ]
    return TreeNode(
        id=str(item.get("id", path)),
        label=label,
        children=children,
        kind=item.get("kind"),
        data=dict(item.get("data") or {}),
    )


def tree_from_dicts(items: list[dict], separator: str = ".") -> list[TreeNode]:
    """Build tree nodes from plain dicts.

    Each dict needs a ``label`` (or ``name``). ``id`` defaults to the dotted
    path of the node, ``kind`` is optional and ``children`` nests further dicts.
    """
    return [_node_from_dict(item, "", separator) for item in items]


def tree_from_paths(paths: list[str], separator: str = ".") -> list[TreeNode]:
    """Build a catalog tree from dotted names such as ``system.query_log``.

    Shared prefixes are merged; sibling order follows first appearance.
    """
    roots: list[TreeNode] = []
    index: dict[str, TreeNode] = {}
    for raw in paths:
        parts = [p for p in raw.strip().split(separator) if p]
        siblings = roots
        prefix = ""
        for label in parts:
            prefix = f"{prefix}{separator}{label}" if prefix else label
            node = index.get(prefix)
            if node is None:
                node = TreeNode(id=prefix, label=label)
                index[prefix] = node
                siblings.append(node)
            siblings = node.children
    return roots


def tree_to_dicts(tree: list[TreeNode]) -> list[dict]:
    """Inverse of :func:`tree_from_dicts`."""
    items = []
    for node in tree:
        item = {"id": node.id, "label": node.label}
        if node.kind is not None:
            item["kind"] = node.kind.value
        if node.data:
            item["data"] = dict(node.data)
        if node.children:
            item["children"] = tree_to_dicts(node.children)
        items.append(item)
    return items


# ---------------------------------------------------------------------------
# Tree traversal
# ---------------------------------------------------------------------------

def flatten_tree(tree) -> list:
    """Flatten a list of nodes (TreeNode or ResultNode) in depth-first order."""
    nodes = []
    for node in tree or []:
        nodes.append(node)
        nodes.extend(flatten_tree(node.children))
    return nodes


def find_node(tree, node_id: str):
    """Find a node by id in the tree."""
    for node in tree or []:
        if node.id == node_id:
            return node
        result = find_node(node.children, node_id)
        if result is not None:
            return result
    return None


def tree_depth(tree) -> int:
    """Number of levels in the tree (0 for an empty tree)."""
    if not tree:
        return 0
    return 1 + max(tree_depth(node.children) for node in tree)


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------

def save_tree(tree: list[TreeNode], path: str) -> None:
    """Save a tree to a JSON file."""
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(tree_to_dicts(tree), f, indent=2, ensure_ascii=False)
    logger.info("Tree saved to: %s", path)


def load_tree(path: str, separator: str = ".") -> list[TreeNode]:
    """Load a tree from disk.

    ``.json`` files hold a list of node dicts. Any other file is read as one
    dotted path per line; blank lines and ``#`` comments are skipped.
    """
    abs_path = os.path.abspath(path)
    with open(abs_path, "r", encoding="utf-8") as f:
        if abs_path.lower().endswith(".json"):
            data = json.load(f)
            if isinstance(data, dict):
                data = data.get("tree", [])
            tree = tree_from_dicts(data, separator=separator)
        else:
            lines = [
                line.strip() for line in f
                if line.strip() and not line.lstrip().startswith("#")
            ]
            tree = tree_from_paths(lines, separator=separator)
    logger.info("Loaded tree: %s (%d root nodes)", abs_path, len(tree))
    return tree


# ---------------------------------------------------------------------------
# Display helpers
# ---------------------------------------------------------------------------

def _marker(node) -> str:
    if getattr(node, "expanded", bool(node.children)):
        return "- "
    if node.children:
        return "+ "
    return "  "


def format_tree(tree, indent: int = 0, show_collapsed: bool = False) -> list[str]:
    """Render a tree as indented lines.

    Result nodes print their ``display`` text. Children of collapsed result
    nodes are hidden unless ``show_collapsed`` is set; plain tree nodes always
    print in full.
    """
    lines = []
    for node in tree or []:
        text = getattr(node, "display", None)
        if text is None:
            text = node.label
        lines.append("  " * indent + _marker(node) + str(text))
        is_result = hasattr(node, "expanded")
        if node.children and (not is_result or node.expanded or show_collapsed):
            lines.extend(format_tree(node.children, indent + 1, show_collapsed))
    return lines


def print_tree(tree, indent: int = 0, show_collapsed: bool = False) -> None:
    """Print a tree as indented lines."""
    for line in format_tree(tree, indent, show_collapsed):
        print(line)
