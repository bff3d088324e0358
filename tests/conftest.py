# -*- coding: utf-8 -*-
"""
@author:XuMing(xuming624@qq.com)
@description: Shared fixtures for treepath tests.
"""
import os
import sys
import tempfile

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from treepath.tree import TreeNode


def make_node(label, children=None, node_id=None, kind=None):
    return TreeNode(id=node_id or label, label=label, children=list(children or []), kind=kind)


def structure(nodes):
    """Reduce result nodes to (label, expanded, children) for readable asserts."""
    if nodes is None:
        return None
    return [
        {
            "label": node.label,
            "expanded": node.expanded,
            "children": structure(node.children),
        }
        for node in nodes
    ]


@pytest.fixture
def catalog_tree():
    """system / default catalog with a nested duplicate 'query' name."""
    return [
        make_node("system", [
            make_node("query", [
                make_node("query_log"),
                make_node("query_cache"),
            ], node_id="system.query"),
            make_node("processes", [
                make_node("query", node_id="system.processes.query"),
                make_node("mutations"),
            ]),
            make_node("metrics"),
        ]),
        make_node("default", [
            make_node("query", node_id="default.query"),
        ]),
    ]


@pytest.fixture
def deep_tree():
    return [
        make_node("a", [
            make_node("b", [
                make_node("c", [make_node("d")], node_id="a.b.c"),
                make_node("x", [make_node("c", node_id="a.b.x.c")]),
            ], node_id="a.b"),
            make_node("y", [
                make_node("b", [make_node("c", node_id="a.y.b.c")], node_id="a.y.b"),
            ]),
        ]),
    ]


@pytest.fixture
def host_tree():
    """Catalog rooted at a connection/host level (start_level=1 use case)."""
    return [
        make_node("localhost", [
            make_node("system", [
                make_node("tables", node_id="system.tables"),
                make_node("columns", node_id="system.columns"),
            ]),
            make_node("default", [
                make_node("events", node_id="default.events"),
            ]),
        ]),
    ]


@pytest.fixture
def sample_paths_file():
    """Create a temp text file with one dotted path per line."""
    content = """\
# catalog
system.query_log
system.metrics

default.events
"""
    with tempfile.NamedTemporaryFile(mode="w", suffix=".txt", delete=False) as f:
        f.write(content)
        path = f.name
    yield path
    os.unlink(path)
