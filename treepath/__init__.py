# -*- coding: utf-8 -*-
"""
@author:XuMing(xuming624@qq.com)
@description: treepath - dot-path search and highlight over trees of named nodes.

Type ``system.query.`` to walk an exact path and expand its last node, or
``sys`` to match anywhere in the tree.

Core API:
    search_tree    - Filter a tree by a query (returns list[ResultNode])
    SearchOptions  - Separator, start level, matcher, highlighter, policy
    TreeNode       - Input node data class
    ResultNode     - Output node data class
"""
__version__ = "0.1.0"

# Core API
from treepath.tree import TreeNode, NodeKind
from treepath.result import ResultNode
from treepath.search import (
    search_tree,
    SearchOptions,
    SearchContext,
    PathWalker,
    DescendantPolicy,
    TreeDepthError,
)
from treepath.config import ConfigurationError

# Matching and highlighting (for custom strategies)
from treepath.segments import ParsedQuery, parse_query
from treepath.matcher import (
    MatchResult,
    HighlightSpan,
    Matcher,
    Highlighter,
    substring_match,
    exact_match,
    find_substring,
    span_highlighter,
    marker_highlighter,
    ansi_highlighter,
    plain_highlighter,
)

# Tree utilities
from treepath.tree import (
    tree_from_dicts,
    tree_from_paths,
    tree_to_dicts,
    load_tree,
    save_tree,
    flatten_tree,
    find_node,
    tree_depth,
    format_tree,
    print_tree,
)
