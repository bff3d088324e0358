# -*- coding: utf-8 -*-
"""
@author:XuMing(xuming624@qq.com)
@description: CLI entry point for treepath.

Two modes:
  search - Filter a tree file by a dot-path query and print the result tree
  show   - Print a whole tree file

Tree files are either JSON (a list of {"label", "children", ...} dicts) or
plain text with one dotted path per line.

Usage:
    treepath show --tree catalog.txt
    treepath search --tree catalog.txt --query system.query.
    treepath search --tree catalog.json --query log --json
    treepath search --tree hosts.json --query system. --start-level 1
"""
import argparse
import json
import logging
import sys

from treepath.config import DEFAULT_SEPARATOR, ConfigurationError, settings_from_env
from treepath.matcher import ansi_highlighter, plain_highlighter
from treepath.search import DescendantPolicy, SearchOptions, search_tree
from treepath.tree import TreeNode, flatten_tree, load_tree, print_tree

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Arguments
# ---------------------------------------------------------------------------

def _add_tree_args(sub: argparse.ArgumentParser) -> None:
    sub.add_argument("--tree", type=str, required=True,
                     help="Tree file: .json node list or one dotted path per line")
    sub.add_argument("--separator", type=str, default=None,
                     help="Path separator (default: '.', or TREEPATH_SEPARATOR)")


def _add_search_args(sub: argparse.ArgumentParser) -> None:
    _add_tree_args(sub)
    sub.add_argument("--query", type=str, required=True, help="Search query, e.g. system.query.")
    sub.add_argument("--start-level", type=int, default=None,
                     help="First tree level that takes part in matching (default: 0)")
    sub.add_argument("--policy", type=str, default=None,
                     choices=[p.value for p in DescendantPolicy],
                     help="How far the last segment may match below the path (default: depth_scoped)")
    sub.add_argument("--json", action="store_true", help="Print results as JSON")
    sub.add_argument("--no-color", action="store_true",
                     help="Mark matches with [brackets] instead of terminal colors")


def _load(args, separator: str) -> list[TreeNode]:
    try:
        return load_tree(args.tree, separator=separator)
    except (OSError, ValueError) as e:
        print(f"Failed to load tree from {args.tree}: {e}", file=sys.stderr)
        sys.exit(1)


# ---------------------------------------------------------------------------
# Subcommands
# ---------------------------------------------------------------------------

def _build_options(args) -> SearchOptions:
    highlighter = plain_highlighter if args.no_color or not sys.stdout.isatty() else ansi_highlighter
    try:
        return SearchOptions.from_env(
            separator=args.separator,
            start_level=args.start_level,
            descendant_policy=args.policy,
            highlighter=highlighter,
        )
    except ConfigurationError as e:
        print(f"Invalid options: {e}", file=sys.stderr)
        sys.exit(1)


def _run_search(args) -> None:
    options = _build_options(args)
    tree = _load(args, options.separator)
    results = search_tree(tree, args.query, options)

    if args.json:
        payload = [
            node.to_dict() if hasattr(node, "to_dict") else {"id": node.id, "label": node.label}
            for node in results
        ]
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    if not results:
        print("No matches.")
        return

    print_tree(results)
    matches = sum(1 for node in flatten_tree(results) if getattr(node, "matched", False))
    print(f"\n{matches} matching node(s)")


def _run_show(args) -> None:
    separator = args.separator or settings_from_env().get("separator", DEFAULT_SEPARATOR)
    tree = _load(args, separator)
    print_tree(tree)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="treepath",
        description=(
            "treepath: dot-path search over trees of named nodes.\n"
            "Exact segments walk the path, the last segment matches substrings, "
            "a trailing separator expands."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    sub = p.add_subparsers(dest="command", help="Available commands")

    sch = sub.add_parser("search", help="Filter a tree by a dot-path query")
    _add_search_args(sch)

    show = sub.add_parser("show", help="Print a whole tree")
    _add_tree_args(show)

    return p


def main():
    parser = _build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(0)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s - %(name)s - %(message)s")

    if args.command == "search":
        _run_search(args)
    elif args.command == "show":
        _run_show(args)


if __name__ == "__main__":
    main()
