# -*- coding: utf-8 -*-
"""
@author:XuMing(xuming624@qq.com)
@description: Quick start demo - filter a database catalog as a user types.

Usage:
    python examples/01_basic_demo.py
"""
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from treepath import SearchOptions, load_tree, plain_highlighter, print_tree, search_tree

DATA_FILE = os.path.join(os.path.dirname(__file__), "data", "catalog.txt")
SEPARATOR = "=" * 72


def show(tree, query, options):
    print(f"\n{SEPARATOR}")
    print(f"  Query: {query!r}  |  policy: {options.descendant_policy.value}")
    print(SEPARATOR)
    results = search_tree(tree, query, options)
    if not results:
        print("  (no matches)")
        return
    print_tree(results, indent=1)


def main():
    tree = load_tree(DATA_FILE)
    options = SearchOptions(highlighter=plain_highlighter)

    # Keystrokes as a debounced input box would deliver them
    for query in ["sys", "system", "system.", "system.query", "system.query_log.", "log", "system.."]:
        show(tree, query, options)

    recursive = SearchOptions(highlighter=plain_highlighter, descendant_policy="recursive")
    show(tree, "system.log", recursive)


if __name__ == "__main__":
    main()
