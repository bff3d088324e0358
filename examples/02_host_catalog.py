# -*- coding: utf-8 -*-
"""
@author:XuMing(xuming624@qq.com)
@description: Search a catalog grouped under connection hosts.

The host level is structural only: start_level=1 keeps it out of matching
while still showing it above any match.

Usage:
    python examples/02_host_catalog.py
"""
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from treepath import SearchOptions, plain_highlighter, print_tree, search_tree, tree_from_dicts

HOSTS = [
    {
        "label": "prod-1",
        "kind": "folder",
        "data": {"type": "host"},
        "children": [
            {"label": "system", "children": [{"label": "tables"}, {"label": "columns"}]},
            {"label": "default", "children": [{"label": "events", "data": {"type": "table"}}]},
        ],
    },
    {
        "label": "staging",
        "kind": "folder",
        "data": {"type": "host"},
        "children": [
            {"label": "default", "children": [{"label": "events_staging"}]},
        ],
    },
]


def main():
    tree = tree_from_dicts(HOSTS)
    options = SearchOptions(start_level=1, highlighter=plain_highlighter)
    for query in ["default.", "events", "prod"]:
        print(f"\n>>> {query}")
        results = search_tree(tree, query, options)
        if results:
            print_tree(results)
        else:
            print("(no matches)")


if __name__ == "__main__":
    main()
