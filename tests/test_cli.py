# -*- coding: utf-8 -*-
"""
@author:XuMing(xuming624@qq.com)
@description: Tests for treepath.cli module.
"""
import json
import os
import tempfile
from unittest.mock import patch

import pytest
from treepath.cli import _build_parser, main

CATALOG = """\
system.query.query_log
system.query.query_cache
system.processes.query
default.query
"""


@pytest.fixture
def catalog_file():
    with tempfile.NamedTemporaryFile(mode="w", suffix=".txt", delete=False) as f:
        f.write(CATALOG)
        path = f.name
    yield path
    os.unlink(path)


def _run(argv):
    with patch("sys.argv", ["treepath"] + argv):
        main()


class TestBuildParser:
    def test_search_subcommand(self):
        parser = _build_parser()
        args = parser.parse_args(["search", "--tree", "t.txt", "--query", "system."])
        assert args.command == "search"
        assert args.tree == "t.txt"
        assert args.query == "system."
        assert args.separator is None
        assert args.policy is None
        assert args.json is False

    def test_search_options(self):
        parser = _build_parser()
        args = parser.parse_args([
            "search", "--tree", "t.json", "--query", "q", "--start-level", "1",
            "--policy", "recursive", "--separator", "/", "--json", "--no-color",
        ])
        assert args.start_level == 1
        assert args.policy == "recursive"
        assert args.separator == "/"
        assert args.json is True
        assert args.no_color is True

    def test_invalid_policy(self):
        parser = _build_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["search", "--tree", "t", "--query", "q", "--policy", "bogus"])

    def test_show_subcommand(self):
        args = _build_parser().parse_args(["show", "--tree", "t.txt"])
        assert args.command == "show"

    def test_verbose_flag(self):
        args = _build_parser().parse_args(["-v", "show", "--tree", "t.txt"])
        assert args.verbose is True


class TestMain:
    def test_no_command_prints_help(self, capsys):
        with pytest.raises(SystemExit) as exc:
            _run([])
        assert exc.value.code == 0
        assert "treepath" in capsys.readouterr().out

    def test_search_prints_tree(self, catalog_file, capsys):
        _run(["search", "--tree", catalog_file, "--query", "system.query.", "--no-color"])
        out = capsys.readouterr().out
        assert out.splitlines() == [
            "- [system]",
            "  - [query]",
            "      query_log",
            "      query_cache",
            "",
            "2 matching node(s)",
        ]

    def test_search_json(self, catalog_file, capsys):
        _run(["search", "--tree", catalog_file, "--query", "default.query.", "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert payload == [
            {
                "id": "default",
                "label": "default",
                "kind": "folder",
                "expanded": True,
                "highlight": {"start": 0, "end": 7},
                "children": [
                    {
                        "id": "default.query",
                        "label": "query",
                        "kind": "leaf",
                        "expanded": True,
                        "highlight": {"start": 0, "end": 5},
                    },
                ],
            },
        ]

    def test_search_recursive_policy(self, catalog_file, capsys):
        _run(["search", "--tree", catalog_file, "--query", "system.query", "--policy", "recursive", "--json"])
        payload = json.loads(capsys.readouterr().out)
        assert [child["label"] for child in payload[0]["children"]] == ["query", "processes"]

    def test_search_no_matches(self, catalog_file, capsys):
        _run(["search", "--tree", catalog_file, "--query", "nothing.here."])
        assert capsys.readouterr().out.strip() == "No matches."

    def test_search_invalid_separator(self, catalog_file, capsys):
        with pytest.raises(SystemExit) as exc:
            _run(["search", "--tree", catalog_file, "--query", "q", "--separator", ""])
        assert exc.value.code == 1
        assert "separator" in capsys.readouterr().err

    def test_missing_tree_file(self, capsys):
        with pytest.raises(SystemExit) as exc:
            _run(["search", "--tree", "/nonexistent/tree.txt", "--query", "q"])
        assert exc.value.code == 1
        assert "Failed to load tree" in capsys.readouterr().err

    def test_show(self, catalog_file, capsys):
        _run(["show", "--tree", catalog_file])
        out = capsys.readouterr().out
        assert out.splitlines()[0] == "- system"
        assert "      query_log" in out.splitlines()
