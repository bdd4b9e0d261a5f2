"""
Tests for the tsindex command line.
"""

import json

import pytest

from tsindex.cli import EXIT_NOT_FOUND, EXIT_OK, EXIT_USAGE, main


def run(capsys, *argv) -> tuple[int, object]:
    code = main(list(argv))
    out = capsys.readouterr().out
    return code, json.loads(out) if out.strip() else None


class TestCli:
    def test_extract_all(self, sample_tree, capsys):
        code, data = run(capsys, "--root", str(sample_tree), "extract")
        assert code == EXIT_OK
        assert len(data) == 12
        assert data[0]["kind"] == "re-export"

    def test_extract_filters(self, sample_tree, capsys):
        code, data = run(capsys, "--root", str(sample_tree), "extract", "--module", "socket", "--kind", "interface")
        assert code == EXIT_OK
        assert [d["name"] for d in data] == ["SocketConfig", "WebSocketConfig"]

    def test_invalid_kind(self, sample_tree, capsys):
        code, _ = run(capsys, "--root", str(sample_tree), "extract", "--kind", "struct")
        assert code == EXIT_USAGE

    def test_search(self, sample_tree, capsys):
        code, data = run(capsys, "--root", str(sample_tree), "search", "readystate")
        assert code == EXIT_OK
        assert data["name"] == "ReadyState"
        assert data["members"][0] == "Connecting = auto"

    def test_search_not_found(self, sample_tree, capsys):
        code, data = run(capsys, "--root", str(sample_tree), "search", "Nothing")
        assert code == EXIT_NOT_FOUND
        assert data is None

    def test_fuzzy_limit(self, sample_tree, capsys):
        code, data = run(capsys, "--root", str(sample_tree), "fuzzy", "socket", "--limit", "2")
        assert code == EXIT_OK
        assert [d["name"] for d in data] == ["Socket", "SocketConfig"]

    def test_hierarchy(self, sample_tree, capsys):
        code, data = run(capsys, "--root", str(sample_tree), "hierarchy", "Message")
        assert code == EXIT_OK
        assert data["children"] == ["MessageWithMeta", "MessageQueue"]

    def test_stats_and_deps(self, sample_tree, capsys):
        code, stats = run(capsys, "--root", str(sample_tree), "stats")
        assert code == EXIT_OK
        assert stats["totalDeclarations"] == 12

        code, deps = run(capsys, "--root", str(sample_tree), "deps")
        assert code == EXIT_OK
        assert {d["module"] for d in deps} == {"root", "socket", "types"}

    def test_file(self, sample_tree, capsys):
        code, data = run(capsys, "--root", str(sample_tree), "file", "socket/events.ts")
        assert code == EXIT_OK
        assert [d["kind"] for d in data] == ["type", "enum", "variable"]

    def test_file_missing(self, sample_tree, capsys):
        code, _ = run(capsys, "--root", str(sample_tree), "file", "missing.ts")
        assert code == EXIT_NOT_FOUND

    def test_bad_root(self, temp_dir, capsys):
        code, _ = run(capsys, "--root", str(temp_dir / "missing"), "stats")
        assert code == EXIT_USAGE

    def test_root_from_env(self, sample_tree, capsys, monkeypatch):
        monkeypatch.setenv("TSINDEX_SOURCE_ROOT", str(sample_tree))
        code, stats = run(capsys, "stats")
        assert code == EXIT_OK
        assert stats["totalDeclarations"] == 12

    def test_init(self, temp_dir, capsys, monkeypatch):
        monkeypatch.setenv("TSINDEX_DATA_PATH", str(temp_dir))
        code, data = run(capsys, "init")
        assert code == EXIT_OK
        assert data["created"] is True
        assert (temp_dir / "config.yaml").exists()

    def test_command_required(self):
        with pytest.raises(SystemExit):
            main([])
