"""
Tests for the source tree walker.
"""

from pathlib import Path

from conftest import write_file
from tsindex.configs.settings import IndexConfig
from tsindex.ingest.walker import (
    in_test_directory,
    is_declaration_file,
    module_name,
    relative_file,
    walk_source_tree,
)


def relative_paths(root: Path, config: IndexConfig = None) -> list[str]:
    return [relative_file(p, root) for p in walk_source_tree(str(root), config)]


class TestWalkSourceTree:
    """Test file discovery and filtering."""

    def test_sample_tree(self, sample_tree):
        assert relative_paths(sample_tree) == [
            "index.ts",
            "socket/config.ts",
            "socket/events.ts",
            "types/message.ts",
        ]

    def test_declaration_files_excluded(self, temp_dir):
        write_file(temp_dir, "a.d.ts", "")
        write_file(temp_dir, "b.d.mts", "")
        write_file(temp_dir, "c.ts", "")
        config = IndexConfig(extensions={".ts", ".mts"})
        assert relative_paths(temp_dir, config) == ["c.ts"]

    def test_test_directories_excluded(self, temp_dir):
        write_file(temp_dir, "src/Tests/a.ts", "")
        write_file(temp_dir, "src/test/b.ts", "")
        write_file(temp_dir, "src/__tests__/c.ts", "")
        write_file(temp_dir, "src/testing/d.ts", "")
        write_file(temp_dir, "test.ts", "")
        assert relative_paths(temp_dir) == ["src/testing/d.ts", "test.ts"]

    def test_dependency_and_vcs_directories_pruned(self, temp_dir):
        write_file(temp_dir, "node_modules/x/index.ts", "")
        write_file(temp_dir, "src/node_modules/y/index.ts", "")
        write_file(temp_dir, ".git/hooks/z.ts", "")
        write_file(temp_dir, "src/ok.ts", "")
        assert relative_paths(temp_dir) == ["src/ok.ts"]

    def test_build_output_directories_indexed_by_default(self, temp_dir):
        write_file(temp_dir, "build/index.ts", "")
        write_file(temp_dir, "out/format.ts", "")
        write_file(temp_dir, "dist/bundle.ts", "")
        assert relative_paths(temp_dir) == ["build/index.ts", "dist/bundle.ts", "out/format.ts"]

        config = IndexConfig()
        config.ignore_patterns = config.ignore_patterns | {"dist", "out"}
        assert relative_paths(temp_dir, config) == ["build/index.ts"]

    def test_dot_directories_indexed(self, temp_dir):
        write_file(temp_dir, ".config/env.ts", "")
        write_file(temp_dir, "src/.internal.ts", "")
        assert relative_paths(temp_dir) == [".config/env.ts", "src/.internal.ts"]

    def test_custom_ignore_pattern(self, temp_dir):
        write_file(temp_dir, "src/a.generated.ts", "")
        write_file(temp_dir, "src/b.ts", "")
        config = IndexConfig()
        config.ignore_patterns = config.ignore_patterns | {"*.generated.ts"}
        assert relative_paths(temp_dir, config) == ["src/b.ts"]

    def test_extension_filter(self, temp_dir):
        write_file(temp_dir, "a.ts", "")
        write_file(temp_dir, "b.tsx", "")
        write_file(temp_dir, "c.js", "")
        assert relative_paths(temp_dir) == ["a.ts"]
        assert relative_paths(temp_dir, IndexConfig(extensions={".ts", ".tsx"})) == ["a.ts", "b.tsx"]

    def test_size_limit(self, temp_dir):
        write_file(temp_dir, "big.ts", "x" * 200)
        write_file(temp_dir, "small.ts", "x")
        assert relative_paths(temp_dir, IndexConfig(max_file_size=100)) == ["small.ts"]

    def test_sorted_output(self, temp_dir):
        for name in ["z.ts", "a/b.ts", "m.ts", "a.ts"]:
            write_file(temp_dir, name, "")
        paths = relative_paths(temp_dir)
        assert paths == sorted(paths)


class TestPathHelpers:
    def test_module_name(self):
        assert module_name("socket/config.ts") == "socket"
        assert module_name("types/deep/nested/x.ts") == "types"
        assert module_name("index.ts") == "root"

    def test_is_declaration_file(self):
        assert is_declaration_file("global.d.ts")
        assert is_declaration_file("GLOBAL.D.TS")
        assert not is_declaration_file("d.ts.backup.ts")
        assert not is_declaration_file("index.ts")

    def test_in_test_directory(self):
        names = {"tests", "test", "__tests__"}
        assert in_test_directory("a/tests/b.ts", names)
        assert not in_test_directory("a/b/tests.ts", names)
