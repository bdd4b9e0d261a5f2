"""
Tests for corpus index construction.
"""

import dataclasses

import pytest

from conftest import write_file
from tsindex.configs.settings import IndexConfig
from tsindex.ingest.corpus import CorpusIndex, build_corpus, extract_file


class TestBuildCorpus:
    """Test building the index of a source tree."""

    def test_sample_tree_counts(self, sample_tree):
        index = build_corpus(str(sample_tree))
        assert isinstance(index, CorpusIndex)
        assert index.files_indexed == 4
        assert index.skipped_files == ()
        assert len(index) == 12

    def test_excluded_files_contribute_nothing(self, sample_tree):
        names = {d.name for d in build_corpus(str(sample_tree)).declarations}
        assert "Ambient" not in names
        assert "fixture" not in names
        assert "dep" not in names
        assert "internalHelper" not in names

    def test_module_derivation(self, sample_tree):
        for decl in build_corpus(str(sample_tree)).declarations:
            if "/" in decl.file:
                assert decl.module == decl.file.split("/")[0]
            else:
                assert decl.module == "root"

    def test_index_order_follows_files(self, sample_tree):
        files = [d.file for d in build_corpus(str(sample_tree)).declarations]
        assert files == sorted(files)

    def test_no_deduplication(self, temp_dir):
        write_file(temp_dir, "a/one.ts", "export interface Shared {}\n")
        write_file(temp_dir, "b/two.ts", "export interface Shared {}\n")
        index = build_corpus(str(temp_dir))
        assert [(d.name, d.module) for d in index.declarations] == [("Shared", "a"), ("Shared", "b")]

    def test_malformed_file_skipped(self, temp_dir):
        write_file(temp_dir, "good.ts", "export const ok = 1\n")
        write_file(temp_dir, "bad.ts", "export interface {{{ broken\n")
        index = build_corpus(str(temp_dir))
        assert [d.name for d in index.declarations] == ["ok"]
        assert index.skipped_files == ("bad.ts",)
        assert index.files_indexed == 1

    def test_unreadable_file_skipped(self, temp_dir):
        write_file(temp_dir, "good.ts", "export const ok = 1\n")
        (temp_dir / "latin1.ts").write_bytes(b"export const s = '\xe9'\n")
        index = build_corpus(str(temp_dir))
        assert index.skipped_files == ("latin1.ts",)

    def test_tolerate_syntax_errors(self, temp_dir):
        write_file(temp_dir, "partial.ts", "export interface Kept {}\n}\n")
        index = build_corpus(str(temp_dir), IndexConfig(tolerate_syntax_errors=True))
        assert "Kept" in [d.name for d in index.declarations]
        assert index.skipped_files == ()

    def test_empty_tree(self, temp_dir):
        index = build_corpus(str(temp_dir))
        assert index.declarations == ()
        assert index.files_indexed == 0

    def test_index_is_frozen(self, sample_tree):
        index = build_corpus(str(sample_tree))
        with pytest.raises(dataclasses.FrozenInstanceError):
            index.declarations = ()


class TestExtractFile:
    def test_single_file(self, sample_tree):
        result = extract_file(sample_tree / "socket" / "events.ts", sample_tree)
        assert result.file == "socket/events.ts"
        assert not result.skipped
        assert [d.kind for d in result.declarations] == ["type", "enum", "variable"]

    def test_skipped_reason(self, temp_dir):
        path = write_file(temp_dir, "bad.ts", "export class {\n")
        result = extract_file(path, temp_dir)
        assert result.skipped
        assert result.reason == "syntax errors"
        assert result.declarations == []
