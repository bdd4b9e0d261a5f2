"""
Tests for configuration loading, logging setup and exceptions.
"""

import io
import logging

import pytest

from tsindex.configs.constants import DEFAULT_EXTENSIONS, DEFAULT_IGNORE_PATTERNS
from tsindex.configs.logging import get_logger, setup_logging
from tsindex.configs.paths import get_data_path
from tsindex.configs.settings import load_config, resolve_source_root
from tsindex.configs.yaml_config import (
    DEFAULT_CONFIG_YAML,
    create_default_config,
    get_config_path,
    load_yaml_config,
    save_yaml_config,
)
from tsindex.exceptions import (
    ConfigurationError,
    InvalidKindError,
    InvalidSourceRootError,
    MissingConfigError,
    ParseError,
    TsIndexError,
)


class TestDataPath:
    def test_env_override(self, temp_dir, monkeypatch):
        monkeypatch.setenv("TSINDEX_DATA_PATH", str(temp_dir))
        assert get_data_path() == temp_dir
        assert get_config_path() == temp_dir / "config.yaml"


class TestYamlConfig:
    def test_missing_file_is_empty(self, temp_dir):
        assert load_yaml_config(temp_dir / "absent.yaml") == {}

    def test_save_and_load(self, temp_dir):
        path = temp_dir / "config.yaml"
        save_yaml_config({"index": {"source_root": "/src"}}, path)
        assert load_yaml_config(path) == {"index": {"source_root": "/src"}}

    def test_invalid_yaml(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("index: [unclosed\n")
        with pytest.raises(ConfigurationError):
            load_yaml_config(path)

    def test_non_mapping(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError):
            load_yaml_config(path)

    def test_create_default_config(self, temp_dir, monkeypatch):
        monkeypatch.setenv("TSINDEX_DATA_PATH", str(temp_dir / "data"))
        assert create_default_config() is True
        assert create_default_config() is False
        assert get_config_path().read_text() == DEFAULT_CONFIG_YAML
        assert load_config(get_config_path()).fuzzy_limit == 20


class TestLoadConfig:
    def test_defaults(self, temp_dir):
        config = load_config(temp_dir / "absent.yaml")
        assert config.source_root is None
        assert config.extensions == DEFAULT_EXTENSIONS
        assert config.ignore_patterns == DEFAULT_IGNORE_PATTERNS
        assert config.tolerate_syntax_errors is False

    def test_yaml_values(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text(
            "index:\n"
            "  source_root: /work/lib/src\n"
            "  extensions: [ts, .TSX]\n"
            "  ignore_patterns: [generated]\n"
            "  tolerate_syntax_errors: true\n"
            "query:\n"
            "  fuzzy_limit: 5\n"
        )
        config = load_config(path)
        assert config.source_root == "/work/lib/src"
        assert config.extensions == {".ts", ".tsx"}
        assert "generated" in config.ignore_patterns
        assert "node_modules" in config.ignore_patterns
        assert config.tolerate_syntax_errors is True
        assert config.fuzzy_limit == 5

    def test_env_overrides_yaml(self, temp_dir, monkeypatch):
        path = temp_dir / "config.yaml"
        path.write_text("index:\n  source_root: /from/yaml\n")
        monkeypatch.setenv("TSINDEX_SOURCE_ROOT", "/from/env")
        monkeypatch.setenv("TSINDEX_EXTENSIONS", ".ts, .mts")
        config = load_config(path)
        assert config.source_root == "/from/env"
        assert config.extensions == {".ts", ".mts"}

    def test_bad_index_section(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("index: just-a-string\n")
        with pytest.raises(ConfigurationError):
            load_config(path)


class TestResolveSourceRoot:
    def test_missing(self):
        with pytest.raises(MissingConfigError):
            resolve_source_root(None)

    def test_nonexistent(self, temp_dir):
        with pytest.raises(InvalidSourceRootError) as exc:
            resolve_source_root(str(temp_dir / "nope"))
        assert exc.value.path.endswith("nope")

    def test_not_a_directory(self, temp_dir):
        file_path = temp_dir / "file.ts"
        file_path.write_text("")
        with pytest.raises(InvalidSourceRootError):
            resolve_source_root(str(file_path))

    def test_resolves(self, temp_dir):
        assert resolve_source_root(str(temp_dir)) == temp_dir.resolve()


class TestLogging:
    def test_component_logger_name(self):
        assert get_logger("ingest.corpus").name == "tsindex.ingest.corpus"

    def test_stderr_only(self):
        logger = setup_logging(debug=True, log_file="")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_file_handler(self, temp_dir):
        log_file = temp_dir / "logs" / "tsindex.log"
        logger = setup_logging(debug=False, log_file=str(log_file))
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 2
        assert log_file.parent.exists()
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()

    def test_console_line_tagged_with_component(self):
        stream = io.StringIO()
        setup_logging(debug=False, log_file="", stream=stream)
        get_logger("ingest.corpus").warning("Skipping src/bad.ts")
        get_logger("ingest.corpus").debug("not shown")
        assert stream.getvalue() == "tsindex WARNING [ingest.corpus] Skipping src/bad.ts\n"

    def test_file_keeps_info_console_shows_warnings(self, temp_dir):
        stream = io.StringIO()
        log_file = temp_dir / "tsindex.log"
        logger = setup_logging(debug=False, log_file=str(log_file), stream=stream)
        get_logger("query").info("Indexed 3 files")
        get_logger("query").warning("Skipped 1 file")
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        assert stream.getvalue() == "tsindex WARNING [query] Skipped 1 file\n"
        lines = log_file.read_text().splitlines()
        assert lines[0].endswith("INFO  [query] Indexed 3 files")
        assert lines[1].endswith("WARNING [query] Skipped 1 file")


class TestExceptions:
    def test_hierarchy(self):
        assert issubclass(InvalidSourceRootError, ConfigurationError)
        assert issubclass(ParseError, TsIndexError)
        assert issubclass(InvalidKindError, ValueError)

    def test_details_in_str(self):
        error = ParseError("Failed to read file", "src/a.ts")
        assert str(error) == "Failed to read file ({'file': 'src/a.ts'})"
        assert error.file_path == "src/a.ts"

    def test_invalid_kind_message(self):
        error = InvalidKindError("struct", ("interface", "type"))
        assert error.kind == "struct"
        assert "struct" in str(error)
        assert "interface, type" in str(error)
