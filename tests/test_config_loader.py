"""
Unit tests for fortuner.config_loader and fortuner.errors
"""
import re

import pytest

from fortuner.config_loader import MAX_SEED, Config, build_config, compile_pattern, load_config, merge_options
from fortuner.errors import ConfigurationError, FileOpenError, FortunerError, PathNotFoundError


class TestBuildConfig:
    """Test option validation."""

    def test_defaults(self):
        cfg = build_config(["jokes"])
        assert cfg == Config(sources=["jokes"], pattern=None, seed=None)

    def test_pattern_compiled(self):
        cfg = build_config(["jokes"], pattern="Yogi")
        assert isinstance(cfg.pattern, re.Pattern)
        assert cfg.pattern.search("-- Yogi Berra")
        assert not cfg.pattern.search("-- yogi berra")

    def test_insensitive(self):
        cfg = build_config(["jokes"], pattern="Yogi", insensitive=True)
        assert cfg.pattern.flags & re.IGNORECASE
        assert cfg.pattern.search("-- yogi berra")

    def test_invalid_pattern(self):
        with pytest.raises(ConfigurationError) as exc_info:
            build_config(["jokes"], pattern="*")
        assert str(exc_info.value) == 'Invalid --pattern "*"'

    def test_seed_bounds(self):
        assert build_config(["jokes"], seed=0).seed == 0
        assert build_config(["jokes"], seed=MAX_SEED).seed == 2 ** 64 - 1
        with pytest.raises(ConfigurationError):
            build_config(["jokes"], seed=-1)
        with pytest.raises(ConfigurationError):
            build_config(["jokes"], seed=2 ** 64)

    def test_compile_pattern(self):
        assert compile_pattern("a+").pattern == "a+"
        with pytest.raises(ConfigurationError):
            compile_pattern("(unclosed")


class TestLoadConfig:
    """Test YAML config loading."""

    def test_load(self, write_file):
        path = write_file("config.yml", "sources:\n  - jokes\n  - quotes\npattern: Yogi\ninsensitive: true\nseed: 7\n")
        assert load_config(path) == {
            "sources": ["jokes", "quotes"],
            "pattern": "Yogi",
            "insensitive": True,
            "seed": 7,
        }

    def test_empty_file(self, write_file):
        assert load_config(write_file("config.yml", "")) == {}

    def test_unknown_keys_kept_but_ignored(self, write_file):
        cfg = load_config(write_file("config.yml", "extensions: [txt]\n"))
        assert cfg == {"extensions": ["txt"]}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config(tmp_path / "missing.yml")

    def test_invalid_yaml(self, write_file):
        with pytest.raises(ConfigurationError) as exc_info:
            load_config(write_file("config.yml", "sources: [unclosed\n"))
        assert "invalid YAML" in str(exc_info.value)

    def test_not_a_mapping(self, write_file):
        with pytest.raises(ConfigurationError):
            load_config(write_file("config.yml", "- jokes\n- quotes\n"))

    @pytest.mark.parametrize("body", [
        "sources: jokes\n",
        "pattern: 12\n",
        "insensitive: yes please\n",
        "seed: true\n",
        "seed: '7'\n",
    ])
    def test_wrong_types(self, write_file, body):
        with pytest.raises(ConfigurationError):
            load_config(write_file("config.yml", body))

    def test_sources_are_strings(self, write_file):
        cfg = load_config(write_file("config.yml", "sources: [2024, jokes]\n"))
        assert cfg["sources"] == ["2024", "jokes"]


class TestMergeOptions:
    """Command-line values override file values."""

    def test_file_only(self):
        merged = merge_options({"sources": ["a"], "pattern": "x", "seed": 3})
        assert merged == {"sources": ["a"], "pattern": "x", "insensitive": False, "seed": 3}

    def test_cli_overrides(self):
        merged = merge_options(
            {"sources": ["a"], "pattern": "x", "seed": 3},
            sources=("b", "c"), pattern="y", insensitive=False, seed=4,
        )
        assert merged == {"sources": ["b", "c"], "pattern": "y", "insensitive": False, "seed": 4}

    def test_empty_cli_values_keep_file_values(self):
        merged = merge_options({"sources": ["a"], "seed": 3}, sources=(), pattern=None, seed=None)
        assert merged["sources"] == ["a"]
        assert merged["seed"] == 3

    def test_insensitive_override(self):
        assert merge_options({"insensitive": True}, insensitive=None)["insensitive"] is True
        assert merge_options({"insensitive": True}, insensitive=False)["insensitive"] is False
        assert merge_options({}, insensitive=True)["insensitive"] is True
        assert merge_options({})["insensitive"] is False

    def test_feeds_build_config(self):
        cfg = build_config(**merge_options({"sources": ["a"], "pattern": "Yogi", "insensitive": True}))
        assert cfg.sources == ["a"]
        assert cfg.pattern.search("YOGI")


class TestErrors:
    """Error messages name the offending path."""

    def test_hierarchy(self):
        assert issubclass(ConfigurationError, FortunerError)
        assert issubclass(PathNotFoundError, FortunerError)
        assert issubclass(FileOpenError, FortunerError)

    def test_path_not_found_message(self):
        err = PathNotFoundError("blargh", FileNotFoundError(2, "No such file or directory"))
        assert str(err) == "blargh: No such file or directory"
        assert err.path == "blargh"

    def test_file_open_message(self):
        err = FileOpenError("jokes", PermissionError(13, "Permission denied"))
        assert str(err) == "jokes: Permission denied"

    def test_message_without_strerror(self):
        err = FileOpenError("jokes", OSError("boom"))
        assert str(err) == "jokes: boom"
