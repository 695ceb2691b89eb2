"""Tests for configuration loading."""

import pytest

from cmdtree.config import DEFAULTS, load_config
from cmdtree.interface import Dispatcher


class TestLoadConfig:
    """Test layered configuration sources."""

    def test_defaults(self, tmp_path):
        """With no files or env vars the defaults apply."""
        config = load_config(tmp_path, environ={})
        assert config.prompt == DEFAULTS["PROMPT"]
        assert config.delimiter == ";"
        assert config.fuzzy_threshold == 3
        assert config.strict_numbers is True
        assert config.log_file_path is None
        assert config.plugin_package == "cmdtree.plugins"

    def test_env_overrides(self, tmp_path):
        """Prefixed environment variables override defaults."""
        config = load_config(tmp_path, environ={
            "CMDTREE_FUZZY_THRESHOLD": "5",
            "CMDTREE_STRICT_NUMBERS": "no",
            "CMDTREE_PLUGIN_PACKAGE": "none",
            "UNRELATED": "x",
        })
        assert config.fuzzy_threshold == 5
        assert config.strict_numbers is False
        assert config.plugin_package is None

    def test_toml_flattened(self, tmp_path):
        """Nested TOML tables flatten to upper snake keys."""
        (tmp_path / "cmdtree.toml").write_text('[log]\nlevel = "debug"\n', encoding="utf-8")
        assert load_config(tmp_path, environ={}).log_level == "DEBUG"

    def test_ini_file(self, tmp_path):
        """INI sections are flattened."""
        (tmp_path / "cmdtree.ini").write_text("[core]\ndelimiter = |\n", encoding="utf-8")
        assert load_config(tmp_path, environ={}).delimiter == "|"

    def test_env_file(self, tmp_path):
        """Only prefixed keys are taken from .env."""
        (tmp_path / ".env").write_text(
            '# comment\nCMDTREE_PROMPT="$ "\nPROMPT=ignored\n', encoding="utf-8")
        assert load_config(tmp_path, environ={}).prompt == "$ "

    def test_env_beats_files(self, tmp_path):
        """Environment variables win over files."""
        (tmp_path / "cmdtree.json").write_text('{"indent_width": 4}', encoding="utf-8")
        assert load_config(tmp_path, environ={}).indent_width == 4
        assert load_config(tmp_path, environ={"CMDTREE_INDENT_WIDTH": "0"}).indent_width == 0

    def test_relative_log_path(self, tmp_path):
        """Relative paths resolve against the working directory."""
        config = load_config(tmp_path, environ={"CMDTREE_LOG_FILE_PATH": "logs/app.log"})
        assert config.log_file_path == (tmp_path / "logs" / "app.log").resolve()

    def test_extra_keys_kept(self, tmp_path):
        """Unknown keys are preserved."""
        config = load_config(tmp_path, environ={"CMDTREE_COLOR": "on"})
        assert config.extra == {"COLOR": "on"}

    @pytest.mark.parametrize("env", [
        {"CMDTREE_DELIMITER": "ab"},
        {"CMDTREE_DELIMITER": "-"},
        {"CMDTREE_FUZZY_THRESHOLD": "0"},
        {"CMDTREE_FUZZY_THRESHOLD": "many"},
        {"CMDTREE_LOG_LEVEL": "LOUD"},
        {"CMDTREE_SHOW_BANNER": "maybe"},
        {"CMDTREE_PLUGIN_PACKAGE": "not a module"},
    ])
    def test_invalid_values(self, tmp_path, env):
        """Invalid values raise ValueError."""
        with pytest.raises(ValueError):
            load_config(tmp_path, environ=env)

    def test_invalid_json(self, tmp_path):
        """Malformed JSON is reported as ValueError."""
        (tmp_path / "cmdtree.json").write_text("{", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(tmp_path, environ={})

    def test_dispatcher_from_config(self, tmp_path):
        """Dispatcher settings follow the configuration."""
        config = load_config(tmp_path, environ={
            "CMDTREE_DELIMITER": "|",
            "CMDTREE_IDENT_SUBSTITUTION": "off",
            "CMDTREE_INDENT_WIDTH": "4",
        })
        d = Dispatcher.from_config(config)
        assert d.delimiter == "|"
        assert d.ident_substitution is False
        assert d.indent_width == 4
