"""Tests for config loading, validation, and env var overrides."""

from pathlib import Path

import pytest

from transdiff.config.defaults import DEFAULT_TOML
from transdiff.config.loader import CONFIG_FILE, ConfigError, load_config
from transdiff.config.schema import LanguagesConfig


class TestLanguagesConfig:
    def test_base_defaults_to_first(self):
        assert LanguagesConfig(langs=["en", "de"]).base_lang == "en"

    def test_explicit_base(self):
        assert LanguagesConfig(base="de", langs=["en", "de"]).base_lang == "de"

    def test_no_languages(self):
        assert LanguagesConfig().base_lang is None


class TestConfigLoading:
    def test_default_config(self, tmp_path: Path):
        cfg = load_config(tmp_path)
        assert cfg.languages.langs == []
        assert cfg.discovery.glob == "SUB"
        assert cfg.git.enabled is True
        assert cfg.git.from_revision is None
        assert cfg.output.format == "terminal"
        assert cfg.output.show_summary is True
        assert cfg.check.fail_on_diffs is False

    def test_custom_toml(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE).write_text(
            'version = "1.0"\n'
            '[languages]\n'
            'base = "de"\n'
            'langs = ["en", "de", "fr"]\n'
            '[discovery]\n'
            'glob = "EXT"\n'
            'extensions = ["md", "rst"]\n'
            '[git]\n'
            'from_revision = "v1.0"\n'
            '[output]\n'
            'show_diff = true\n'
        )
        cfg = load_config(tmp_path)
        assert cfg.languages.base_lang == "de"
        assert cfg.languages.langs == ["en", "de", "fr"]
        assert cfg.discovery.glob == "EXT"
        assert cfg.discovery.extensions == ["md", "rst"]
        assert cfg.git.from_revision == "v1.0"
        assert cfg.git.to_revision is None
        assert cfg.output.show_diff is True

    def test_default_template_parses(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE).write_text(DEFAULT_TOML)
        cfg = load_config(tmp_path)
        assert cfg.languages.langs == ["en", "de"]
        assert cfg.discovery.extensions == ["md"]

    def test_unknown_keys_ignored(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE).write_text('[git]\nenabled = false\nshallow = true\n')
        assert load_config(tmp_path).git.enabled is False

    def test_empty_revision_means_unset(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE).write_text('[git]\nfrom_revision = ""\nto_revision = ""\n')
        cfg = load_config(tmp_path)
        assert cfg.git.from_revision is None
        assert cfg.git.to_revision is None

    def test_config_override_path(self, tmp_path: Path):
        custom = tmp_path / "custom.toml"
        custom.write_text('[languages]\nlangs = ["en", "es"]\n')
        cfg = load_config(tmp_path, config_override=str(custom))
        assert cfg.languages.langs == ["en", "es"]

    def test_missing_override_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, config_override="/nonexistent/config.toml")

    def test_invalid_toml_raises(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE).write_text("this is not valid [toml")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_invalid_format_raises(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE).write_text('[output]\nformat = "sarif"\n')
        with pytest.raises(ConfigError, match="output.format"):
            load_config(tmp_path)

    def test_langs_must_be_list(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE).write_text('[languages]\nlangs = "en,de"\n')
        with pytest.raises(ConfigError, match="languages.langs"):
            load_config(tmp_path)

    def test_section_must_be_table(self, tmp_path: Path):
        (tmp_path / CONFIG_FILE).write_text('git = "yes"\n')
        with pytest.raises(ConfigError, match=r"\[git\]"):
            load_config(tmp_path)


class TestEnvVarOverrides:
    def test_format_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TRANSDIFF_FORMAT", "json")
        assert load_config(tmp_path).output.format == "json"

    def test_invalid_format_ignored(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TRANSDIFF_FORMAT", "xml")
        assert load_config(tmp_path).output.format == "terminal"

    def test_langs_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TRANSDIFF_LANGS", "en, de ,fr")
        assert load_config(tmp_path).languages.langs == ["en", "de", "fr"]

    def test_base_lang_override(self, tmp_path: Path, monkeypatch):
        (tmp_path / CONFIG_FILE).write_text('[languages]\nlangs = ["en", "de"]\n')
        monkeypatch.setenv("TRANSDIFF_BASE_LANG", "de")
        assert load_config(tmp_path).languages.base_lang == "de"

    def test_no_git_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TRANSDIFF_NO_GIT", "1")
        assert load_config(tmp_path).git.enabled is False

    def test_revision_overrides(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TRANSDIFF_FROM_REVISION", "main")
        monkeypatch.setenv("TRANSDIFF_TO_REVISION", "feature")
        cfg = load_config(tmp_path)
        assert (cfg.git.from_revision, cfg.git.to_revision) == ("main", "feature")

    def test_fail_on_diffs_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("TRANSDIFF_FAIL_ON_DIFFS", "1")
        assert load_config(tmp_path).check.fail_on_diffs is True

    def test_env_beats_file(self, tmp_path: Path, monkeypatch):
        (tmp_path / CONFIG_FILE).write_text('[output]\nformat = "terminal"\n')
        monkeypatch.setenv("TRANSDIFF_FORMAT", "json")
        assert load_config(tmp_path).output.format == "json"
