"""Tests for configuration loading and validation."""

import logging
from pathlib import Path

import pytest

from depend_insight.code.filters import PackageFilter
from depend_insight.config import (
    PDEPEND_INHERITANCE,
    AnalysisConfig,
    InheritanceConfig,
    load_config,
)
from depend_insight.exceptions import ConfigurationError, InvalidConfigError


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run each test with an empty home, cwd and DEPEND_* environment."""
    home = tmp_path / "home"
    project = tmp_path / "project"
    home.mkdir()
    project.mkdir()
    monkeypatch.setattr(Path, "home", lambda: home)
    monkeypatch.chdir(project)
    for name in ("PACKAGES", "WORKERS", "TIMEOUT_SECONDS", "VERBOSITY", "INHERITANCE"):
        monkeypatch.delenv(f"DEPEND_{name}", raising=False)
    return home, project


class TestAnalysisConfig:
    """Defaults and validation."""

    def test_defaults(self):
        config = AnalysisConfig()
        assert config.packages == []
        assert config.workers is None
        assert config.verbosity == "normal"
        assert config.andc_denominator == "parents"
        assert config.ahh_reference == "classes"

    def test_pdepend_preset(self):
        assert PDEPEND_INHERITANCE.andc_denominator == "classes"
        assert PDEPEND_INHERITANCE.ahh_reference == "roots"

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"workers": 0},
            {"timeout_seconds": 0},
            {"verbosity": "loud"},
            {"packages": "library"},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(InvalidConfigError):
            AnalysisConfig(**kwargs)

    def test_invalid_inheritance_convention(self):
        with pytest.raises(InvalidConfigError):
            InheritanceConfig(andc_denominator="roots")

    def test_build_filters(self):
        assert len(AnalysisConfig().build_filters()) == 0
        filters = AnalysisConfig(packages=["library"]).build_filters()
        (only,) = list(filters)
        assert isinstance(only, PackageFilter)
        assert only.allowed_names == frozenset({"library"})


class TestLoadConfig:
    """Source merging."""

    def test_no_sources(self):
        assert load_config() == AnalysisConfig()

    def test_project_file(self, isolated_env):
        _, project = isolated_env
        (project / "depend-insight.toml").write_text('packages = ["library"]\nworkers = 2\n')
        config = load_config()
        assert config.packages == ["library"]
        assert config.workers == 2

    def test_project_overrides_global(self, isolated_env):
        home, project = isolated_env
        (home / ".depend-insight.toml").write_text('workers = 2\nverbosity = "quiet"\n')
        (project / "depend-insight.toml").write_text("workers = 3\n")
        config = load_config()
        assert config.workers == 3
        assert config.verbosity == "quiet"

    def test_inheritance_table_merges_per_key(self, isolated_env, tmp_path):
        home, _ = isolated_env
        (home / ".depend-insight.toml").write_text('[inheritance]\nandc_denominator = "classes"\n')
        explicit = tmp_path / "explicit.toml"
        explicit.write_text('[inheritance]\nahh_reference = "roots"\n')
        config = load_config(config_file=explicit)
        assert config.inheritance == PDEPEND_INHERITANCE

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(config_file=tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path):
        bad = tmp_path / "bad.toml"
        bad.write_text("workers = = 3")
        with pytest.raises(ConfigurationError):
            load_config(config_file=bad)

    def test_unknown_inheritance_key(self, tmp_path):
        path = tmp_path / "c.toml"
        path.write_text("[inheritance]\nheight = 3\n")
        with pytest.raises(ConfigurationError):
            load_config(config_file=path)

    def test_unknown_key_ignored_with_warning(self, tmp_path, caplog):
        caplog.set_level(logging.WARNING, logger="depend_insight")
        path = tmp_path / "c.toml"
        path.write_text("colour = true\nworkers = 2\n")
        config = load_config(config_file=path)
        assert config.workers == 2
        assert "DI501" in caplog.text

    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("DEPEND_PACKAGES", "library, vendor")
        monkeypatch.setenv("DEPEND_WORKERS", "4")
        monkeypatch.setenv("DEPEND_VERBOSITY", "verbose")
        config = load_config()
        assert config.packages == ["library", "vendor"]
        assert config.workers == 4
        assert config.verbosity == "verbose"

    def test_bad_env_int(self, monkeypatch):
        monkeypatch.setenv("DEPEND_WORKERS", "many")
        with pytest.raises(ConfigurationError, match="DEPEND_WORKERS"):
            load_config()

    def test_overrides_beat_env(self, monkeypatch):
        monkeypatch.setenv("DEPEND_WORKERS", "4")
        assert load_config(workers=8).workers == 8

    def test_none_overrides_ignored(self, isolated_env):
        _, project = isolated_env
        (project / "depend-insight.toml").write_text("workers = 3\n")
        assert load_config(workers=None, packages=None).workers == 3

    def test_verbose_and_quiet_flags(self):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False, quiet=False).verbosity == "normal"
