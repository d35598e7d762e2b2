"""Tests for pkgrank.config: defaults, validation, discovery and merging."""

import math

import pytest

from pkgrank.config import AnalysisConfig, PageRankConfig, load_config
from pkgrank.exceptions import ConfigFileError, InvalidConfigError


class TestAnalysisConfig:
    def test_defaults(self):
        config = AnalysisConfig()
        assert config.pagerank_damping == 0.85
        assert config.pagerank_tolerance == 1e-12
        assert config.pagerank_max_iterations == 200
        assert config.unweighted_epsilon == 1e-12
        assert config.verbosity == "normal"

    def test_pagerank_config(self):
        config = AnalysisConfig(pagerank_damping=0.5, pagerank_max_iterations=10)
        assert config.pagerank_config() == PageRankConfig(damping=0.5, tol=1e-12, max_iterations=10)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"pagerank_damping": 1.1},
            {"pagerank_tolerance": 0},
            {"pagerank_max_iterations": 0},
            {"top_k": 0},
            {"members_preview": -1},
            {"verbosity": "loud"},
            {"pagerank_tolerance": math.nan},
            {"pagerank_damping": math.nan},
            {"unweighted_epsilon": math.nan},
            {"ppr_epsilon": math.nan},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            AnalysisConfig(**kwargs)


class TestLoadConfig:
    def test_defaults_when_nothing_configured(self, isolated):
        assert load_config() == AnalysisConfig()

    def test_project_file(self, isolated):
        _, work = isolated
        (work / "pkgrank.toml").write_text("pagerank_damping = 0.9\n")
        assert load_config().pagerank_damping == 0.9

    def test_pkgrank_table(self, isolated, tmp_path):
        path = tmp_path / "custom.toml"
        path.write_text("[pkgrank]\ntop_k = 5\n")
        assert load_config(config_file=path).top_k == 5

    def test_priority_order(self, isolated, tmp_path, monkeypatch):
        home, work = isolated
        (home / ".pkgrank.toml").write_text("top_k = 2\nmembers_preview = 7\n")
        (work / "pkgrank.toml").write_text("top_k = 3\n")
        explicit = tmp_path / "explicit.toml"
        explicit.write_text("top_k = 4\npagerank_max_iterations = 50\n")
        monkeypatch.setenv("PKGRANK_PAGERANK_MAX_ITERATIONS", "60")

        config = load_config(config_file=explicit, pagerank_damping=0.7)
        assert config.members_preview == 7  # global
        assert config.top_k == 4  # explicit beats project
        assert config.pagerank_max_iterations == 60  # env beats files
        assert config.pagerank_damping == 0.7  # overrides beat everything

    def test_verbose_flags(self, isolated):
        assert load_config(verbose=True).verbosity == "verbose"
        assert load_config(quiet=True).verbosity == "quiet"
        assert load_config(verbose=False).verbosity == "normal"

    def test_env_values_parsed(self, isolated, monkeypatch):
        monkeypatch.setenv("PKGRANK_PAGERANK_TOLERANCE", "1e-9")
        monkeypatch.setenv("PKGRANK_VERBOSITY", "quiet")
        config = load_config()
        assert config.pagerank_tolerance == 1e-9
        assert config.verbosity == "quiet"

    def test_bad_env_value(self, isolated, monkeypatch):
        monkeypatch.setenv("PKGRANK_TOP_K", "many")
        with pytest.raises(InvalidConfigError) as exc_info:
            load_config()
        assert exc_info.value.key == "PKGRANK_TOP_K"

    def test_missing_file(self, isolated, tmp_path):
        with pytest.raises(ConfigFileError):
            load_config(config_file=tmp_path / "nope.toml")

    def test_malformed_toml(self, isolated, tmp_path):
        path = tmp_path / "bad.toml"
        path.write_text("pagerank_damping = = 1\n")
        with pytest.raises(ConfigFileError):
            load_config(config_file=path)

    def test_unknown_key(self, isolated):
        with pytest.raises(InvalidConfigError) as exc_info:
            load_config(colour="blue")
        assert exc_info.value.key == "colour"

    def test_invalid_value(self, isolated):
        with pytest.raises(InvalidConfigError):
            load_config(pagerank_damping=2.0)

    def test_nan_tolerance_rejected_at_load(self, isolated, monkeypatch):
        """NaN from the environment fails validation instead of reaching the solver."""
        monkeypatch.setenv("PKGRANK_PAGERANK_TOLERANCE", "nan")
        with pytest.raises(InvalidConfigError):
            load_config()
