"""Tests for pkgrank.api.analyze."""

import logging

import pytest

from pkgrank import analyze
from pkgrank.exceptions import InvalidConfigError
from pkgrank.graph.algorithms import run_centrality, run_contracted_centrality


def _module_of(name: str) -> str:
    return name.rsplit(".", 1)[0]


class TestAnalyze:
    def test_matches_run_centrality(self, isolated, package_logger, chain_graph):
        analysis = analyze(chain_graph)
        expected = run_centrality(chain_graph)
        assert analysis.pagerank == expected.pagerank
        assert analysis.dependencies == expected.dependencies

    def test_key_fn_contracts(self, isolated, package_logger, module_graph):
        analysis = analyze(module_graph, key_fn=_module_of)
        assert analysis.nodes == ["pkg.a", "pkg.b", "pkg.c"]
        assert analysis.members == run_contracted_centrality(module_graph, _module_of).members

    def test_overrides_reach_the_analysis(self, isolated, package_logger, star_graph):
        analysis = analyze(star_graph, top_k=2)
        assert len(analysis.top()) == 2

    def test_verbose_sets_debug(self, isolated, package_logger, chain_graph):
        analyze(chain_graph, verbose=True)
        assert package_logger.level == logging.DEBUG

    def test_default_verbosity_is_warning(self, isolated, package_logger, chain_graph):
        analyze(chain_graph)
        assert package_logger.level == logging.WARNING

    def test_quiet_from_environment(self, isolated, package_logger, monkeypatch, chain_graph):
        monkeypatch.setenv("PKGRANK_VERBOSITY", "quiet")
        analyze(chain_graph)
        assert package_logger.level == logging.ERROR

    def test_project_file_verbosity(self, isolated, package_logger, chain_graph):
        _, work = isolated
        (work / "pkgrank.toml").write_text('verbosity = "verbose"\n')
        analyze(chain_graph)
        assert package_logger.level == logging.DEBUG

    def test_log_file_receives_engine_logs(self, isolated, package_logger, tmp_path, chain_graph):
        path = tmp_path / "run.log"
        analyze(chain_graph, verbose=True, log_file=str(path))
        text = path.read_text()
        assert "Scoring 4 nodes, 3 edges" in text
        assert "PageRank n=4" in text

    def test_invalid_override(self, isolated, package_logger, chain_graph):
        with pytest.raises(InvalidConfigError):
            analyze(chain_graph, pagerank_damping=3.0)
