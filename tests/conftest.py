"""Shared test fixtures for pkgrank graph tests."""

import logging

import pytest

from pkgrank.config import AnalysisConfig
from pkgrank.graph.models import DiGraph


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run with an empty HOME and cwd and no PKGRANK_* variables."""
    home = tmp_path / "home"
    work = tmp_path / "work"
    home.mkdir()
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(work)
    for field_name in AnalysisConfig.__dataclass_fields__:
        monkeypatch.delenv(f"PKGRANK_{field_name.upper()}", raising=False)
    return home, work


@pytest.fixture
def package_logger():
    """The pkgrank logger, with its level and handlers restored afterwards."""
    logger = logging.getLogger("pkgrank")
    level = logger.level
    handlers = list(logger.handlers)
    yield logger
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)


def _build_graph(labels, edges):
    """Build a DiGraph from labels and (u, v) or (u, v, w) tuples."""
    graph = DiGraph()
    for label in labels:
        graph.add_node(label)
    for edge in edges:
        u, v = edge[0], edge[1]
        w = edge[2] if len(edge) > 2 else 1.0
        graph.add_or_update_edge(u, v, w)
    return graph


@pytest.fixture
def make_graph():
    """Factory: make_graph(labels, edges) -> DiGraph."""
    return _build_graph


@pytest.fixture
def empty_graph():
    """Graph with no nodes."""
    return DiGraph()


@pytest.fixture
def single_node_graph():
    """One node, no edges."""
    return _build_graph(["a"], [])


@pytest.fixture
def chain_graph():
    """Directed chain a -> b -> c -> d."""
    return _build_graph(["a", "b", "c", "d"], [(0, 1), (1, 2), (2, 3)])


@pytest.fixture
def cycle_graph():
    """Directed 3-cycle A -> B -> C -> A."""
    return _build_graph(["A", "B", "C"], [(0, 1), (1, 2), (2, 0)])


@pytest.fixture
def star_graph():
    """Hub depended on by four leaves: leaf -> hub."""
    return _build_graph(
        ["hub", "l1", "l2", "l3", "l4"],
        [(1, 0), (2, 0), (3, 0), (4, 0)],
    )


@pytest.fixture
def dangling_graph():
    """0 -> 1, node 2 has no out-edges."""
    return _build_graph(["x", "y", "z"], [(0, 1)])


@pytest.fixture
def module_graph():
    """Item graph whose payloads group by module prefix."""
    return _build_graph(
        ["pkg.a.x", "pkg.a.y", "pkg.b.z", "pkg.c.w"],
        [
            (0, 2, 1.0),  # pkg.a -> pkg.b
            (1, 2, 2.0),  # pkg.a -> pkg.b
            (0, 1, 5.0),  # internal to pkg.a
            (2, 3, 1.0),  # pkg.b -> pkg.c
            (3, 0, -3.0),  # pkg.c -> pkg.a, clamped to 0
        ],
    )
