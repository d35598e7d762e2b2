"""Public API for pkgrank.

``analyze()`` is the main entry point: it loads configuration, sets up
logging from the configured verbosity and scores the graph.

Example:
    >>> from pkgrank import DiGraph, analyze
    >>>
    >>> graph = DiGraph.from_edges(
    ...     ["app::main", "core::engine", "core::util"],
    ...     [(0, 1, 1.0), (1, 2, 1.0)],
    ... )
    >>> analysis = analyze(graph, verbose=True)
    >>>
    >>> # Score crates instead of items
    >>> crates = analyze(graph, key_fn=lambda name: name.split("::")[0])
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional

from .config import load_config
from .graph.algorithms import run_centrality, run_contracted_centrality
from .graph.models import CentralityAnalysis, DiGraph
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def analyze(
    graph: DiGraph,
    key_fn: Optional[Callable[[Any], Any]] = None,
    config_file: Optional[Path] = None,
    log_file: Optional[str] = None,
    **overrides,
) -> CentralityAnalysis:
    """Score every node of *graph*, or every group when *key_fn* is given.

    Args:
        graph: Dependency graph, edges A -> B meaning A depends on B
        key_fn: Optional grouping function; the graph is contracted first
        config_file: Optional explicit config file path
        log_file: Optional file to append logs to
        **overrides: Configuration overrides (e.g. verbose=True, top_k=5)

    Returns:
        CentralityAnalysis for the graph (or the contracted graph)

    Raises:
        ConfigFileError: If a config file is missing or unparseable
        InvalidConfigError: If an override or config value is invalid
        GraphError: If key_fn fails on some node
    """
    config = load_config(config_file=config_file, **overrides)
    setup_logging(config.verbosity, log_file=log_file)
    logger.debug("Configuration loaded: %s mode", config.verbosity)

    logger.info(
        "Scoring %d nodes, %d edges%s",
        graph.node_count(),
        graph.edge_count(),
        " (contracted)" if key_fn is not None else "",
    )
    if key_fn is None:
        analysis = run_centrality(graph, config)
    else:
        analysis = run_contracted_centrality(graph, key_fn, config)

    logger.info("Analysis complete: %d rows", analysis.node_count)
    return analysis
