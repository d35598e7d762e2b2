"""Dependency graphs, transforms and centrality orchestration."""

from .algorithms import (
    consumers_pagerank,
    consumers_pagerank_run,
    run_centrality,
    run_contracted_centrality,
    seed_influence,
)
from .models import (
    CentralityAnalysis,
    DiGraph,
    Direction,
    Metric,
    NodeCentrality,
    NodeIndex,
    SeedInfluence,
)
from .transforms import contract_graph, reverse_graph, top_edges

__all__ = [
    "DiGraph",
    "Direction",
    "NodeIndex",
    "Metric",
    "NodeCentrality",
    "CentralityAnalysis",
    "SeedInfluence",
    "reverse_graph",
    "contract_graph",
    "top_edges",
    "consumers_pagerank",
    "consumers_pagerank_run",
    "run_centrality",
    "run_contracted_centrality",
    "seed_influence",
]
