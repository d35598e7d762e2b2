"""
pkgrank - Centrality for software dependency graphs

PageRank, personalized PageRank, betweenness and transitive reachability
over directed graphs built from packages, modules or repositories.
"""

__version__ = "0.1.0"

from .api import analyze
from .config import AnalysisConfig, PageRankConfig, load_config
from .graph import (
    CentralityAnalysis,
    DiGraph,
    Direction,
    Metric,
    contract_graph,
    consumers_pagerank,
    reverse_graph,
    run_centrality,
    run_contracted_centrality,
    seed_influence,
)
from .math import (
    PageRankRun,
    betweenness_centrality,
    pagerank,
    pagerank_auto,
    pagerank_auto_run,
    pagerank_run,
    pagerank_weighted,
    pagerank_weighted_run,
    personalized_pagerank,
    personalized_pagerank_run,
    reachability_counts_edges,
)

__all__ = [
    "analyze",  # Main entry point
    "run_centrality",
    "run_contracted_centrality",
    "seed_influence",
    "DiGraph",
    "Direction",
    "Metric",
    "CentralityAnalysis",
    "AnalysisConfig",
    "PageRankConfig",
    "PageRankRun",
    "load_config",
    "reverse_graph",
    "contract_graph",
    "consumers_pagerank",
    "pagerank",
    "pagerank_run",
    "pagerank_weighted",
    "pagerank_weighted_run",
    "pagerank_auto",
    "pagerank_auto_run",
    "personalized_pagerank",
    "personalized_pagerank_run",
    "betweenness_centrality",
    "reachability_counts_edges",
]
