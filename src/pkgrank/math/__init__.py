"""Centrality engines: PageRank, betweenness, reachability."""

from .betweenness import betweenness_centrality
from .pagerank import (
    ConvergenceReport,
    PageRankRun,
    is_unweighted,
    pagerank,
    pagerank_auto,
    pagerank_auto_run,
    pagerank_checked_run,
    pagerank_run,
    pagerank_weighted,
    pagerank_weighted_checked_run,
    pagerank_weighted_run,
    personalized_pagerank,
    personalized_pagerank_run,
    seed_personalization,
)
from .reachability import EpochVisited, reachability_by_label, reachability_counts_edges

__all__ = [
    "PageRankRun",
    "ConvergenceReport",
    "is_unweighted",
    "pagerank",
    "pagerank_run",
    "pagerank_weighted",
    "pagerank_weighted_run",
    "pagerank_checked_run",
    "pagerank_weighted_checked_run",
    "pagerank_auto",
    "pagerank_auto_run",
    "personalized_pagerank",
    "personalized_pagerank_run",
    "seed_personalization",
    "betweenness_centrality",
    "EpochVisited",
    "reachability_counts_edges",
    "reachability_by_label",
]
