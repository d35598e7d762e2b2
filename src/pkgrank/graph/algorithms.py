"""Graph algorithms: run every centrality engine over one graph."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from ..config import AnalysisConfig, PageRankConfig
from ..math.betweenness import betweenness_centrality
from ..math.pagerank import (
    ConvergenceReport,
    PageRankRun,
    pagerank_auto,
    pagerank_auto_run,
    personalized_pagerank,
    seed_personalization,
)
from ..math.reachability import reachability_counts_edges
from .models import CentralityAnalysis, DiGraph, SeedInfluence
from .transforms import contract_graph, reverse_graph

logger = logging.getLogger(__name__)


def consumers_pagerank(graph: DiGraph, config: Optional[PageRankConfig] = None) -> list[float]:
    """PageRank on the reversed graph: high scores mark orchestrators."""
    return consumers_pagerank_run(graph, config).scores


def consumers_pagerank_run(
    graph: DiGraph, config: Optional[PageRankConfig] = None
) -> PageRankRun:
    return pagerank_auto_run(reverse_graph(graph), config)


def run_centrality(graph: DiGraph, config: Optional[AnalysisConfig] = None) -> CentralityAnalysis:
    """Execute all centrality engines on a graph.

    Edges are A -> B meaning A depends on B, so PageRank mass flows toward
    shared dependencies while consumers PageRank favours top-level consumers.
    """
    config = config or AnalysisConfig()
    pr_config = config.pagerank_config()
    n = graph.node_count()

    analysis = CentralityAnalysis(
        nodes=graph.nodes(), edge_count=graph.edge_count(), top_k=config.top_k
    )

    pr_run = pagerank_auto_run(graph, pr_config, config.unweighted_epsilon)
    consumers_run = pagerank_auto_run(reverse_graph(graph), pr_config, config.unweighted_epsilon)
    _warn_if_not_converged("pagerank", pr_run)
    _warn_if_not_converged("consumers_pagerank", consumers_run)

    analysis.pagerank = pr_run.scores
    analysis.consumers_pagerank = consumers_run.scores
    analysis.pagerank_report = ConvergenceReport.from_run(pr_run)
    analysis.consumers_report = ConvergenceReport.from_run(consumers_run)

    analysis.betweenness = betweenness_centrality(graph)

    analysis.in_degree = [graph.in_degree(i) for i in range(n)]
    analysis.out_degree = [graph.out_degree(i) for i in range(n)]

    # Blast radius within this graph
    analysis.dependents, analysis.dependencies = reachability_counts_edges(
        n, graph.edge_pairs()
    )

    logger.debug("Centrality computed for %d nodes, %d edges", n, graph.edge_count())
    return analysis


def run_contracted_centrality(
    graph: DiGraph,
    key_fn: Callable[[Any], Any],
    config: Optional[AnalysisConfig] = None,
) -> CentralityAnalysis:
    """Contract *graph* by *key_fn* and score the groups.

    Node-level PageRank on the uncontracted graph ranks the members inside
    each group, which shows what carries a group's coupling.
    """
    config = config or AnalysisConfig()
    node_scores = pagerank_auto(graph, config.pagerank_config(), config.unweighted_epsilon)

    contracted, members = contract_graph(graph, key_fn)
    analysis = run_centrality(contracted, config)
    analysis.members = members

    # Payload -> node-level score; repeated payloads keep the best score.
    score_of: dict[Any, float] = {}
    for index in graph.node_indices():
        payload = graph.node(index)
        score_of[payload] = max(score_of.get(payload, 0.0), node_scores[index])

    analysis.top_members = {
        key: top_members(group, score_of, config.members_preview)
        for key, group in members.items()
    }
    return analysis


def seed_influence(
    graph: DiGraph, seed: int, config: Optional[AnalysisConfig] = None
) -> SeedInfluence:
    """Personalized PageRank from a single seed node.

    Scores at or below ``ppr_epsilon`` count as unreachable from the seed.
    The seed itself is left out of ``top``, which holds at most ``top_k``
    entries.

    Raises:
        IndexError: If *seed* is not a valid node index
    """
    config = config or AnalysisConfig()
    n = graph.node_count()
    scores = personalized_pagerank(
        graph, config.pagerank_config(), seed_personalization(n, [seed])
    )
    eps = config.ppr_epsilon
    reachable = sum(1 for s in scores if s > eps)

    ranked = sorted(
        (i for i in range(n) if i != seed and scores[i] > eps),
        key=lambda i: (-scores[i], i),
    )
    top = [(graph.node(i), scores[i]) for i in ranked[: config.top_k]]
    return SeedInfluence(seed=seed, node=graph.node(seed), reachable=reachable, top=top)


def top_members(
    members: list[Any], scores: dict[Any, float], k: int
) -> list[tuple[Any, float]]:
    """The k highest-scoring members; ties keep the sorted member order."""
    ranked = sorted(members, key=lambda m: -scores.get(m, 0.0))
    return [(m, scores.get(m, 0.0)) for m in ranked[:k]]


def _warn_if_not_converged(name: str, run: PageRankRun) -> None:
    if not run.converged:
        logger.warning(
            "%s did not converge after %d iterations (diff_l1=%.3e)",
            name,
            run.iterations,
            run.diff_l1,
        )
