"""PageRank by power iteration: unweighted, weighted and personalized.

Every solver returns scores aligned to node index. The ``*_run`` entry
points also report how the iteration ended; the plain entry points return
exactly the same scores, taken from the same run.

    PR(i) = (1 - d) * p(i) + d * (M(i) + D * p(i))

where p is the teleport distribution (uniform 1/n unless personalized),
M(i) the rank mass flowing into i along edges and D the total rank sitting
on dangling nodes.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Optional, Sequence

import numpy as np

from ..config import DEFAULT_PAGERANK, UNWEIGHTED_EPSILON, PageRankConfig
from ..exceptions import CentralityError, ErrorCode

if TYPE_CHECKING:
    from ..graph.models import DiGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageRankRun:
    """Scores plus diagnostics of a single PageRank solve.

    Attributes:
        scores: One score per node, indexed by node index
        iterations: Power iterations actually performed
        diff_l1: L1 distance between the last two iterates
        converged: True iff diff_l1 <= tol within max_iterations
    """

    scores: list[float]
    iterations: int
    diff_l1: float
    converged: bool


@dataclass(frozen=True)
class ConvergenceReport:
    """Serializable summary of a PageRankRun (scores excluded)."""

    iterations: int
    diff_l1: float
    converged: bool

    @classmethod
    def from_run(cls, run: PageRankRun) -> ConvergenceReport:
        return cls(iterations=run.iterations, diff_l1=run.diff_l1, converged=run.converged)

    def to_dict(self) -> dict[str, Any]:
        return {"iterations": self.iterations, "diff_l1": self.diff_l1, "converged": self.converged}


def is_unweighted(graph: DiGraph, eps: float = UNWEIGHTED_EPSILON) -> bool:
    """True if every edge weight is within *eps* of 1.0.

    An edgeless graph counts as unweighted.
    """
    return all(abs(w - 1.0) < eps for w in graph.edge_weights())


# ── Entry points ──────────────────────────────────────────────────


def pagerank(graph: DiGraph, config: Optional[PageRankConfig] = None) -> list[float]:
    """Unweighted PageRank: each node splits its rank evenly over its out-edges."""
    return pagerank_run(graph, config).scores


def pagerank_run(graph: DiGraph, config: Optional[PageRankConfig] = None) -> PageRankRun:
    n = graph.node_count()
    src, dst, _ = _edge_arrays(graph)
    share, dangling = _unweighted_shares(n, src)
    return _power_iterate(n, src, dst, share, dangling, None, config or DEFAULT_PAGERANK)


def pagerank_weighted(graph: DiGraph, config: Optional[PageRankConfig] = None) -> list[float]:
    """Weighted PageRank: out-mass splits proportionally to edge weight."""
    return pagerank_weighted_run(graph, config).scores


def pagerank_weighted_run(graph: DiGraph, config: Optional[PageRankConfig] = None) -> PageRankRun:
    n = graph.node_count()
    src, dst, weights = _edge_arrays(graph)
    share, dangling = _weighted_shares(n, src, weights)
    return _power_iterate(n, src, dst, share, dangling, None, config or DEFAULT_PAGERANK)


def personalized_pagerank(
    graph: DiGraph,
    config: Optional[PageRankConfig],
    personalization: Sequence[float],
) -> list[float]:
    """PageRank whose teleport and dangling mass follow *personalization*."""
    return personalized_pagerank_run(graph, config, personalization).scores


def personalized_pagerank_run(
    graph: DiGraph,
    config: Optional[PageRankConfig],
    personalization: Sequence[float],
) -> PageRankRun:
    """Personalized PageRank with run diagnostics.

    The personalization vector is clamped to non-negative entries (NaN as 0) and
    renormalized to sum to 1. If nothing positive remains it is replaced by
    the uniform distribution.

    Raises:
        ValueError: If len(personalization) != node_count
    """
    n = graph.node_count()
    if len(personalization) != n:
        raise ValueError(
            f"personalization has {len(personalization)} entries, graph has {n} nodes"
        )
    src, dst, weights = _edge_arrays(graph)
    share, dangling = _weighted_shares(n, src, weights)
    teleport = _normalize_personalization(personalization)
    return _power_iterate(n, src, dst, share, dangling, teleport, config or DEFAULT_PAGERANK)


def seed_personalization(node_count: int, seeds: Iterable[int]) -> list[float]:
    """Personalization vector with mass 1.0 on every seed index.

    Raises:
        IndexError: If a seed is not a valid node index
    """
    vector = [0.0] * node_count
    for seed in seeds:
        if not 0 <= seed < node_count:
            raise IndexError(f"seed {seed} out of range for {node_count} nodes")
        vector[seed] = 1.0
    return vector


# ── Checked and auto-selected variants ────────────────────────────


def pagerank_checked_run(graph: DiGraph, config: Optional[PageRankConfig] = None) -> PageRankRun:
    """Unweighted PageRank that first rejects non-finite edge weights.

    Raises:
        CentralityError: If any edge weight is NaN or infinite
    """
    _check_finite_weights(graph)
    return pagerank_run(graph, config)


def pagerank_weighted_checked_run(
    graph: DiGraph, config: Optional[PageRankConfig] = None
) -> PageRankRun:
    """Weighted PageRank that first rejects non-finite edge weights.

    Raises:
        CentralityError: If any edge weight is NaN or infinite
    """
    _check_finite_weights(graph)
    return pagerank_weighted_run(graph, config)


def pagerank_auto(
    graph: DiGraph,
    config: Optional[PageRankConfig] = None,
    eps: float = UNWEIGHTED_EPSILON,
) -> list[float]:
    return pagerank_auto_run(graph, config, eps).scores


def pagerank_auto_run(
    graph: DiGraph,
    config: Optional[PageRankConfig] = None,
    eps: float = UNWEIGHTED_EPSILON,
) -> PageRankRun:
    """Pick unweighted vs weighted PageRank from the edge weights.

    All weights within *eps* of 1.0 select the unweighted solver, anything
    else the weighted one. Both give the same scores on all-1.0 graphs; the
    unweighted one skips the weight sums. The checked path runs first and a
    rejected graph falls back to the unchecked solver with a warning.
    """
    if is_unweighted(graph, eps):
        checked, unchecked = pagerank_checked_run, pagerank_run
    else:
        checked, unchecked = pagerank_weighted_checked_run, pagerank_weighted_run
    try:
        return checked(graph, config)
    except CentralityError as e:
        logger.warning("Checked PageRank rejected graph, using unchecked solver: %s", e)
        return unchecked(graph, config)


# ── Internals ─────────────────────────────────────────────────────


def _edge_arrays(graph: DiGraph) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    m = graph.edge_count()
    src = np.empty(m, dtype=np.intp)
    dst = np.empty(m, dtype=np.intp)
    weights = np.empty(m, dtype=np.float64)
    for i, (u, v, w) in enumerate(graph.edges()):
        src[i] = u
        dst[i] = v
        weights[i] = w
    return src, dst, weights


def _unweighted_shares(n: int, src: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    out_degree = np.bincount(src, minlength=n)
    dangling = out_degree == 0
    share = 1.0 / out_degree[src] if src.size else np.zeros(0)
    return share, dangling


def _weighted_shares(
    n: int, src: np.ndarray, weights: np.ndarray
) -> tuple[np.ndarray, np.ndarray]:
    # Negative and NaN weights count as zero; fmax drops the NaN side.
    clamped = np.fmax(weights, 0.0)
    out_weight = np.bincount(src, weights=clamped, minlength=n).astype(np.float64)
    dangling = ~(out_weight > 0)
    totals = out_weight[src]
    share = np.zeros_like(clamped)
    np.divide(clamped, totals, out=share, where=totals > 0)
    return share, dangling


def _normalize_personalization(personalization: Sequence[float]) -> np.ndarray:
    p = np.fmax(np.asarray(personalization, dtype=np.float64), 0.0)
    if p.size == 0:
        return p
    total = p.sum()
    if total > 0:
        return p / total
    logger.debug("Personalization has no positive mass, using uniform teleport")
    return np.full(p.size, 1.0 / p.size)


def _power_iterate(
    n: int,
    src: np.ndarray,
    dst: np.ndarray,
    share: np.ndarray,
    dangling: np.ndarray,
    teleport: Optional[np.ndarray],
    config: PageRankConfig,
) -> PageRankRun:
    if n == 0:
        return PageRankRun(scores=[], iterations=0, diff_l1=0.0, converged=True)

    damping = config.damping
    rank = np.full(n, 1.0 / n)

    iterations = 0
    diff = math.inf
    converged = False
    for iterations in range(1, config.max_iterations + 1):
        edge_mass = np.bincount(dst, weights=rank[src] * share, minlength=n)
        dangling_mass = rank[dangling].sum()
        if teleport is None:
            new_rank = (1.0 - damping) / n + damping * (edge_mass + dangling_mass / n)
        else:
            new_rank = (1.0 - damping) * teleport + damping * (edge_mass + dangling_mass * teleport)

        diff = float(np.abs(new_rank - rank).sum())
        rank = new_rank
        if diff <= config.tol:
            converged = True
            break

    logger.debug(
        "PageRank n=%d iterations=%d diff_l1=%.3e converged=%s", n, iterations, diff, converged
    )
    return PageRankRun(
        scores=rank.tolist(), iterations=iterations, diff_l1=diff, converged=converged
    )


def _check_finite_weights(graph: DiGraph) -> None:
    for u, v, w in graph.edges():
        if not math.isfinite(w):
            raise CentralityError(
                message=f"Edge ({u}, {v}) has non-finite weight {w}",
                code=ErrorCode.PR200,
                context={"source": u, "target": v, "weight": w},
                recoverable=True,
                recovery_hint="Replace NaN/inf weights before scoring",
            )
