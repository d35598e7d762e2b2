"""Betweenness centrality (Brandes) for directed, unweighted graphs."""

from __future__ import annotations

import logging
from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..graph.models import DiGraph

logger = logging.getLogger(__name__)


def betweenness_centrality(graph: DiGraph) -> list[float]:
    """
    Compute betweenness centrality using Brandes' algorithm.

    C_B(v) = Σ (σ_st(v) / σ_st) where s != v != t

    Edge weights are ignored; every edge has length 1. Scores are scaled by
    1 / ((n-1)(n-2)), the directed normalization, whether or not the graph
    is connected. Graphs with n <= 2 get all zeros.

    Args:
        graph: Directed graph

    Returns:
        One score per node, indexed by node index
    """
    n = graph.node_count()
    betweenness = [0.0] * n
    if n <= 2:
        return betweenness

    successors = [list(graph.neighbors(v)) for v in range(n)]

    for s in range(n):
        stack: list[int] = []
        predecessors: list[list[int]] = [[] for _ in range(n)]
        sigma = [0] * n
        sigma[s] = 1
        dist = [-1] * n
        dist[s] = 0

        queue: deque[int] = deque([s])
        while queue:
            v = queue.popleft()
            stack.append(v)
            for w in successors[v]:
                if dist[w] < 0:
                    dist[w] = dist[v] + 1
                    queue.append(w)
                if dist[w] == dist[v] + 1:
                    sigma[w] += sigma[v]
                    predecessors[w].append(v)

        delta = [0.0] * n
        while stack:
            w = stack.pop()
            if sigma[w] == 0:
                continue
            for v in predecessors[w]:
                delta[v] += (sigma[v] / sigma[w]) * (1.0 + delta[w])
            if w != s:
                betweenness[w] += delta[w]

    # Directed graph: no factor of 2 as in the undirected normalization.
    scale = 1.0 / ((n - 1) * (n - 2))
    logger.debug("Betweenness over %d nodes, scale=%.3e", n, scale)
    return [b * scale for b in betweenness]
