"""Transitive reachability counts (blast radius) per node.

Edges are A -> B meaning A depends on B:
  dependencies[A] = nodes reachable forward from A
  dependents[A]   = nodes that can reach A (reachable in the reversed graph)

Neither count includes the node itself.
"""

from __future__ import annotations

import logging
from array import array
from collections import deque
from typing import Hashable, Iterable, Sequence

logger = logging.getLogger(__name__)

# Unsigned 32-bit stamps; element reads come back as plain ints.
_STAMP_TYPE = "I"
MAX_EPOCH = 2 ** (8 * array(_STAMP_TYPE).itemsize) - 1


class EpochVisited:
    """Visited-set shared by many BFS runs over the same node range.

    Each BFS gets a fresh epoch; a node counts as visited when its stamp
    equals the current epoch, so nothing is cleared between runs. When the
    epoch counter reaches *max_epoch* the stamps are zeroed and numbering
    restarts at 1.
    """

    def __init__(self, size: int, max_epoch: int = MAX_EPOCH):
        if not 1 <= max_epoch <= MAX_EPOCH:
            raise ValueError(f"max_epoch must be in [1, {MAX_EPOCH}]")
        self._stamps = array(_STAMP_TYPE, [0]) * size
        self._max_epoch = max_epoch
        self.epoch = 0
        self.resets = 0

    def next_epoch(self) -> int:
        """Start a new BFS; returns the new epoch."""
        if self.epoch >= self._max_epoch:
            self._stamps = array(_STAMP_TYPE, [0]) * len(self._stamps)
            self.epoch = 0
            self.resets += 1
        self.epoch += 1
        return self.epoch

    def visit(self, node: int) -> bool:
        """Mark *node* visited; False if it already was in this epoch."""
        if self._stamps[node] == self.epoch:
            return False
        self._stamps[node] = self.epoch
        return True

    def __len__(self) -> int:
        return len(self._stamps)


def reachability_counts_edges(
    node_count: int,
    edges: Iterable[tuple[int, int]],
    max_epoch: int = MAX_EPOCH,
) -> tuple[list[int], list[int]]:
    """Count transitive dependents and dependencies for every node.

    Runs one BFS per node over the forward adjacency and one over the
    reverse adjacency, O(n * (n + m)) in total. Edges with an endpoint
    outside [0, node_count) are skipped.

    Args:
        node_count: Number of nodes
        edges: (source, target) index pairs
        max_epoch: Epoch limit of the shared visited buffer

    Returns:
        (dependents, dependencies), each of length node_count
    """
    forward: list[list[int]] = [[] for _ in range(node_count)]
    backward: list[list[int]] = [[] for _ in range(node_count)]
    skipped = 0
    for u, v in edges:
        if not (0 <= u < node_count and 0 <= v < node_count):
            skipped += 1
            continue
        forward[u].append(v)
        backward[v].append(u)

    if skipped:
        logger.debug("Skipped %d edges with out-of-range endpoints", skipped)

    visited = EpochVisited(node_count, max_epoch=max_epoch)
    dependencies = [_bfs_count(forward, source, visited) for source in range(node_count)]
    dependents = [_bfs_count(backward, source, visited) for source in range(node_count)]

    return dependents, dependencies


def _bfs_count(adjacency: list[list[int]], source: int, visited: EpochVisited) -> int:
    visited.next_epoch()
    visited.visit(source)
    queue: deque[int] = deque([source])
    count = 0
    while queue:
        node = queue.popleft()
        for neighbor in adjacency[node]:
            if visited.visit(neighbor):
                count += 1
                queue.append(neighbor)
    return count


def reachability_by_label(
    nodes: Sequence[Hashable],
    edges: Iterable[tuple[Hashable, Hashable]],
) -> tuple[dict[Hashable, int], dict[Hashable, int]]:
    """Label-keyed reachability counts.

    Edges naming a label that is not in *nodes* are skipped. Repeated labels
    in *nodes* collapse onto their first occurrence.

    Returns:
        (dependents, dependencies) keyed by node label
    """
    index: dict[Hashable, int] = {}
    for label in nodes:
        index.setdefault(label, len(index))

    pairs = [(index[a], index[b]) for a, b in edges if a in index and b in index]
    dependents, dependencies = reachability_counts_edges(len(index), pairs)

    return (
        {label: dependents[i] for label, i in index.items()},
        {label: dependencies[i] for label, i in index.items()},
    )
