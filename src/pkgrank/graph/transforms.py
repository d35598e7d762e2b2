"""Graph transforms: reversal, contraction, heaviest edges."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable, Hashable, TypeVar

from ..exceptions import ErrorCode, GraphError
from .models import DiGraph

logger = logging.getLogger(__name__)

N = TypeVar("N")
K = TypeVar("K", bound=Hashable)


def reverse_graph(graph: DiGraph[N]) -> DiGraph[N]:
    """Reverse every edge while preserving node order.

    Node i of the result carries the same payload as node i of *graph*, so
    score vectors computed on either graph index the same nodes.
    """
    rev: DiGraph[N] = DiGraph()
    for payload in graph.nodes():
        rev.add_node(payload)
    for u, v, w in graph.edges():
        rev.add_or_update_edge(v, u, w)
    return rev


def contract_graph(
    graph: DiGraph[N],
    key_fn: Callable[[N], K],
) -> tuple[DiGraph[K], dict[K, list[N]]]:
    """Collapse nodes sharing a key into one node per key.

    Groups become nodes in sorted-key order so the output does not depend on
    hash iteration order. Edges inside a group are dropped. Edges between
    groups are summed (negative and NaN weights count as 0), so the
    contracted weight is the total induced weight.

    Args:
        graph: Graph to contract
        key_fn: Maps a node payload to its group key (keys must be sortable)

    Returns:
        (contracted_graph, members) where members maps each key to the sorted
        list of payloads in that group.

    Raises:
        GraphError: If key_fn raises for some payload
    """
    node_keys: list[K] = []
    members: dict[K, list[N]] = defaultdict(list)
    for index in graph.node_indices():
        payload = graph.node(index)
        try:
            key = key_fn(payload)
        except Exception as e:
            raise GraphError(
                message=f"Contraction key failed for node {index}: {e}",
                code=ErrorCode.PR100,
                context={"node_index": index, "payload": repr(payload)},
                recoverable=False,
                recovery_hint="Make the key function total over all node payloads",
            ) from e
        node_keys.append(key)
        members[key].append(payload)

    keys = sorted(members)
    group_index = {key: i for i, key in enumerate(keys)}

    contracted: DiGraph[K] = DiGraph()
    for key in keys:
        contracted.add_node(key)

    totals: dict[tuple[int, int], float] = {}
    for u, v, w in graph.edges():
        gu = group_index[node_keys[u]]
        gv = group_index[node_keys[v]]
        if gu == gv:
            continue
        totals[(gu, gv)] = totals.get((gu, gv), 0.0) + (w if w > 0 else 0.0)

    # Edges go in sorted order so two contractions of the same input agree
    # on edge order as well as node order.
    for (gu, gv) in sorted(totals):
        contracted.add_or_update_edge(gu, gv, totals[(gu, gv)])

    sorted_members = {key: sorted(members[key]) for key in keys}

    logger.debug(
        "Contracted %d nodes / %d edges into %d groups / %d edges",
        graph.node_count(),
        graph.edge_count(),
        contracted.node_count(),
        contracted.edge_count(),
    )
    return contracted, sorted_members


def top_edges(graph: DiGraph[N], k: int) -> list[tuple[int, int, float]]:
    """The k heaviest edges, by weight descending then (source, target)."""
    if k <= 0:
        return []
    ranked = sorted(graph.edges(), key=lambda e: (-e[2], e[0], e[1]))
    return ranked[:k]
