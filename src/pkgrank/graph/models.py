"""Data models: the directed graph and the measurements derived from it.

Nodes get dense integer indices in insertion order. Each ordered pair
(source, target) carries at most one weight: adding the same pair again
replaces the weight instead of creating a parallel edge.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Iterable, Iterator, Optional, TypeVar

from ..math.pagerank import ConvergenceReport

N = TypeVar("N")

# Dense 0-based node position, stable for the lifetime of the graph.
NodeIndex = int


class Direction(Enum):
    """Edge direction relative to a node."""

    OUTGOING = "outgoing"
    INCOMING = "incoming"


class DiGraph(Generic[N]):
    """Write-once directed graph with opaque node payloads.

    Edges are directed: an edge (A, B) means A depends on B. Payloads are
    never inspected by the engines; they only travel along with the node.

    Indexing with an out-of-range NodeIndex raises IndexError.
    """

    def __init__(self) -> None:
        self._nodes: list[N] = []
        # Insertion-ordered; updating a weight keeps the edge's position.
        self._edges: dict[tuple[int, int], float] = {}
        self._out: list[list[int]] = []
        self._in: list[list[int]] = []

    @classmethod
    def from_edges(
        cls,
        nodes: Iterable[N],
        edges: Iterable[tuple[int, int, float]],
    ) -> DiGraph[N]:
        """Build a graph from payloads and (source, target, weight) triples."""
        graph: DiGraph[N] = cls()
        for payload in nodes:
            graph.add_node(payload)
        for u, v, w in edges:
            graph.add_or_update_edge(u, v, w)
        return graph

    def add_node(self, payload: N) -> NodeIndex:
        """Append a node and return its index (the prior node count)."""
        index = len(self._nodes)
        self._nodes.append(payload)
        self._out.append([])
        self._in.append([])
        return index

    def add_or_update_edge(self, u: NodeIndex, v: NodeIndex, weight: float) -> None:
        """Insert edge (u, v) or replace its weight if it already exists.

        Self-loops are allowed.
        """
        self._check_index(u)
        self._check_index(v)
        key = (u, v)
        if key not in self._edges:
            self._out[u].append(v)
            self._in[v].append(u)
        self._edges[key] = float(weight)

    def node(self, index: NodeIndex) -> N:
        """Payload of the node at *index*."""
        self._check_index(index)
        return self._nodes[index]

    def nodes(self) -> list[N]:
        """All payloads, ordered by node index."""
        return list(self._nodes)

    def node_indices(self) -> range:
        return range(len(self._nodes))

    def neighbors(
        self, node: NodeIndex, direction: Direction = Direction.OUTGOING
    ) -> Iterator[NodeIndex]:
        """Iterate adjacent node indices in edge insertion order."""
        self._check_index(node)
        if direction is Direction.OUTGOING:
            return iter(self._out[node])
        return iter(self._in[node])

    def edge_weight(self, u: NodeIndex, v: NodeIndex) -> float | None:
        """Weight of edge (u, v), or None if there is no such edge."""
        self._check_index(u)
        self._check_index(v)
        return self._edges.get((u, v))

    def edges(self) -> Iterator[tuple[NodeIndex, NodeIndex, float]]:
        """Iterate (source, target, weight) in edge insertion order."""
        for (u, v), w in self._edges.items():
            yield u, v, w

    def edge_pairs(self) -> list[tuple[NodeIndex, NodeIndex]]:
        return list(self._edges)

    def edge_weights(self) -> Iterator[float]:
        return iter(self._edges.values())

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    def in_degree(self, node: NodeIndex) -> int:
        self._check_index(node)
        return len(self._in[node])

    def out_degree(self, node: NodeIndex) -> int:
        self._check_index(node)
        return len(self._out[node])

    def _check_index(self, index: NodeIndex) -> None:
        if not 0 <= index < len(self._nodes):
            raise IndexError(
                f"node index {index} out of range for graph with {len(self._nodes)} nodes"
            )

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"DiGraph(nodes={self.node_count()}, edges={self.edge_count()})"


# ── Derived measurements ──────────────────────────────────────────


class Metric(Enum):
    """Per-node measurement a CentralityAnalysis can be ranked by."""

    PAGERANK = "pagerank"
    # PageRank on the reversed graph: orchestrators / top-level consumers.
    CONSUMERS_PAGERANK = "consumers_pagerank"
    BETWEENNESS = "betweenness"
    IN_DEGREE = "in_degree"
    OUT_DEGREE = "out_degree"
    DEPENDENCIES = "dependencies"
    DEPENDENTS = "dependents"


@dataclass
class NodeCentrality:
    """All measurements for one node."""

    index: int
    node: Any
    pagerank: float = 0.0
    consumers_pagerank: float = 0.0
    betweenness: float = 0.0
    in_degree: int = 0
    out_degree: int = 0
    dependencies: int = 0  # transitive, excluding the node itself
    dependents: int = 0

    # Set only when the node is a contracted group
    group_size: Optional[int] = None
    members: list[Any] = field(default_factory=list)
    top_members: list[tuple[Any, float]] = field(default_factory=list)

    def value(self, metric: Metric) -> float:
        return getattr(self, metric.value)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "index": self.index,
            "node": self.node,
            "pagerank": self.pagerank,
            "consumers_pagerank": self.consumers_pagerank,
            "betweenness": self.betweenness,
            "in_degree": self.in_degree,
            "out_degree": self.out_degree,
            "dependencies": self.dependencies,
            "dependents": self.dependents,
        }
        if self.group_size is not None:
            result["group_size"] = self.group_size
            result["members"] = list(self.members)
            result["top_members"] = [[m, s] for m, s in self.top_members]
        return result


@dataclass
class CentralityAnalysis:
    """Every per-node vector computed for one graph, aligned to node index."""

    nodes: list[Any] = field(default_factory=list)
    pagerank: list[float] = field(default_factory=list)
    consumers_pagerank: list[float] = field(default_factory=list)
    betweenness: list[float] = field(default_factory=list)
    in_degree: list[int] = field(default_factory=list)
    out_degree: list[int] = field(default_factory=list)
    dependencies: list[int] = field(default_factory=list)
    dependents: list[int] = field(default_factory=list)

    pagerank_report: Optional[ConvergenceReport] = None
    consumers_report: Optional[ConvergenceReport] = None

    # Contracted graphs only: group key -> sorted member payloads
    members: Optional[dict[Any, list[Any]]] = None
    top_members: Optional[dict[Any, list[tuple[Any, float]]]] = None

    edge_count: int = 0
    top_k: int = 10

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    def row(self, index: int) -> NodeCentrality:
        """Measurements of the node at *index*."""
        node = self.nodes[index]
        row = NodeCentrality(
            index=index,
            node=node,
            pagerank=self.pagerank[index],
            consumers_pagerank=self.consumers_pagerank[index],
            betweenness=self.betweenness[index],
            in_degree=self.in_degree[index],
            out_degree=self.out_degree[index],
            dependencies=self.dependencies[index],
            dependents=self.dependents[index],
        )
        if self.members is not None:
            members = self.members.get(node, [])
            row.group_size = len(members)
            row.members = list(members)
            row.top_members = list((self.top_members or {}).get(node, []))
        return row

    def rows(self, metric: Metric = Metric.PAGERANK) -> list[NodeCentrality]:
        """All rows, highest *metric* first; ties by node index."""
        rows = [self.row(i) for i in range(self.node_count)]
        rows.sort(key=lambda r: (-r.value(metric), r.index))
        return rows

    def top(self, metric: Metric = Metric.PAGERANK, k: Optional[int] = None) -> list[NodeCentrality]:
        if k is None:
            k = self.top_k
        return self.rows(metric)[: max(k, 0)]

    def to_dict(self, metric: Metric = Metric.PAGERANK) -> dict[str, Any]:
        """JSON-ready view: summary, convergence reports, ranked rows."""
        return {
            "node_count": self.node_count,
            "edge_count": self.edge_count,
            "convergence": {
                "pagerank": self.pagerank_report.to_dict() if self.pagerank_report else None,
                "consumers_pagerank": (
                    self.consumers_report.to_dict() if self.consumers_report else None
                ),
            },
            "rows": [r.to_dict() for r in self.rows(metric)],
        }


@dataclass
class SeedInfluence:
    """What one seed node leans on, by personalized PageRank.

    Attributes:
        seed: Index of the seed node
        node: Payload of the seed node
        reachable: Nodes whose personalized score is above the epsilon
        top: Highest-scoring other nodes as (payload, score)
    """

    seed: int
    node: Any
    reachable: int
    top: list[tuple[Any, float]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "seed": self.seed,
            "node": self.node,
            "reachable": self.reachable,
            "top": [[n, s] for n, s in self.top],
        }
