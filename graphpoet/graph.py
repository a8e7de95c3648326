"""
A mutable, labeled, directed graph with non-negative integer edge weights.

Vertices are unique hashable labels. An edge is a positive count between an
ordered pair of vertices; weight 0 means "no edge". Plain dicts, no
dependencies.
"""

from __future__ import annotations

from typing import Generic, Hashable, Iterator, TypeVar

L = TypeVar("L", bound=Hashable)


class InvalidWeightError(ValueError):
    """Raised when an edge weight is negative or not an integer."""


class Graph(Generic[L]):
    """A weighted directed graph keyed by vertex label.

    Outgoing and incoming adjacency are kept as two mirrored dicts. Both are
    written only by ``_put_edge`` and ``_drop_edge``, so every edge appears in
    exactly one bucket of each and both endpoints are always vertices.
    """

    def __init__(self) -> None:
        self._outgoing: dict[L, dict[L, int]] = {}
        self._incoming: dict[L, dict[L, int]] = {}

    @classmethod
    def empty(cls) -> "Graph[L]":
        return cls()

    # -- Vertices --

    def add(self, vertex: L) -> bool:
        """Add ``vertex``. Returns False if it was already present."""
        if vertex in self._outgoing:
            return False
        self._outgoing[vertex] = {}
        self._incoming[vertex] = {}
        return True

    def remove(self, vertex: L) -> bool:
        """Remove ``vertex`` and every edge touching it.

        Returns False, leaving the graph unchanged, if the vertex is absent.
        """
        if vertex not in self._outgoing:
            return False
        for target in list(self._outgoing[vertex]):
            self._drop_edge(vertex, target)
        for source in list(self._incoming[vertex]):
            self._drop_edge(source, vertex)
        del self._outgoing[vertex]
        del self._incoming[vertex]
        return True

    def vertices(self) -> frozenset[L]:
        return frozenset(self._outgoing)

    def has_vertex(self, vertex: L) -> bool:
        return vertex in self._outgoing

    # -- Edges --

    def set(self, source: L, target: L, weight: int) -> int:
        """Set the weight of ``source -> target`` and return the previous weight.

        Both endpoints are added if missing. A weight of 0 removes the edge and
        returns the weight that was removed (0 if there was none).

        Raises:
            InvalidWeightError: if ``weight`` is negative or not an int.
        """
        if isinstance(weight, bool) or not isinstance(weight, int):
            raise InvalidWeightError(f"edge weight must be an int, got {type(weight).__name__}")
        if weight < 0:
            raise InvalidWeightError(f"edge weight must be non-negative, got {weight}")

        self.add(source)
        self.add(target)

        if weight == 0:
            return self._drop_edge(source, target)
        return self._put_edge(source, target, weight)

    def weight(self, source: L, target: L) -> int:
        """Weight of ``source -> target``, 0 when there is no such edge."""
        return self._outgoing.get(source, {}).get(target, 0)

    def sources(self, target: L) -> dict[L, int]:
        """Vertices with an edge into ``target``, mapped to that edge's weight."""
        return dict(self._incoming.get(target, {}))

    def targets(self, source: L) -> dict[L, int]:
        """Vertices reachable by one edge from ``source``, mapped to the weight."""
        return dict(self._outgoing.get(source, {}))

    def edges(self) -> list[tuple[L, L, int]]:
        return [
            (source, target, weight)
            for source, bucket in self._outgoing.items()
            for target, weight in bucket.items()
        ]

    def _put_edge(self, source: L, target: L, weight: int) -> int:
        previous = self._outgoing[source].get(target, 0)
        self._outgoing[source][target] = weight
        self._incoming[target][source] = weight
        return previous

    def _drop_edge(self, source: L, target: L) -> int:
        removed = self._outgoing[source].pop(target, 0)
        self._incoming[target].pop(source, None)
        return removed

    # -- Introspection --

    @property
    def node_count(self) -> int:
        return len(self._outgoing)

    @property
    def edge_count(self) -> int:
        return sum(len(bucket) for bucket in self._outgoing.values())

    def copy(self) -> "Graph[L]":
        clone: Graph[L] = type(self)()
        for vertex in self._outgoing:
            clone.add(vertex)
        for source, target, weight in self.edges():
            clone.set(source, target, weight)
        return clone

    def describe(self) -> str:
        """Multi-line listing of every vertex and its outgoing edges."""
        labels = sorted(self._outgoing, key=str)
        lines = ["Vertices: " + " ".join(str(label) for label in labels), "Edges:"]
        for label in labels:
            bucket = self._outgoing[label]
            rendered = ", ".join(
                f"{target}={bucket[target]}" for target in sorted(bucket, key=str)
            )
            lines.append(f"{label} -> {{{rendered}}}")
        return "\n".join(lines)

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._outgoing

    def __len__(self) -> int:
        return len(self._outgoing)

    def __iter__(self) -> Iterator[L]:
        return iter(list(self._outgoing))

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count}, edges={self.edge_count})"
