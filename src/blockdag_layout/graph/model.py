"""Graph container with an adjacency index for neighbour queries."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Set

from ..errors import ErrorCode, err
from ..types import Edge, Node


class Graph:
    """Nodes and edges of one layout computation.

    The adjacency index records each edge once, from source to target.
    Neighbour queries look in both directions.
    """

    def __init__(self, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
        self.nodes: List[Node] = list(nodes)
        self.edges: List[Edge] = list(edges)
        self._by_id: Dict[str, Node] = {}
        for node in self.nodes:
            self._by_id.setdefault(node.id, node)
        self._targets: Dict[str, Set[str]] = {}
        for edge in self.edges:
            self._targets.setdefault(edge.source.id, set()).add(edge.target.id)

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._by_id

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def get(self, node_id: str) -> Optional[Node]:
        return self._by_id.get(node_id)

    def node(self, node_id: str) -> Node:
        found = self._by_id.get(node_id)
        if found is None:
            raise err(ErrorCode.NODE_NOT_FOUND, f"no node with id {node_id!r}")
        return found

    def targets(self, node_id: str) -> Set[str]:
        """Ids directly reachable from `node_id` over one edge."""
        return set(self._targets.get(node_id, ()))

    def has_target(self, source: str, target: str) -> bool:
        targets = self._targets.get(source)
        return targets is not None and target in targets

    def are_neighbours(self, a: str, b: str) -> bool:
        return a == b or self.has_target(a, b) or self.has_target(b, a)

    def validators(self) -> List[str]:
        return sorted({node.validator for node in self.nodes})


def are_neighbours(graph: Graph, a: str, b: str) -> bool:
    return graph.are_neighbours(a, b)
