"""Turn block records into the reduced graph structure.

Only records present in the batch become nodes. References to blocks outside
the batch are expected (the view shows a window of the chain) and are dropped
without complaint.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Set, Tuple

from ..types import BlockRecord, Edge, Node
from ..view import short_hash
from .model import Graph

logger = logging.getLogger(__name__)


def to_node(record: BlockRecord) -> Node:
    return Node(
        id=record.block_hash,
        title=short_hash(record.block_hash),
        validator=record.validator,
        era_id=record.key_block_hash,
        rank=record.rank,
        block=record,
    )


def edge_finalized(source: BlockRecord, target: BlockRecord) -> bool:
    """A link is final when the child can vouch for it and the parent is final."""
    return (source.is_finalized or source.is_ballot) and target.is_finalized


def _record_edges(
    record: BlockRecord, source: Node, node_map: Dict[str, Node]
) -> List[Edge]:
    parents = record.parent_hashes
    parent_set = set(parents)
    main_parent = record.main_parent

    edges: List[Edge] = []
    for parent in parents:
        target = node_map.get(parent)
        if target is None:
            continue
        edges.append(
            Edge(
                source=source,
                target=target,
                # Positional in the unfiltered list: a missing parent[0] means no main edge.
                is_main_parent=parent == main_parent,
                is_justification=False,
                is_finalized=edge_finalized(record, target.block),
            )
        )

    # Parent dedup first, node-set membership second.
    justifications = [j for j in record.justification_hashes if j not in parent_set]
    for justification in justifications:
        target = node_map.get(justification)
        if target is None:
            continue
        edges.append(
            Edge(
                source=source,
                target=target,
                is_main_parent=False,
                is_justification=True,
                is_finalized=edge_finalized(record, target.block),
            )
        )
    return edges


def build_graph(records: Iterable[BlockRecord]) -> Graph:
    """Build the node set, the filtered edge set and the adjacency index."""
    nodes: List[Node] = []
    node_map: Dict[str, Node] = {}
    for record in records:
        if record.block_hash in node_map:
            logger.debug("duplicate record for %s ignored", record.block_hash)
            continue
        node = to_node(record)
        nodes.append(node)
        node_map[node.id] = node

    edges: List[Edge] = []
    seen: Set[Tuple[str, str, bool]] = set()
    for node in nodes:
        for edge in _record_edges(node.block, node, node_map):
            key = (edge.source.id, edge.target.id, edge.is_justification)
            if key in seen:
                continue
            seen.add(key)
            edges.append(edge)

    logger.debug("built graph: %d nodes, %d edges", len(nodes), len(edges))
    return Graph(nodes, edges)
