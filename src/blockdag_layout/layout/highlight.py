"""Opacity and label state for hovering over a node.

The renderer applies these values as-is; nothing here touches the graph.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..config import DIM_OPACITY, FULL_OPACITY, HIDDEN_OPACITY
from ..graph.model import Graph
from ..types import Edge


@dataclass
class Highlight:
    focused: Optional[str]
    node_opacity: Dict[str, float] = field(default_factory=dict)
    label_visible: Dict[str, bool] = field(default_factory=dict)
    edge_opacity: List[float] = field(default_factory=list)


def _resting_edge_opacity(edge: Edge) -> float:
    # Justifications stay hidden unless their endpoint is focused.
    return HIDDEN_OPACITY if edge.is_justification else FULL_OPACITY


def focus(graph: Graph, node_id: str) -> Highlight:
    """Highlight `node_id` and its direct neighbours, dim everything else.

    Only neighbour labels are shown, whatever the resting label setting is.
    """
    graph.node(node_id)
    result = Highlight(focused=node_id)
    for node in graph.nodes:
        near = graph.are_neighbours(node.id, node_id)
        result.node_opacity[node.id] = FULL_OPACITY if near else DIM_OPACITY
        result.label_visible[node.id] = near
    for edge in graph.edges:
        if edge.source.id == node_id or edge.target.id == node_id:
            result.edge_opacity.append(FULL_OPACITY)
        elif edge.is_justification:
            result.edge_opacity.append(HIDDEN_OPACITY)
        else:
            result.edge_opacity.append(DIM_OPACITY)
    return result


def unfocus(graph: Graph, hide_labels: bool = False) -> Highlight:
    result = Highlight(focused=None)
    for node in graph.nodes:
        result.node_opacity[node.id] = FULL_OPACITY
        result.label_visible[node.id] = not hide_labels
    result.edge_opacity = [_resting_edge_opacity(edge) for edge in graph.edges]
    return result
