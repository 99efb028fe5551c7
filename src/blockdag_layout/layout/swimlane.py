"""Swim-lane layout: validators in horizontal lanes, rank flowing left to right.

Each validator owns a band of height ``height / len(validators)``; lanes are
ordered by validator id. Nodes of one validator sharing a rank are spread
across the usable part of the band, ordered by node id so the result does not
depend on the order the records arrived in.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Tuple

from ..config import LANE_MARGIN, RANK_PADDING
from ..errors import ErrorCode, err
from ..graph.model import Graph
from ..types import Node

logger = logging.getLogger(__name__)


def lane_order(nodes: Iterable[Node]) -> Dict[str, int]:
    """Map each validator to its lane index (lexicographic position)."""
    validators = sorted({node.validator for node in nodes})
    return {validator: index for index, validator in enumerate(validators)}


def rank_bounds(nodes: Iterable[Node]) -> Tuple[int, int]:
    ranks = [node.rank for node in nodes]
    return min(ranks), max(ranks)


def vertical_step(height: float, lane_count: int) -> float:
    return height / lane_count


def horizontal_step(width: float, min_rank: int, max_rank: int) -> float:
    return width / (max_rank - min_rank + RANK_PADDING)


def offset_for(index: int, count: int, margin: float = LANE_MARGIN) -> float:
    """Fraction of a lane step that node `index` of `count` sits off the baseline."""
    if count == 1:
        return 0.0
    return (index / (count - 1) - 0.5) * (1 - margin)


def collision_offsets(nodes: Iterable[Node], margin: float = LANE_MARGIN) -> Dict[str, float]:
    """Offsets keyed by node id for every node, grouped by (validator, rank)."""
    groups: Dict[Tuple[str, int], List[Node]] = {}
    for node in nodes:
        groups.setdefault((node.validator, node.rank), []).append(node)

    offsets: Dict[str, float] = {}
    for members in groups.values():
        # sorted() is stable, so equal ids keep their input order.
        ordered = sorted(members, key=lambda n: n.id)
        count = len(ordered)
        for index, node in enumerate(ordered):
            offsets[node.id] = offset_for(index, count, margin)
    return offsets


def _check_dimension(name: str, value: float) -> None:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise err(ErrorCode.INVALID_DIMENSIONS, f"{name} must be a number")
    if not math.isfinite(value) or value <= 0:
        raise err(ErrorCode.INVALID_DIMENSIONS, f"{name} must be positive, got {value}")


def calculate_coordinates(graph: Graph, width: float, height: float) -> Graph:
    """Assign x/y to every node of `graph` and return it."""
    _check_dimension("width", width)
    _check_dimension("height", height)
    if graph.is_empty:
        return graph

    lanes = lane_order(graph.nodes)
    v_step = vertical_step(height, len(lanes))
    min_rank, max_rank = rank_bounds(graph.nodes)
    h_step = horizontal_step(width, min_rank, max_rank)
    offsets = collision_offsets(graph.nodes)

    for node in graph.nodes:
        node.y = (lanes[node.validator] + 0.5 + offsets[node.id]) * v_step
        node.x = (node.rank - min_rank + 1) * h_step

    logger.debug(
        "laid out %d nodes in %d lanes, ranks %d..%d",
        len(graph.nodes), len(lanes), min_rank, max_rank,
    )
    return graph


def layout(graph: Graph, width: float, height: float) -> Graph:
    return calculate_coordinates(graph, width, height)
