"""Helpers to serialize/deserialize block records and laid-out graphs."""

from __future__ import annotations

import json
from typing import Any, Iterable, List, Optional

import yaml

from .config import BALLOT_RADIUS_SCALE, CIRCLE_RADIUS
from .errors import ErrorCode, err
from .graph.model import Graph
from .types import BlockRecord, Edge, Finality, MessageType, Node

_REQUIRED = ("block_hash", "validator", "rank")


def _str_list(data: dict[str, Any], key: str) -> tuple[str, ...]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise err(ErrorCode.INVALID_RECORD, f"{key} must be a list of strings")
    return tuple(value)


def _str_field(data: dict[str, Any], key: str, default: Optional[str] = None) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise err(ErrorCode.INVALID_RECORD, f"{key} must be a string")
    return value


def record_from_json(data: dict[str, Any]) -> BlockRecord:
    if not isinstance(data, dict):
        raise err(ErrorCode.INVALID_RECORD, "record must be an object")
    for key in _REQUIRED:
        if key not in data:
            raise err(ErrorCode.INVALID_RECORD, f"missing field {key}")
    rank = data["rank"]
    if not isinstance(rank, int) or isinstance(rank, bool):
        raise err(ErrorCode.INVALID_RECORD, "rank must be an integer")
    try:
        message_type = MessageType(data.get("message_type", MessageType.BLOCK.value))
        finality = Finality(data.get("finality", Finality.UNDECIDED.value))
    except ValueError as exc:
        raise err(ErrorCode.INVALID_RECORD, str(exc)) from exc
    return BlockRecord(
        block_hash=_str_field(data, "block_hash"),
        parent_hashes=_str_list(data, "parent_hashes"),
        justification_hashes=_str_list(data, "justification_hashes"),
        validator=_str_field(data, "validator"),
        rank=rank,
        message_type=message_type,
        finality=finality,
        key_block_hash=_str_field(data, "key_block_hash", ""),
    )


def record_to_json(record: BlockRecord) -> dict[str, Any]:
    return {
        "block_hash": record.block_hash,
        "parent_hashes": list(record.parent_hashes),
        "justification_hashes": list(record.justification_hashes),
        "validator": record.validator,
        "rank": record.rank,
        "message_type": record.message_type.value,
        "finality": record.finality.value,
        "key_block_hash": record.key_block_hash,
    }


def records_from_json(items: Iterable[dict[str, Any]]) -> List[BlockRecord]:
    return [record_from_json(item) for item in items]


def node_radius(node: Node) -> float:
    return CIRCLE_RADIUS * (BALLOT_RADIUS_SCALE if node.block.is_ballot else 1.0)


def node_to_json(node: Node) -> dict[str, Any]:
    return {
        "id": node.id,
        "title": node.title,
        "validator": node.validator,
        "era_id": node.era_id,
        "rank": node.rank,
        "x": node.x,
        "y": node.y,
        "radius": node_radius(node),
        "is_ballot": node.block.is_ballot,
        "is_finalized": node.block.is_finalized,
    }


def edge_to_json(edge: Edge) -> dict[str, Any]:
    return {
        "source": edge.source.id,
        "target": edge.target.id,
        "is_main_parent": edge.is_main_parent,
        "is_justification": edge.is_justification,
        "is_finalized": edge.is_finalized,
    }


def graph_to_json(graph: Graph) -> dict[str, Any]:
    return {
        "validators": graph.validators(),
        "nodes": [node_to_json(n) for n in graph.nodes],
        "edges": [edge_to_json(e) for e in graph.edges],
    }


def load_records(text: str) -> List[BlockRecord]:
    """Parse a JSON or YAML document holding a list of records.

    The list may be top-level or under a ``blocks`` key.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise err(ErrorCode.INVALID_FORMAT, f"unreadable document: {exc}") from exc
    if isinstance(data, dict):
        if not isinstance(data.get("blocks"), list):
            raise err(ErrorCode.INVALID_FORMAT, "document has no blocks list")
        data = data["blocks"]
    if data is None:
        return []
    if not isinstance(data, list):
        raise err(ErrorCode.INVALID_FORMAT, "expected a list of block records")
    return records_from_json(data)


class PlainDumper(yaml.SafeDumper):
    pass


def _str_representer(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:str", data, style=None)


PlainDumper.add_representer(str, _str_representer)


def dump_yaml(data: dict) -> str:
    return yaml.dump(data, Dumper=PlainDumper, sort_keys=False, width=4096)


def dump_json(data: dict) -> str:
    return json.dumps(data, indent=2)
