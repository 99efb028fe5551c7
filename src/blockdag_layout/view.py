"""Record filtering and labelling helpers for the block DAG view."""

from __future__ import annotations

from typing import Iterable, List

from .config import DEPTH_CHOICES, SHORT_HASH_LENGTH
from .errors import ErrorCode, err
from .types import BlockRecord


def short_hash(block_hash: str, length: int = SHORT_HASH_LENGTH) -> str:
    return block_hash[:length]


def filter_records(records: Iterable[BlockRecord], hide_ballots: bool = False) -> List[BlockRecord]:
    """Copy of `records`, without ballots when `hide_ballots` is set."""
    if hide_ballots:
        return [r for r in records if r.is_block]
    return list(records)


def validate_depth(depth: int) -> int:
    if depth not in DEPTH_CHOICES:
        choices = ", ".join(str(d) for d in DEPTH_CHOICES)
        raise err(ErrorCode.INVALID_DEPTH, f"depth {depth} not one of {choices}")
    return depth
