"""Core types for the block DAG view.

A `BlockRecord` is the read-only input shape: whatever the chain client hands
back is reduced to these fields before any graph is built. `Node` and `Edge`
are the per-computation graph entities derived from a batch of records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


class MessageType(Enum):
    BLOCK = "block"
    BALLOT = "ballot"


class Finality(Enum):
    UNDECIDED = "undecided"
    FINALIZED = "finalized"
    ORPHANED = "orphaned"


@dataclass(frozen=True)
class BlockRecord:
    block_hash: str
    parent_hashes: Tuple[str, ...]
    justification_hashes: Tuple[str, ...]
    validator: str
    rank: int
    message_type: MessageType = MessageType.BLOCK
    finality: Finality = Finality.UNDECIDED
    key_block_hash: str = ""

    def __post_init__(self) -> None:
        # Accept lists from callers but keep the record hashable and immutable.
        object.__setattr__(self, "parent_hashes", tuple(self.parent_hashes))
        object.__setattr__(self, "justification_hashes", tuple(self.justification_hashes))

    @property
    def is_block(self) -> bool:
        return self.message_type is MessageType.BLOCK

    @property
    def is_ballot(self) -> bool:
        return not self.is_block

    @property
    def is_finalized(self) -> bool:
        return self.finality is Finality.FINALIZED

    @property
    def main_parent(self) -> Optional[str]:
        return self.parent_hashes[0] if self.parent_hashes else None


@dataclass(eq=False)
class Node:
    id: str
    title: str
    validator: str
    era_id: str
    rank: int
    block: BlockRecord = field(repr=False)
    x: Optional[float] = None
    y: Optional[float] = None

    @property
    def is_positioned(self) -> bool:
        return self.x is not None and self.y is not None


@dataclass(frozen=True, eq=False)
class Edge:
    source: Node
    target: Node
    is_main_parent: bool
    is_justification: bool
    is_finalized: bool
