"""Pytest hooks to collect layout vectors and write them as fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Optional, Sequence

import pytest

from blockdag_layout.types import BlockRecord, Finality, MessageType

_VECTOR_CASES: dict[str, list[dict[str, Any]]] = {}


def make_record(
    block_hash: str,
    rank: int,
    validator: str = "v1",
    parents: Sequence[str] = (),
    justifications: Sequence[str] = (),
    ballot: bool = False,
    finalized: bool = False,
    key_block_hash: str = "",
) -> BlockRecord:
    return BlockRecord(
        block_hash=block_hash,
        parent_hashes=tuple(parents),
        justification_hashes=tuple(justifications),
        validator=validator,
        rank=rank,
        message_type=MessageType.BALLOT if ballot else MessageType.BLOCK,
        finality=Finality.FINALIZED if finalized else Finality.UNDECIDED,
        key_block_hash=key_block_hash,
    )


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--output",
        action="store",
        default=None,
        help="Output directory for generated fixtures",
    )


@pytest.fixture
def record() -> Callable[..., BlockRecord]:
    return make_record


@pytest.fixture
def scenario_records() -> list[BlockRecord]:
    """Three blocks over two validators: b builds on a, c builds on a and cites b."""
    return [
        make_record("a", 0, "v1"),
        make_record("b", 1, "v1", parents=["a"]),
        make_record("c", 1, "v2", parents=["a"], justifications=["b"]),
    ]


@pytest.fixture
def vector_test_group() -> Callable[[str, dict[str, Any]], None]:
    """Collect pre-built test_vectors under a specific fixture path."""

    def _vector_test_group(rel_path: str, vector: dict[str, Any]) -> None:
        _VECTOR_CASES.setdefault(rel_path, []).append(vector)

    return _vector_test_group


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    output_dir: Optional[str] = session.config.getoption("--output")
    if not output_dir:
        return

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    for rel_path, vectors in _VECTOR_CASES.items():
        if not vectors:
            continue
        target = out / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(json.dumps({"test_vectors": vectors}, indent=2))
