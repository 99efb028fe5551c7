"""Replay generated layout fixtures against the current implementation."""

from __future__ import annotations

import json
import math
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT / "src"))

from blockdag_layout.cache import fingerprint  # noqa: E402
from blockdag_layout.codec import edge_to_json, record_from_json, records_from_json  # noqa: E402
from blockdag_layout.graph.builder import build_graph, edge_finalized  # noqa: E402
from blockdag_layout.layout.swimlane import calculate_coordinates  # noqa: E402


def _load(path: Path) -> list[dict]:
    if not path.exists():
        return []
    return json.loads(path.read_text()).get("test_vectors", [])


def _check_build(path: Path) -> list[str]:
    failures: list[str] = []
    for vec in _load(path):
        graph = build_graph(records_from_json(vec["input"]["records"]))
        if [edge_to_json(e) for e in graph.edges] != vec["expected"]["edges"]:
            failures.append(f"{vec['name']}: edges_mismatch")
    return failures


def _check_finality(path: Path) -> list[str]:
    failures: list[str] = []
    for vec in _load(path):
        source = record_from_json(vec["input"]["source"])
        target = record_from_json(vec["input"]["target"])
        if edge_finalized(source, target) != vec["expected"]["is_finalized"]:
            failures.append(f"{vec['name']}: finality_mismatch")
    return failures


def _check_layout(path: Path) -> list[str]:
    failures: list[str] = []
    for vec in _load(path):
        inp = vec["input"]
        graph = calculate_coordinates(
            build_graph(records_from_json(inp["records"])), inp["width"], inp["height"]
        )
        expected = vec["expected"]["coordinates"]
        for node in graph.nodes:
            ex, ey = expected[node.id]
            if not (math.isclose(node.x, ex) and math.isclose(node.y, ey)):
                failures.append(f"{vec['name']}: coordinate_mismatch {node.id}")
                break
    return failures


def _check_fingerprints(path: Path) -> list[str]:
    failures: list[str] = []
    for vec in _load(path):
        digest = fingerprint(records_from_json(vec["input"]["records"]))
        if digest != vec["expected"]["fingerprint"]:
            failures.append(f"{vec['name']}: fingerprint_mismatch")
    return failures


def main() -> None:
    fixtures = ROOT / "fixtures"

    failures: list[str] = []
    failures.extend(_check_build(fixtures / "graph" / "build.json"))
    failures.extend(_check_finality(fixtures / "graph" / "finality.json"))
    failures.extend(_check_layout(fixtures / "layout" / "swimlane.json"))
    failures.extend(_check_fingerprints(fixtures / "cache" / "fingerprint.json"))

    if failures:
        for f in failures:
            print("FAIL", f)
        raise SystemExit(1)

    print("All fixtures passed")


if __name__ == "__main__":
    main()
