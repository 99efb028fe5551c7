"""Command line entry point: records in, laid-out graph out."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

import click

from .client import BlockSourceClient
from .codec import dump_json, dump_yaml, graph_to_json, load_records
from .config import DEFAULT_HEIGHT, DEFAULT_WIDTH, DEPTH_CHOICES, SourceConfig
from .errors import ErrorCode, LayoutError, err
from .graph.builder import build_graph
from .layout.swimlane import calculate_coordinates
from .types import BlockRecord
from .view import filter_records

logger = logging.getLogger(__name__)


async def _fetch(config: SourceConfig) -> List[BlockRecord]:
    async with BlockSourceClient(config) as client:
        return await client.fetch_blocks()


def _read_input(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise err(ErrorCode.INVALID_FORMAT, f"{path} is not UTF-8 text: {e}") from e


@click.command()
@click.option("--input", "input_path", default=None, type=click.Path(exists=True, dir_okay=False),
              help="JSON or YAML file with block records")
@click.option("--endpoint", default=None, help="Explorer endpoint to fetch records from")
@click.option("--depth", default=None, type=click.Choice([str(d) for d in DEPTH_CHOICES]),
              help="Number of ranks to fetch from the endpoint")
@click.option("--width", default=DEFAULT_WIDTH, type=float, show_default=True)
@click.option("--height", default=DEFAULT_HEIGHT, type=float, show_default=True)
@click.option("--hide-ballots", is_flag=True, help="Leave ballots out of the graph")
@click.option("--format", "fmt", default="json", type=click.Choice(["json", "yaml"]), show_default=True)
@click.option("--output", default=None, type=click.Path(dir_okay=False), help="Write result here instead of stdout")
@click.option("--verbose", is_flag=True, help="Enable verbose output")
def main(
    input_path: Optional[str],
    endpoint: Optional[str],
    depth: Optional[str],
    width: float,
    height: float,
    hide_ballots: bool,
    fmt: str,
    output: Optional[str],
    verbose: bool,
) -> None:
    """Lay out a block DAG in per-validator swim-lanes."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    try:
        # Load config from environment, then override with CLI args
        config = SourceConfig.from_env()
        if endpoint:
            config.endpoint = endpoint
        if depth:
            config.depth = int(depth)
        if hide_ballots:
            config.hide_ballots = True

        if input_path:
            records = load_records(_read_input(input_path))
        else:
            records = asyncio.run(_fetch(config))
        records = filter_records(records, config.hide_ballots)
        graph = calculate_coordinates(build_graph(records), width, height)
    except LayoutError as e:
        logger.error(str(e))
        sys.exit(1)

    data = graph_to_json(graph)
    text = dump_yaml(data) if fmt == "yaml" else dump_json(data)
    if output:
        Path(output).write_text(text)
        logger.info(f"Wrote {len(graph.nodes)} nodes, {len(graph.edges)} edges to {output}")
    else:
        click.echo(text)


if __name__ == "__main__":
    main()
