"""blockdag-layout configuration constants.

Keep the layout constants aligned with the explorer's block DAG view.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import ErrorCode, err

# Swim-lane layout
LANE_MARGIN = 0.4  # fraction of a lane kept free between neighbouring lanes
RANK_PADDING = 2  # half a step of margin on each horizontal extreme

# Node presentation
SHORT_HASH_LENGTH = 10
CIRCLE_RADIUS = 12
BALLOT_RADIUS_SCALE = 0.5

# Highlighting
FULL_OPACITY = 1.0
DIM_OPACITY = 0.1
HIDDEN_OPACITY = 0.0

# Depth selection (number of most recent ranks requested from a source)
DEPTH_CHOICES = (10, 20, 50, 100)
DEFAULT_DEPTH = 10

# Default canvas
DEFAULT_WIDTH = 1200.0
DEFAULT_HEIGHT = 600.0

_TRUTHY = ("true", "1", "yes")


@dataclass
class SourceConfig:
    """Configuration for a block source endpoint."""
    endpoint: str = "http://localhost:8080"
    timeout: float = 30.0
    depth: int = DEFAULT_DEPTH
    hide_ballots: bool = False

    @classmethod
    def from_env(cls) -> "SourceConfig":
        """Load configuration from environment variables."""
        config = cls()
        config.endpoint = os.environ.get("BLOCKDAG_ENDPOINT", config.endpoint)
        try:
            config.timeout = float(os.environ.get("BLOCKDAG_TIMEOUT", config.timeout))
        except ValueError as e:
            raise err(ErrorCode.INVALID_FORMAT, f"BLOCKDAG_TIMEOUT: {e}") from e
        try:
            config.depth = int(os.environ.get("BLOCKDAG_DEPTH", config.depth))
        except ValueError as e:
            raise err(ErrorCode.INVALID_DEPTH, f"BLOCKDAG_DEPTH: {e}") from e
        config.hide_ballots = os.environ.get(
            "BLOCKDAG_HIDE_BALLOTS", ""
        ).lower() in _TRUTHY
        return config
