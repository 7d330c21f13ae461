"""Configuration classes for gmatch components."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional

SELECTION_MODES = ("lowest", "random")


@dataclass
class MatchingConfig:
    """Configuration for the augmenting-path matcher."""

    # How the next unmarked R-labeled vertex is chosen: "lowest" always
    # expands the smallest vertex id (reproducible edge set), "random" picks
    # uniformly among the candidates.
    selection: str = "lowest"

    # Seed for "random" selection; None leaves the generator unseeded
    seed: Optional[int] = None

    # Run the matching validity check once the search terminates
    validate_result: bool = True

    def __post_init__(self) -> None:
        if self.selection not in SELECTION_MODES:
            raise ValueError(
                f"Unknown selection mode '{self.selection}'. "
                f"Expected one of: {', '.join(SELECTION_MODES)}."
            )

    def make_rng(self) -> random.Random:
        """Return a Random instance seeded from ``seed`` (unseeded if None)."""
        rng = random.Random()
        if self.seed is not None:
            rng.seed(self.seed)
        return rng


# Global configuration instance
MATCHING_CONFIG = MatchingConfig()
