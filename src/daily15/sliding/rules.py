from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class RankingTiers:
    # (label, inclusive upper bound on moves), ascending
    tiers: Tuple[Tuple[str, float], ...] = (
        ("Grandmaster", 60),
        ("Master", 80),
        ("Expert", 100),
        ("Scholar", 140),
        ("Novice", math.inf),
    )

    def rank(self, move_count: int) -> str:
        for label, threshold in self.tiers:
            if move_count <= threshold:
                return label
        return self.tiers[-1][0]


DEFAULT_TIERS = RankingTiers()


def rank(move_count: int) -> str:
    return DEFAULT_TIERS.rank(move_count)
