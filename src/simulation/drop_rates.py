"""Monte Carlo drop-rate analysis for the loot resolver.

Runs case draws in isolation (no player, no balance) and compares how
often each rarity tier actually comes up against its configured weight.
Used to catch balancing mistakes in the rarity table, such as weights
that do not add up to 100.
"""

import logging
import random
from typing import Dict, List, Optional

import pandas as pd

from src.economy.loot_resolver import LootResolver
from src.economy.rarity_table import WEIGHT_TOTAL, RarityTable, default_rarity_table
from src.simulation.models import TierDropRate

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = [
    "tier_id", "display_name", "configured_pct", "effective_pct", "draws",
    "empirical_pct", "deviation_pct", "mean_cps", "min_cps", "max_cps",
]


def effective_probabilities(table: RarityTable) -> Dict[str, float]:
    """Exact per-tier probability of a draw, in table order.

    Mirrors the cumulative walk in :meth:`RarityTable.select`: weight past
    100 is unreachable, and a table short of 100 hands the gap to the
    first tier.
    """
    probs: Dict[str, float] = {}
    cumulative = 0.0
    for tier in table:
        reachable = min(cumulative + tier.weight, WEIGHT_TOTAL) - min(cumulative, WEIGHT_TOTAL)
        probs[tier.tier_id] = reachable / WEIGHT_TOTAL
        cumulative += tier.weight

    gap = WEIGHT_TOTAL - min(cumulative, WEIGHT_TOTAL)
    probs[table.first.tier_id] += gap / WEIGHT_TOTAL
    return probs


def expected_cps_per_case(table: Optional[RarityTable] = None) -> float:
    """Mean CPS of one opened case."""
    table = table or default_rarity_table()
    probs = effective_probabilities(table)
    return sum(
        probs[tier.tier_id] * (tier.cps_min + tier.cps_max) / 2 for tier in table
    )


def break_even_seconds(price, table: Optional[RarityTable] = None) -> float:
    """Seconds of passive income an average case needs to repay its price."""
    expected = expected_cps_per_case(table)
    if expected <= 0:
        return float("inf")
    return price / expected


class DropRateSimulator:
    """Draw many cases and tabulate the results with pandas."""

    def __init__(
        self,
        table: Optional[RarityTable] = None,
        rng: Optional[random.Random] = None,
    ):
        self.table = table or default_rarity_table()
        self.resolver = LootResolver(self.table, rng or random.Random())

    def simulate_draws(self, num_draws: int) -> pd.DataFrame:
        """One row per draw with columns ``tier_id`` and ``cps``."""
        if num_draws <= 0:
            raise ValueError(f"num_draws must be positive, got {num_draws}")

        tier_ids: List[str] = []
        cps_values: List[int] = []
        for _ in range(num_draws):
            tier, cps = self.resolver.draw()
            tier_ids.append(tier.tier_id)
            cps_values.append(cps)

        logger.info("Simulated %d case draws", num_draws)
        return pd.DataFrame({"tier_id": tier_ids, "cps": cps_values})

    def summarize(self, draws: pd.DataFrame) -> pd.DataFrame:
        """Per-tier drop statistics in table order.

        Tiers that never came up are kept with zero draws and empty CPS
        statistics.
        """
        total = len(draws)
        if total == 0:
            raise ValueError("Cannot summarize an empty draw set")

        stats = draws.groupby("tier_id")["cps"].agg(["count", "mean", "min", "max"])
        probs = effective_probabilities(self.table)

        rows = []
        for tier in self.table:
            if tier.tier_id in stats.index:
                tier_stats = stats.loc[tier.tier_id]
                count = int(tier_stats["count"])
                mean_cps = float(tier_stats["mean"])
                min_cps = int(tier_stats["min"])
                max_cps = int(tier_stats["max"])
            else:
                count, mean_cps, min_cps, max_cps = 0, None, None, None

            empirical_pct = count / total * 100
            rows.append({
                "tier_id": tier.tier_id,
                "display_name": tier.display_name,
                "configured_pct": float(tier.weight),
                "effective_pct": probs[tier.tier_id] * 100,
                "draws": count,
                "empirical_pct": empirical_pct,
                "deviation_pct": empirical_pct - tier.weight,
                "mean_cps": mean_cps,
                "min_cps": min_cps,
                "max_cps": max_cps,
            })

        return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)

    def drop_rates(self, summary: pd.DataFrame) -> List[TierDropRate]:
        """Convert a summary frame into TierDropRate records."""
        results = []
        for _, row in summary.iterrows():
            results.append(
                TierDropRate(
                    tier_id=row["tier_id"],
                    display_name=row["display_name"],
                    configured_pct=float(row["configured_pct"]),
                    draws=int(row["draws"]),
                    empirical_pct=float(row["empirical_pct"]),
                    deviation_pct=float(row["deviation_pct"]),
                    mean_cps=_optional_float(row["mean_cps"]),
                    min_cps=_optional_int(row["min_cps"]),
                    max_cps=_optional_int(row["max_cps"]),
                )
            )
        return results


def _optional_float(val) -> Optional[float]:
    if val is None or pd.isna(val):
        return None
    return float(val)


def _optional_int(val) -> Optional[int]:
    if val is None or pd.isna(val):
        return None
    return int(val)
