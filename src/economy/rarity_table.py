"""Rarity tiers - draw weights and CPS reward ranges for loot items."""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence

logger = logging.getLogger(__name__)

# Weights are percentages; a well-balanced table sums to this
WEIGHT_TOTAL = 100.0


@dataclass(frozen=True)
class RarityTier:
    """A named reward class with a draw weight and CPS range."""

    tier_id: str
    display_name: str
    weight: float  # Percentage in (0, 100]
    cps_min: int
    cps_max: int

    def __post_init__(self):
        if not 0 < self.weight <= WEIGHT_TOTAL:
            raise ValueError(
                f"Tier {self.tier_id!r}: weight ({self.weight}) must be in (0, 100]"
            )
        if self.cps_min > self.cps_max:
            raise ValueError(
                f"Tier {self.tier_id!r}: cps_min ({self.cps_min}) "
                f"exceeds cps_max ({self.cps_max})"
            )


class RarityTable:
    """Ordered, immutable sequence of rarity tiers.

    Order is significant: loot draws walk the tiers front to back when
    accumulating weights, and mutation advances an item to the next tier in
    this order. The first tier doubles as the fallback for a roll that lands
    past the cumulative weight of the whole table.
    """

    def __init__(self, tiers: Sequence[RarityTier]):
        if not tiers:
            raise ValueError("Rarity table needs at least one tier")

        self._tiers: List[RarityTier] = list(tiers)
        self._index: Dict[str, int] = {}
        for i, tier in enumerate(self._tiers):
            if tier.tier_id in self._index:
                raise ValueError(f"Duplicate tier id: {tier.tier_id!r}")
            self._index[tier.tier_id] = i

        # Not fixed up: a short table makes the first tier absorb the gap
        if not math.isclose(self.total_weight, WEIGHT_TOTAL, abs_tol=1e-6):
            logger.warning(
                "Rarity weights sum to %.4f, not %.0f; rolls past the total "
                "fall back to %r",
                self.total_weight,
                WEIGHT_TOTAL,
                self._tiers[0].tier_id,
            )

    def __iter__(self) -> Iterator[RarityTier]:
        return iter(self._tiers)

    def __len__(self) -> int:
        return len(self._tiers)

    def __contains__(self, tier_id: str) -> bool:
        return tier_id in self._index

    @property
    def tiers(self) -> List[RarityTier]:
        return list(self._tiers)

    @property
    def total_weight(self) -> float:
        return sum(tier.weight for tier in self._tiers)

    @property
    def first(self) -> RarityTier:
        return self._tiers[0]

    @property
    def top(self) -> RarityTier:
        return self._tiers[-1]

    def get(self, tier_id: str) -> RarityTier:
        """Look up a tier by id.

        Raises:
            KeyError: If no tier has this id.
        """
        try:
            return self._tiers[self._index[tier_id]]
        except KeyError:
            raise KeyError(f"Unknown rarity tier: {tier_id!r}") from None

    def rank(self, tier_id: str) -> int:
        """Position of the tier in configured order (0-based)."""
        if tier_id not in self._index:
            raise KeyError(f"Unknown rarity tier: {tier_id!r}")
        return self._index[tier_id]

    def is_top(self, tier_id: str) -> bool:
        return self.rank(tier_id) == len(self._tiers) - 1

    def next_tier(self, tier_id: str) -> Optional[RarityTier]:
        """Tier after *tier_id* in configured order, or None at the top."""
        rank = self.rank(tier_id)
        if rank + 1 >= len(self._tiers):
            return None
        return self._tiers[rank + 1]

    def select(self, roll: float) -> RarityTier:
        """Pick the tier for a roll in [0, 100).

        Walks tiers in order accumulating weights; the first tier whose
        cumulative weight reaches the roll wins. Falls back to the first
        tier when the roll exceeds the table's total weight.
        """
        cumulative = 0.0
        for tier in self._tiers:
            cumulative += tier.weight
            if roll <= cumulative:
                return tier
        logger.debug("Roll %.4f past cumulative weight %.4f", roll, cumulative)
        return self._tiers[0]


DEFAULT_TIERS = (
    RarityTier("common", "Common", 40, 1, 5),
    RarityTier("uncommon", "Uncommon", 25, 5, 15),
    RarityTier("rare", "Rare", 15, 15, 30),
    RarityTier("epic", "Epic", 10, 30, 60),
    RarityTier("legendary", "Legendary", 6, 60, 100),
    RarityTier("god", "God", 2.5, 100, 200),
    RarityTier("secret", "Secret", 1, 200, 350),
    RarityTier("limited", "Limited", 0.4, 350, 500),
    RarityTier("admin", "Admin", 0.1, 500, 1000),
)


def default_rarity_table() -> RarityTable:
    """The stock nine-tier table."""
    return RarityTable(DEFAULT_TIERS)
