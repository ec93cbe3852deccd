"""Data models for the drop-rate simulation."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class TierDropRate:
    """Observed vs configured drop rate for a single rarity tier."""

    tier_id: str
    display_name: str
    configured_pct: float
    draws: int
    empirical_pct: float
    deviation_pct: float  # empirical - configured, in percentage points
    mean_cps: Optional[float] = None  # None when the tier never dropped
    min_cps: Optional[int] = None
    max_cps: Optional[int] = None

    def within_tolerance(self, tolerance_pct: float) -> bool:
        return abs(self.deviation_pct) <= tolerance_pct
