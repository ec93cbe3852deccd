from src.simulation.drop_rates import (
    DropRateSimulator,
    break_even_seconds,
    expected_cps_per_case,
)
from src.simulation.models import TierDropRate

__all__ = [
    "DropRateSimulator",
    "TierDropRate",
    "break_even_seconds",
    "expected_cps_per_case",
]
