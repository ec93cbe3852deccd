"""Run the loot drop-rate simulation and write a JSON balancing report.

Usage:
    python -m src.simulation.run_simulation [num_draws] [seed] [output_dir]

Examples:
    python -m src.simulation.run_simulation
    python -m src.simulation.run_simulation 1000000 7
"""

import json
import logging
import random
import sys
from datetime import datetime, timezone
from pathlib import Path

from src.economy.config import CASE_PRICE
from src.economy.rarity_table import RarityTable, default_rarity_table
from src.logging_config import setup_logging
from src.simulation.config import (
    DEFAULT_NUM_DRAWS,
    DEFAULT_SEED,
    FREQUENCY_TOLERANCE_PCT,
    REPORTS_DIR,
)
from src.simulation.drop_rates import (
    DropRateSimulator,
    break_even_seconds,
    expected_cps_per_case,
)

logger = logging.getLogger(__name__)


def run_simulation(
    num_draws: int = DEFAULT_NUM_DRAWS,
    seed: int = DEFAULT_SEED,
    output_dir: Path | None = None,
    table: RarityTable | None = None,
    case_price: int = CASE_PRICE,
    tolerance_pct: float = FREQUENCY_TOLERANCE_PCT,
) -> Path:
    """Simulate *num_draws* case openings and write the report.

    Args:
        num_draws: Number of cases to draw.
        seed: Seed for the draw RNG, so reports are reproducible.
        output_dir: Directory for JSON output.
            Defaults to ``data/reports/``.
        table: Rarity table to analyse. Defaults to the stock table.
        case_price: Case price used for the break-even estimate.
        tolerance_pct: Allowed gap (percentage points) between configured
            and observed drop rate before a tier is flagged.

    Returns:
        Path to the generated JSON file.
    """
    if output_dir is None:
        output_dir = REPORTS_DIR
    table = table or default_rarity_table()

    logger.info(
        "Starting drop-rate simulation: %d draws, seed %d, %d tiers",
        num_draws, seed, len(table),
    )

    simulator = DropRateSimulator(table, random.Random(seed))
    draws = simulator.simulate_draws(num_draws)
    summary = simulator.summarize(draws)
    rates = simulator.drop_rates(summary)

    flagged = [r.tier_id for r in rates if not r.within_tolerance(tolerance_pct)]
    for rate in rates:
        logger.info(
            "  %-10s configured %6.2f%%  observed %6.2f%%  (%+.2f)  draws=%d",
            rate.tier_id, rate.configured_pct, rate.empirical_pct,
            rate.deviation_pct, rate.draws,
        )
    if flagged:
        logger.warning(
            "Tiers outside the %.2f%% tolerance: %s", tolerance_pct, ", ".join(flagged)
        )

    expected_cps = expected_cps_per_case(table)
    output_data = {
        "metadata": {
            "version": "1.0",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "num_draws": num_draws,
            "seed": seed,
            "total_weight": table.total_weight,
            "tolerance_pct": tolerance_pct,
            "case_price": case_price,
            "expected_cps_per_case": expected_cps,
            "observed_cps_per_case": float(draws["cps"].mean()),
            "break_even_seconds": break_even_seconds(case_price, table),
        },
        "flagged_tiers": flagged,
        "tiers": [
            {
                "tier_id": rate.tier_id,
                "display_name": rate.display_name,
                "configured_pct": rate.configured_pct,
                "empirical_pct": round(rate.empirical_pct, 4),
                "deviation_pct": round(rate.deviation_pct, 4),
                "draws": rate.draws,
                "mean_cps": rate.mean_cps,
                "min_cps": rate.min_cps,
                "max_cps": rate.max_cps,
            }
            for rate in rates
        ],
    }

    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / f"drop_rates_{seed}.json"

    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(output_data, f, indent=2)

    logger.info("Simulation complete! Output: %s", output_file)
    logger.info(
        "  Expected CPS per case: %.2f (break-even %.1fs at %d clicks)",
        expected_cps, output_data["metadata"]["break_even_seconds"], case_price,
    )

    return output_file


if __name__ == "__main__":
    setup_logging()

    num_draws = int(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_NUM_DRAWS
    seed = int(sys.argv[2]) if len(sys.argv) > 2 else DEFAULT_SEED
    output_dir = Path(sys.argv[3]) if len(sys.argv) > 3 else None

    try:
        output = run_simulation(num_draws, seed, output_dir)
        print(f"Simulation complete: {output}")
    except Exception:
        logger.exception("Simulation failed")
        sys.exit(1)
