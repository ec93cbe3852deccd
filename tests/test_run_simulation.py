"""Tests for src.simulation.run_simulation (report generation)."""

import json

import pytest

from src.economy.rarity_table import RarityTable, RarityTier
from src.simulation.run_simulation import run_simulation

_REQUIRED_METADATA_KEYS = {
    "version", "generated_at", "num_draws", "seed", "total_weight",
    "tolerance_pct", "case_price", "expected_cps_per_case",
    "observed_cps_per_case", "break_even_seconds",
}

_REQUIRED_TIER_KEYS = {
    "tier_id", "display_name", "configured_pct", "empirical_pct",
    "deviation_pct", "draws", "mean_cps", "min_cps", "max_cps",
}


class TestRunSimulation:
    @pytest.fixture(scope="class")
    def report(self, tmp_path_factory):
        """Run once with the stock table, writing to a temp directory."""
        tmp_dir = tmp_path_factory.mktemp("reports")
        output_path = run_simulation(num_draws=100_000, seed=5, output_dir=tmp_dir)
        with open(output_path) as f:
            data = json.load(f)
        return data, output_path

    def test_file_named_by_seed(self, report):
        _, output_path = report
        assert output_path.exists()
        assert output_path.name == "drop_rates_5.json"

    def test_metadata(self, report):
        data, _ = report
        assert _REQUIRED_METADATA_KEYS.issubset(data["metadata"])
        assert data["metadata"]["num_draws"] == 100_000
        assert data["metadata"]["case_price"] == 100
        assert data["metadata"]["total_weight"] == pytest.approx(100.0)

    def test_tiers(self, report):
        data, _ = report
        assert len(data["tiers"]) == 9
        for tier in data["tiers"]:
            assert _REQUIRED_TIER_KEYS.issubset(tier)
        assert sum(t["draws"] for t in data["tiers"]) == 100_000

    def test_stock_table_not_flagged(self, report):
        data, _ = report
        assert data["flagged_tiers"] == []

    def test_observed_cps_close_to_expected(self, report):
        meta = report[0]["metadata"]
        assert meta["observed_cps_per_case"] == pytest.approx(
            meta["expected_cps_per_case"], rel=0.1
        )

    def test_short_table_flags_first_tier(self, tmp_path):
        table = RarityTable([
            RarityTier("a", "A", 30, 1, 1),
            RarityTier("b", "B", 20, 2, 2),
        ])
        output_path = run_simulation(
            num_draws=50_000, seed=1, output_dir=tmp_path, table=table
        )
        with open(output_path) as f:
            data = json.load(f)
        # "a" absorbs the 50% gap, so it drops far more than its weight
        assert data["flagged_tiers"] == ["a"]
        assert data["metadata"]["total_weight"] == 50
