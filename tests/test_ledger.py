"""Tests for the economy ledger - credits, debits, ticks and upgrades."""

import pytest

from src.economy.ledger import EconomyLedger
from src.economy.outcomes import InsufficientFunds, Outcome
from src.economy.player_state import InventoryItem


def _make_item(cps):
    return InventoryItem.create(tier_id="common", cps=cps, display_name="item")


@pytest.fixture
def ledger():
    return EconomyLedger()


# ── Credit / debit ───────────────────────────────────────────────────


class TestCredit:
    def test_adds_to_balance(self, ledger, state):
        assert ledger.credit(state, 5) == 5
        assert ledger.credit(state, 7) == 12

    def test_negative_rejected(self, ledger, state):
        with pytest.raises(ValueError):
            ledger.credit(state, -1)


class TestDebit:
    def test_subtracts(self, ledger, state):
        state.balance = 100
        assert ledger.debit(state, 40) == 60

    def test_exact_balance_allowed(self, ledger, state):
        state.balance = 50
        assert ledger.debit(state, 50) == 0

    def test_insufficient_leaves_balance(self, ledger, state):
        state.balance = 49
        with pytest.raises(InsufficientFunds) as exc_info:
            ledger.debit(state, 50)
        assert state.balance == 49
        assert exc_info.value.outcome is Outcome.INSUFFICIENT_FUNDS
        assert exc_info.value.details() == {"price": 50, "balance": 49}

    def test_negative_rejected(self, ledger, state):
        with pytest.raises(ValueError):
            ledger.debit(state, -5)

    def test_can_afford(self, ledger, state):
        state.balance = 10
        assert ledger.can_afford(state, 10) is True
        assert ledger.can_afford(state, 11) is False


# ── Passive income ───────────────────────────────────────────────────


class TestTick:
    def test_no_items_is_noop(self, ledger, state):
        state.balance = 10
        assert ledger.tick(state) == 0
        assert state.balance == 10

    def test_zero_cps_items_is_noop(self, ledger, state):
        state.inventory.append(_make_item(0))
        assert ledger.tick(state) == 0
        assert state.balance == 0

    def test_adds_total_cps(self, ledger, state):
        state.inventory.extend([_make_item(3), _make_item(12)])
        assert ledger.tick(state) == 15
        assert state.balance == 15

    def test_elapsed_seconds_multiplies(self, ledger, state):
        state.inventory.append(_make_item(4))
        assert ledger.tick(state, elapsed_seconds=5) == 20

    def test_whole_float_seconds_keep_integer_balance(self, ledger, state):
        state.inventory.append(_make_item(4))
        ledger.tick(state, elapsed_seconds=1.0)
        assert state.balance == 4
        assert isinstance(state.balance, int)

    def test_negative_elapsed_rejected(self, ledger, state):
        with pytest.raises(ValueError):
            ledger.tick(state, elapsed_seconds=-1)


# ── Penalty ──────────────────────────────────────────────────────────


class TestHalveBalance:
    @pytest.mark.parametrize("before, after", [(0, 0), (1, 0), (7, 3), (100, 50), (101, 50)])
    def test_floor_halving(self, ledger, state, before, after):
        state.balance = before
        removed = ledger.halve_balance(state)
        assert state.balance == after
        assert removed == before - after


# ── Click power ──────────────────────────────────────────────────────


class TestUpgrade:
    def test_purchase_upgrade(self, ledger, state):
        state.balance = 60
        assert ledger.purchase_upgrade(state, 50) == 2
        assert state.balance == 10
        assert state.click_power == 2

    def test_purchase_upgrade_insufficient(self, ledger, state):
        state.balance = 49
        with pytest.raises(InsufficientFunds):
            ledger.purchase_upgrade(state, 50)
        assert state.click_power == 1
        assert state.balance == 49

    def test_add_click_power(self, ledger, state):
        assert ledger.add_click_power(state, 10) == 11

    def test_click_power_never_decreases(self, ledger, state):
        with pytest.raises(ValueError, match="never decreases"):
            ledger.add_click_power(state, -1)
