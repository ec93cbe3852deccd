"""Tests for the passive income ticker thread."""

import threading
import time

import pytest

from src.economy.income_ticker import PassiveIncomeTicker


def _wait_for(predicate, timeout=2.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return False


class TestPassiveIncomeTicker:
    def test_default_interval_from_config(self, session):
        ticker = PassiveIncomeTicker(session)
        assert ticker.interval == session.config.tick_interval_seconds

    def test_invalid_interval(self, session):
        with pytest.raises(ValueError):
            PassiveIncomeTicker(session, interval=0)

    def test_accrues_while_running(self, session):
        session.redeem_promo("setup")
        session.grant_item(tier_id="common", cps=3)

        with PassiveIncomeTicker(session, interval=0.01) as ticker:
            assert ticker.running
            assert _wait_for(lambda: ticker.ticks >= 3)

        assert not ticker.running
        # each tick pays total_cps * interval
        assert session.state.balance == pytest.approx(3 * 0.01 * ticker.ticks)

    def test_empty_inventory_earns_nothing(self, session):
        with PassiveIncomeTicker(session, interval=0.01) as ticker:
            assert _wait_for(lambda: ticker.ticks >= 3)
        assert session.state.balance == 0

    def test_stop_halts_accrual(self, session):
        session.redeem_promo("setup")
        session.grant_item(tier_id="common", cps=1)
        ticker = PassiveIncomeTicker(session, interval=0.01)
        ticker.start()
        assert _wait_for(lambda: ticker.ticks >= 1)
        ticker.stop(timeout=1.0)
        balance = session.state.balance
        time.sleep(0.05)
        assert session.state.balance == balance

    def test_start_is_idempotent(self, session):
        ticker = PassiveIncomeTicker(session, interval=0.01)
        ticker.start()
        thread = ticker._thread
        ticker.start()
        assert ticker._thread is thread
        ticker.stop(timeout=1.0)

    def test_timed_out_stop_keeps_thread(self, session, monkeypatch):
        entered = threading.Event()
        release = threading.Event()

        def blocking_tick(_elapsed):
            entered.set()
            release.wait(2.0)

        monkeypatch.setattr(session, "tick", blocking_tick)
        ticker = PassiveIncomeTicker(session, interval=0.01)
        ticker.start()
        assert entered.wait(1.0)
        thread = ticker._thread

        ticker.stop(timeout=0.01)
        assert ticker.running
        ticker.start()
        assert ticker._thread is thread

        release.set()
        thread.join(1.0)
        assert not ticker.running
