"""Economy ledger - balance, click power and passive income accrual."""

import logging

from src.economy.outcomes import InsufficientFunds
from src.economy.player_state import PlayerState

logger = logging.getLogger(__name__)


class EconomyLedger:
    """Owns every change to a player's balance and click power.

    The ledger is stateless; callers are responsible for serializing
    access to a given PlayerState (see GameSession).
    """

    def credit(self, state: PlayerState, amount) -> float:
        """Add *amount* to the balance and return the new balance."""
        if amount < 0:
            raise ValueError(f"Credit amount cannot be negative: {amount}")
        state.balance += amount
        return state.balance

    def can_afford(self, state: PlayerState, amount) -> bool:
        return amount <= state.balance

    def debit(self, state: PlayerState, amount) -> float:
        """Subtract *amount* from the balance and return the new balance.

        Raises:
            InsufficientFunds: If the balance is short. Nothing is
                deducted in that case.
        """
        if amount < 0:
            raise ValueError(f"Debit amount cannot be negative: {amount}")
        if not self.can_afford(state, amount):
            raise InsufficientFunds(amount, state.balance)
        state.balance -= amount
        return state.balance

    def tick(self, state: PlayerState, elapsed_seconds=1) -> int:
        """Accrue passive income for *elapsed_seconds*.

        Returns:
            Amount credited (0 when the inventory produces nothing).
        """
        if elapsed_seconds < 0:
            raise ValueError(f"elapsed_seconds cannot be negative: {elapsed_seconds}")
        if float(elapsed_seconds).is_integer():
            elapsed_seconds = int(elapsed_seconds)  # Keep whole-second balances integral
        total_cps = state.total_cps
        if total_cps == 0:
            return 0
        earned = total_cps * elapsed_seconds
        state.balance += earned
        logger.debug(
            "Tick: +%s (%d CPS x %ss), balance=%s",
            earned, total_cps, elapsed_seconds, state.balance,
        )
        return earned

    def halve_balance(self, state: PlayerState) -> float:
        """Penalty: floor the balance to half. Returns the amount removed."""
        before = state.balance
        state.balance = before // 2
        return before - state.balance

    def purchase_upgrade(self, state: PlayerState, price) -> int:
        """Buy +1 click power.

        Raises:
            InsufficientFunds: If the balance is short.
        """
        self.debit(state, price)
        state.click_power += 1
        logger.info(
            "Player %s bought click upgrade for %s (power now %d)",
            state.player_name, price, state.click_power,
        )
        return state.click_power

    def add_click_power(self, state: PlayerState, amount: int) -> int:
        if amount < 0:
            raise ValueError("Click power never decreases")
        state.click_power += amount
        return state.click_power
