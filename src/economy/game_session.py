"""Game session - serializes every operation on one player's state."""

import logging
import random
import threading
import time
from typing import Callable, Dict, List, Optional, Set

from src.economy.click_guard import ClickGuard
from src.economy.config import EconomyConfig
from src.economy.ledger import EconomyLedger
from src.economy.loot_resolver import LootResolver
from src.economy.mutation_resolver import MutationResolver
from src.economy.outcomes import (
    EconomyError,
    Notification,
    NotificationKind,
    OperationInFlight,
    OperationResult,
    Outcome,
)
from src.economy.player_state import PlayerState
from src.economy.privilege_gate import PrivilegeGate
from src.economy.rarity_table import RarityTable, default_rarity_table

logger = logging.getLogger(__name__)

Subscriber = Callable[[Notification], None]


class GameSession:
    """Main entry point for the presentation layer.

    Coordinates ClickGuard, EconomyLedger, LootResolver, MutationResolver
    and PrivilegeGate over a single PlayerState. Every state transition
    runs under one re-entrant lock so the passive income tick, clicks and
    purchases never interleave into a lost update.

    Case opening and mutation have a pending window between paying and
    receiving. The lock is released for that window, but the operation
    stays marked in flight: a duplicate case opening, or a duplicate
    mutation of the same item, is rejected until the first resolves.
    """

    def __init__(
        self,
        state: Optional[PlayerState] = None,
        config: Optional[EconomyConfig] = None,
        table: Optional[RarityTable] = None,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.state = state or PlayerState.create_new()
        self.config = config or EconomyConfig()
        self.table = table or default_rarity_table()
        self.rng = rng or random.Random()
        self._sleep = sleep

        self.ledger = EconomyLedger()
        self.guard = ClickGuard(
            self.ledger,
            min_interval_ms=self.config.min_click_interval_ms,
            penalty_warning_count=self.config.penalty_warning_count,
            ban_warning_count=self.config.ban_warning_count,
        )
        self.loot = LootResolver(self.table, self.rng, self.ledger)
        self.mutations = MutationResolver(
            self.table,
            self.rng,
            self.ledger,
            success_chance=self.config.mutation_success_chance,
        )
        self.gate = PrivilegeGate(
            self.table, self.ledger, promo_code=self.config.admin_promo_code
        )

        self._lock = threading.RLock()
        self._case_in_flight = False
        self._mutations_in_flight: Set[str] = set()
        self._subscribers: List[Subscriber] = []

        logger.info(
            "Started session for %s (%s): %d rarity tiers",
            self.state.player_name, self.state.player_id, len(self.table),
        )

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber):
        """Register a callable to receive every notification."""
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber):
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def _publish(self, notifications: List[Notification]):
        for notification in notifications:
            for callback in list(self._subscribers):
                try:
                    callback(notification)
                except Exception:
                    logger.exception(
                        "Notification subscriber failed on %s", notification.kind.value
                    )

    def _succeed(
        self,
        data: Dict,
        notifications: Optional[List[Notification]] = None,
    ) -> OperationResult:
        result = OperationResult.success(data=data, notifications=notifications)
        self._publish(result.notifications)
        return result

    def _reject(self, operation: str, error: EconomyError) -> OperationResult:
        logger.warning(
            "%s rejected for %s: %s", operation, self.state.player_name, error
        )
        return OperationResult.failure(error)

    # ------------------------------------------------------------------
    # Clicks and passive income
    # ------------------------------------------------------------------

    def register_click(self, now_ms: int) -> OperationResult:
        """Register one manual click at the caller's timestamp."""
        with self._lock:
            verdict = self.guard.register_click(self.state, now_ms)
            data = {
                "accepted": verdict.accepted,
                "credited": verdict.credited,
                "penalty": verdict.penalty,
                "warning_count": self.state.warning_count,
                "balance": self.state.balance,
            }

        if not verdict.accepted:
            result = OperationResult(
                outcome=Outcome.BANNED,
                message="Account is banned",
                data=data,
                notifications=verdict.notifications,
            )
            self._publish(result.notifications)
            return result

        return self._succeed(data, verdict.notifications)

    def tick(self, elapsed_seconds=1):
        """Accrue passive income. Returns the amount credited."""
        with self._lock:
            return self.ledger.tick(self.state, elapsed_seconds)

    # ------------------------------------------------------------------
    # Purchases
    # ------------------------------------------------------------------

    def purchase_upgrade(self) -> OperationResult:
        """Spend the upgrade price for +1 click power."""
        price = self.config.upgrade_price
        with self._lock:
            try:
                power = self.ledger.purchase_upgrade(self.state, price)
            except EconomyError as e:
                return self._reject("purchase_upgrade", e)
            balance = self.state.balance

        notification = Notification(
            kind=NotificationKind.UPGRADE_PURCHASED,
            title="Upgrade purchased!",
            message=f"Click power: {power}",
            data={"click_power": power, "price": price},
        )
        return self._succeed(
            {"click_power": power, "price": price, "balance": balance},
            [notification],
        )

    def open_case(self) -> OperationResult:
        """Buy one loot case and receive a weighted-random item."""
        price = self.config.case_price
        with self._lock:
            try:
                if self._case_in_flight:
                    raise OperationInFlight("open_case")
                self.loot.charge(self.state, price)
            except EconomyError as e:
                return self._reject("open_case", e)
            self._case_in_flight = True

        # Paid for, so the item is granted even if the wait is interrupted
        try:
            self._pend(self.config.case_open_delay_seconds)
        finally:
            with self._lock:
                try:
                    item, notification = self.loot.resolve(self.state)
                    data = {
                        "item": item.to_dict(),
                        "tier_id": item.tier_id,
                        "tier_name": self.table.get(item.tier_id).display_name,
                        "cps": item.cps,
                        "price": price,
                        "balance": self.state.balance,
                        "total_cps": self.state.total_cps,
                    }
                finally:
                    self._case_in_flight = False

        return self._succeed(data, [notification])

    def mutate(self, item_id: str) -> OperationResult:
        """Spend the mutation price for a one-shot upgrade attempt on an item."""
        price = self.config.mutation_price
        with self._lock:
            try:
                if item_id in self._mutations_in_flight:
                    raise OperationInFlight("mutate", item_id)
                item = self.mutations.charge(self.state, item_id, price)
            except EconomyError as e:
                return self._reject("mutate", e)
            self._mutations_in_flight.add(item_id)

        try:
            self._pend(self.config.mutation_delay_seconds)
        finally:
            with self._lock:
                try:
                    outcome = self.mutations.resolve(self.state, item)
                    data = {
                        "item": outcome.item.to_dict(),
                        "upgraded": outcome.upgraded,
                        "previous_tier_id": outcome.previous_tier_id,
                        "tier_id": outcome.item.tier_id,
                        "tier_name": self.table.get(outcome.item.tier_id).display_name,
                        "cps": outcome.item.cps,
                        "cps_delta": outcome.cps_delta,
                        "price": price,
                        "balance": self.state.balance,
                        "total_cps": self.state.total_cps,
                    }
                finally:
                    self._mutations_in_flight.discard(item_id)

        return self._succeed(data, [outcome.notification])

    def _pend(self, delay: float):
        if delay > 0:
            self._sleep(delay)

    @property
    def case_in_flight(self) -> bool:
        return self._case_in_flight

    def mutation_in_flight(self, item_id: str) -> bool:
        return item_id in self._mutations_in_flight

    # ------------------------------------------------------------------
    # Privileges
    # ------------------------------------------------------------------

    def redeem_promo(self, code: str) -> OperationResult:
        with self._lock:
            try:
                self.gate.redeem_promo(self.state, code)
            except EconomyError as e:
                return self._reject("redeem_promo", e)

        notification = Notification(
            kind=NotificationKind.ADMIN_UNLOCKED,
            title="Admin access granted!",
            message="Admin panel activated",
        )
        return self._succeed({"is_admin": True}, [notification])

    def grant_currency(self, amount=None) -> OperationResult:
        if amount is None:
            amount = self.config.admin_currency_grant
        with self._lock:
            try:
                balance = self.gate.grant_currency(self.state, amount)
            except EconomyError as e:
                return self._reject("grant_currency", e)

        notification = Notification(
            kind=NotificationKind.CURRENCY_GRANTED,
            title=f"Granted {amount:,} clicks",
            message=f"Balance: {balance:,}",
            data={"amount": amount},
        )
        return self._succeed({"amount": amount, "balance": balance}, [notification])

    def grant_click_power(self, amount: Optional[int] = None) -> OperationResult:
        if amount is None:
            amount = self.config.admin_click_power_grant
        with self._lock:
            try:
                power = self.gate.grant_click_power(self.state, amount)
            except EconomyError as e:
                return self._reject("grant_click_power", e)

        notification = Notification(
            kind=NotificationKind.CLICK_POWER_GRANTED,
            title=f"Click power +{amount}",
            message=f"Click power: {power}",
            data={"amount": amount},
        )
        return self._succeed({"amount": amount, "click_power": power}, [notification])

    def grant_item(
        self,
        tier_id: Optional[str] = None,
        cps: Optional[int] = None,
    ) -> OperationResult:
        with self._lock:
            try:
                item = self.gate.grant_item(self.state, tier_id=tier_id, cps=cps)
            except EconomyError as e:
                return self._reject("grant_item", e)
            total_cps = self.state.total_cps

        tier = self.table.get(item.tier_id)
        notification = Notification(
            kind=NotificationKind.ITEM_GRANTED,
            title=f"{tier.display_name} item granted",
            message=f"{item.display_name} (+{item.cps} CPS)",
            data={"item_id": item.item_id, "tier_id": tier.tier_id, "cps": item.cps},
        )
        return self._succeed(
            {
                "item": item.to_dict(),
                "tier_id": tier.tier_id,
                "tier_name": tier.display_name,
                "cps": item.cps,
                "total_cps": total_cps,
            },
            [notification],
        )

    def reset_progress(self) -> OperationResult:
        with self._lock:
            try:
                self.gate.reset_progress(self.state)
            except EconomyError as e:
                return self._reject("reset_progress", e)

        notification = Notification(
            kind=NotificationKind.PROGRESS_RESET,
            title="Progress reset",
            message="Balance, click power and inventory cleared",
        )
        return self._succeed(
            {"balance": 0, "click_power": 1, "inventory_size": 0}, [notification]
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def total_cps(self) -> int:
        return self.state.total_cps

    def snapshot(self) -> Dict:
        """JSON-serializable copy of the player state."""
        with self._lock:
            return self.state.to_dict()
