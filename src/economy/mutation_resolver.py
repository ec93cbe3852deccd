"""Mutation resolver - one-shot, coin-flip rarity upgrades of owned items."""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from src.economy.config import MUTATION_SUCCESS_CHANCE
from src.economy.ledger import EconomyLedger
from src.economy.loot_resolver import draw_cps, item_display_name
from src.economy.outcomes import (
    AlreadyMutated,
    ItemNotFound,
    Notification,
    NotificationKind,
)
from src.economy.player_state import InventoryItem, PlayerState
from src.economy.rarity_table import RarityTable, default_rarity_table

logger = logging.getLogger(__name__)


@dataclass
class MutationResult:
    """What a resolved mutation did to its item."""

    item: InventoryItem
    upgraded: bool
    previous_tier_id: str
    previous_cps: int
    notification: Notification

    @property
    def cps_delta(self) -> int:
        return self.item.cps - self.previous_cps


class MutationResolver:
    """Every item gets exactly one mutation attempt.

    A successful roll moves the item up one tier and redraws its CPS; a
    failed roll (or an item already at the top tier) leaves it as is. Both
    paths mark the item mutated, which permanently blocks another attempt.
    """

    def __init__(
        self,
        table: Optional[RarityTable] = None,
        rng: Optional[random.Random] = None,
        ledger: Optional[EconomyLedger] = None,
        success_chance: float = MUTATION_SUCCESS_CHANCE,
    ):
        self.table = table or default_rarity_table()
        self.rng = rng or random.Random()
        self.ledger = ledger or EconomyLedger()
        self.success_chance = success_chance

    def check(self, state: PlayerState, item_id: str) -> InventoryItem:
        """Validate the target item without charging.

        Raises:
            ItemNotFound: No inventory item has this id.
            AlreadyMutated: The item used its attempt already.
        """
        item = state.find_item(item_id)
        if item is None:
            raise ItemNotFound(item_id)
        if item.mutated:
            raise AlreadyMutated(item_id)
        return item

    def charge(self, state: PlayerState, item_id: str, price) -> InventoryItem:
        """Validate the target then take the price.

        Target checks run first so an invalid target never costs anything.

        Raises:
            ItemNotFound, AlreadyMutated, InsufficientFunds
        """
        item = self.check(state, item_id)
        self.ledger.debit(state, price)
        return item

    def resolve(self, state: PlayerState, item: InventoryItem) -> MutationResult:
        """Flip the coin and apply the outcome to *item*."""
        previous_tier_id = item.tier_id
        previous_cps = item.cps

        success = self.rng.random() < self.success_chance
        next_tier = self.table.next_tier(item.tier_id)

        if success and next_tier is not None:
            item.tier_id = next_tier.tier_id
            item.cps = draw_cps(next_tier, self.rng)
            item.display_name = item_display_name(next_tier, self.rng)
            item.mutated = True
            logger.info(
                "Player %s mutated %s: %s -> %s (%d -> %d CPS)",
                state.player_name, item.item_id, previous_tier_id,
                next_tier.tier_id, previous_cps, item.cps,
            )
            notification = Notification(
                kind=NotificationKind.MUTATION_SUCCEEDED,
                title="Mutation succeeded!",
                message=f"New rarity: {next_tier.display_name} (+{item.cps} CPS)",
                data={
                    "item_id": item.item_id,
                    "tier_id": next_tier.tier_id,
                    "tier_name": next_tier.display_name,
                    "cps": item.cps,
                    "cps_delta": item.cps - previous_cps,
                },
            )
            return MutationResult(item, True, previous_tier_id, previous_cps, notification)

        item.mutated = True
        logger.info(
            "Player %s mutation of %s failed (%s, %s)",
            state.player_name, item.item_id, item.tier_id,
            "top tier" if next_tier is None else "lost roll",
        )
        notification = Notification(
            kind=NotificationKind.MUTATION_FAILED,
            title="Mutation failed",
            message="The item stays the same but can no longer be mutated",
            data={
                "item_id": item.item_id,
                "tier_id": item.tier_id,
                "cps": item.cps,
                "cps_delta": 0,
            },
        )
        return MutationResult(item, False, previous_tier_id, previous_cps, notification)

    def mutate(self, state: PlayerState, item_id: str, price) -> MutationResult:
        """Charge and resolve in one step."""
        item = self.charge(state, item_id, price)
        return self.resolve(state, item)
