"""Loot resolver - weighted-random case opening."""

import logging
import math
import random
from typing import Optional, Tuple

from src.economy.config import ITEM_SERIAL_LIMIT
from src.economy.ledger import EconomyLedger
from src.economy.outcomes import Notification, NotificationKind
from src.economy.player_state import InventoryItem, PlayerState
from src.economy.rarity_table import RarityTable, RarityTier, default_rarity_table

logger = logging.getLogger(__name__)


def draw_cps(tier: RarityTier, rng: random.Random) -> int:
    """Uniform integer CPS within the tier's inclusive range."""
    span = tier.cps_max - tier.cps_min + 1
    cps = tier.cps_min + math.floor(rng.random() * span)
    return max(tier.cps_min, min(tier.cps_max, cps))


def item_display_name(tier: RarityTier, rng: random.Random) -> str:
    return f"{tier.display_name} NFT #{rng.randrange(ITEM_SERIAL_LIMIT)}"


class LootResolver:
    """Turns a case purchase into a new inventory item.

    Opening is split in two so a caller can hold a pending window between
    paying and receiving: :meth:`charge` takes the price, :meth:`resolve`
    draws and grants the item. :meth:`open_case` does both back to back.
    """

    def __init__(
        self,
        table: Optional[RarityTable] = None,
        rng: Optional[random.Random] = None,
        ledger: Optional[EconomyLedger] = None,
    ):
        self.table = table or default_rarity_table()
        self.rng = rng or random.Random()
        self.ledger = ledger or EconomyLedger()

    def draw(self) -> Tuple[RarityTier, int]:
        """Roll a tier and a CPS value without touching any player."""
        roll = self.rng.random() * 100
        tier = self.table.select(roll)
        cps = draw_cps(tier, self.rng)
        logger.debug("Loot roll %.4f -> %s (%d CPS)", roll, tier.tier_id, cps)
        return tier, cps

    def charge(self, state: PlayerState, price) -> float:
        """Take the case price.

        Raises:
            InsufficientFunds: If the balance is short.
        """
        return self.ledger.debit(state, price)

    def resolve(self, state: PlayerState) -> Tuple[InventoryItem, Notification]:
        """Draw an item and add it to the inventory."""
        tier, cps = self.draw()
        item = InventoryItem.create(
            tier_id=tier.tier_id,
            cps=cps,
            display_name=item_display_name(tier, self.rng),
        )
        state.inventory.append(item)

        logger.info(
            "Player %s opened %s (%s, +%d CPS); total CPS %d",
            state.player_name, item.display_name, tier.tier_id, cps, state.total_cps,
        )

        notification = Notification(
            kind=NotificationKind.LOOT_ACQUIRED,
            title=f"Got {tier.display_name}!",
            message=f"{item.display_name} (+{cps} CPS)",
            data={
                "item_id": item.item_id,
                "tier_id": tier.tier_id,
                "tier_name": tier.display_name,
                "cps": cps,
            },
        )
        return item, notification

    def open_case(self, state: PlayerState, price) -> Tuple[InventoryItem, Notification]:
        """Charge and resolve in one step.

        Raises:
            InsufficientFunds: If the balance is short; state is unchanged.
        """
        self.charge(state, price)
        return self.resolve(state)
