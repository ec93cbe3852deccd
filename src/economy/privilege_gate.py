"""Privilege gate - promo codes and admin-only state grants."""

import logging
from typing import Optional

from src.economy.config import (
    ADMIN_CLICK_POWER_GRANT,
    ADMIN_CURRENCY_GRANT,
    ADMIN_PROMO_CODE,
    ITEM_SERIAL_LIMIT,
)
from src.economy.ledger import EconomyLedger
from src.economy.outcomes import InvalidCode, NotAuthorized
from src.economy.player_state import InventoryItem, PlayerState
from src.economy.rarity_table import RarityTable, default_rarity_table

logger = logging.getLogger(__name__)


class PrivilegeGate:
    """Unlocks admin status and performs admin grants.

    Grants are direct state edits, not purchases: no price, no validation
    beyond the admin check.
    """

    def __init__(
        self,
        table: Optional[RarityTable] = None,
        ledger: Optional[EconomyLedger] = None,
        promo_code: str = ADMIN_PROMO_CODE,
    ):
        self.table = table or default_rarity_table()
        self.ledger = ledger or EconomyLedger()
        self.promo_code = promo_code

    def redeem_promo(self, state: PlayerState, code: str):
        """Grant admin status for the recognized code (case-insensitive).

        Raises:
            InvalidCode: For any other input; state is unchanged.
        """
        if (code or "").lower() != self.promo_code.lower():
            logger.warning("Player %s entered an invalid promo code", state.player_name)
            raise InvalidCode(code)
        state.is_admin = True
        logger.info("Player %s unlocked admin access", state.player_name)

    def require_admin(self, state: PlayerState, operation: str):
        if not state.is_admin:
            logger.warning(
                "Player %s attempted %s without admin access",
                state.player_name, operation,
            )
            raise NotAuthorized(operation)

    def grant_currency(self, state: PlayerState, amount=ADMIN_CURRENCY_GRANT) -> float:
        self.require_admin(state, "grant_currency")
        balance = self.ledger.credit(state, amount)
        logger.info("Admin grant: +%s clicks to %s", amount, state.player_name)
        return balance

    def grant_click_power(self, state: PlayerState, amount: int = ADMIN_CLICK_POWER_GRANT) -> int:
        self.require_admin(state, "grant_click_power")
        power = self.ledger.add_click_power(state, amount)
        logger.info("Admin grant: +%d click power to %s", amount, state.player_name)
        return power

    def grant_item(
        self,
        state: PlayerState,
        tier_id: Optional[str] = None,
        cps: Optional[int] = None,
    ) -> InventoryItem:
        """Add an item outright.

        Defaults to the top tier at its maximum CPS. Granted items come
        pre-mutated so they cannot be rolled further.
        """
        self.require_admin(state, "grant_item")
        if tier_id is not None and tier_id not in self.table:
            raise ValueError(f"Unknown rarity tier: {tier_id!r}")
        tier = self.table.get(tier_id) if tier_id is not None else self.table.top
        if cps is None:
            cps = tier.cps_max
        if cps < 0:
            raise ValueError(f"cps cannot be negative: {cps}")

        item = InventoryItem.create(
            tier_id=tier.tier_id,
            cps=cps,
            display_name=f"{tier.display_name} NFT #{ITEM_SERIAL_LIMIT}",
            mutated=True,
        )
        state.inventory.append(item)
        logger.info(
            "Admin grant: %s (%d CPS) to %s", item.display_name, cps, state.player_name
        )
        return item

    def reset_progress(self, state: PlayerState):
        """Wipe economy progress. Admin, warning and ban flags survive."""
        self.require_admin(state, "reset_progress")
        state.inventory.clear()
        state.balance = 0
        state.click_power = 1
        logger.info("Progress reset for %s", state.player_name)
