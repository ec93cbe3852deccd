"""Click guard - detects automated clicking and escalates to a permanent ban."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from src.economy.config import (
    BAN_WARNING_COUNT,
    MIN_CLICK_INTERVAL_MS,
    PENALTY_WARNING_COUNT,
)
from src.economy.ledger import EconomyLedger
from src.economy.outcomes import Notification, NotificationKind
from src.economy.player_state import PlayerState

logger = logging.getLogger(__name__)


@dataclass
class ClickVerdict:
    """Result of one click passing through the guard."""

    accepted: bool
    credited: int = 0
    penalty: float = 0
    warning_level: int = 0  # Warning raised by this click, 0 if none
    notifications: List[Notification] = field(default_factory=list)


class ClickGuard:
    """Three-strike state machine over click cadence.

    Clicks arriving less than ``min_interval_ms`` after the previous
    accepted click count as a strike:

    1. warning, click still credited
    2. warning plus the balance is floored to half, click still credited
    3. ban: the click is rejected and every later click is dropped
    """

    def __init__(
        self,
        ledger: Optional[EconomyLedger] = None,
        min_interval_ms: int = MIN_CLICK_INTERVAL_MS,
        penalty_warning_count: int = PENALTY_WARNING_COUNT,
        ban_warning_count: int = BAN_WARNING_COUNT,
    ):
        self.ledger = ledger or EconomyLedger()
        self.min_interval_ms = min_interval_ms
        self.penalty_warning_count = penalty_warning_count
        self.ban_warning_count = ban_warning_count

    def register_click(self, state: PlayerState, now_ms: int) -> ClickVerdict:
        """Run one click through the guard and credit it if accepted.

        Args:
            state: Player whose click this is.
            now_ms: Caller-supplied monotonic timestamp in milliseconds.
        """
        if state.banned:
            return ClickVerdict(accepted=False)

        verdict = ClickVerdict(accepted=True)

        # First click has nothing to compare against
        if state.last_click_timestamp_ms != 0:
            delta = now_ms - state.last_click_timestamp_ms
            if delta < self.min_interval_ms:
                state.warning_count += 1
                verdict.warning_level = state.warning_count

                if state.warning_count >= self.ban_warning_count:
                    state.banned = True
                    logger.warning(
                        "Player %s banned: click interval %dms (strike %d)",
                        state.player_name, delta, state.warning_count,
                    )
                    verdict.accepted = False
                    verdict.notifications.append(
                        Notification(
                            kind=NotificationKind.BANNED,
                            title="Banned",
                            message="Account blocked for cheating. This cannot be undone.",
                            data={"warning_count": state.warning_count},
                        )
                    )
                    return verdict

                self._warn(state, delta, verdict)

        state.last_click_timestamp_ms = now_ms
        self.ledger.credit(state, state.click_power)
        verdict.credited = state.click_power
        return verdict

    def _warn(self, state: PlayerState, delta: int, verdict: ClickVerdict):
        logger.warning(
            "Player %s: click interval %dms below %dms (warning %d)",
            state.player_name, delta, self.min_interval_ms, state.warning_count,
        )
        if state.warning_count == self.penalty_warning_count:
            verdict.penalty = self.ledger.halve_balance(state)
            verdict.notifications.append(
                Notification(
                    kind=NotificationKind.CLICK_PENALTY,
                    title=f"Warning {state.warning_count}",
                    message="Half of your clicks were removed for auto-clicking.",
                    data={
                        "warning_count": state.warning_count,
                        "removed": verdict.penalty,
                        "balance": state.balance,
                    },
                )
            )
            return

        verdict.notifications.append(
            Notification(
                kind=NotificationKind.CLICK_WARNING,
                title=f"Warning {state.warning_count}",
                message="Clicking too fast detected!",
                data={"warning_count": state.warning_count},
            )
        )
