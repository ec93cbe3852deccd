from src.economy.click_guard import ClickGuard, ClickVerdict
from src.economy.config import EconomyConfig
from src.economy.game_session import GameSession
from src.economy.income_ticker import PassiveIncomeTicker
from src.economy.ledger import EconomyLedger
from src.economy.loot_resolver import LootResolver
from src.economy.mutation_resolver import MutationResolver, MutationResult
from src.economy.outcomes import (
    AlreadyMutated,
    EconomyError,
    InsufficientFunds,
    InvalidCode,
    ItemNotFound,
    NotAuthorized,
    Notification,
    NotificationKind,
    OperationInFlight,
    OperationResult,
    Outcome,
)
from src.economy.player_state import InventoryItem, PlayerState
from src.economy.privilege_gate import PrivilegeGate
from src.economy.rarity_table import RarityTable, RarityTier, default_rarity_table

__all__ = [
    "AlreadyMutated",
    "ClickGuard",
    "ClickVerdict",
    "EconomyConfig",
    "EconomyError",
    "EconomyLedger",
    "GameSession",
    "InsufficientFunds",
    "InvalidCode",
    "InventoryItem",
    "ItemNotFound",
    "LootResolver",
    "MutationResolver",
    "MutationResult",
    "NotAuthorized",
    "Notification",
    "NotificationKind",
    "OperationInFlight",
    "OperationResult",
    "Outcome",
    "PassiveIncomeTicker",
    "PlayerState",
    "PrivilegeGate",
    "RarityTable",
    "RarityTier",
    "default_rarity_table",
]
