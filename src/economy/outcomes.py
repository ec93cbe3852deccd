"""Operation outcomes, notifications and the errors that map onto them."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class Outcome(str, Enum):
    OK = "ok"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INVALID_CODE = "invalid_code"
    ALREADY_MUTATED = "already_mutated"
    NOT_FOUND = "not_found"
    BANNED = "banned"
    OPERATION_IN_FLIGHT = "operation_in_flight"
    FORBIDDEN = "forbidden"


class NotificationKind(str, Enum):
    CLICK_WARNING = "click_warning"
    CLICK_PENALTY = "click_penalty"
    BANNED = "banned"
    LOOT_ACQUIRED = "loot_acquired"
    UPGRADE_PURCHASED = "upgrade_purchased"
    MUTATION_SUCCEEDED = "mutation_succeeded"
    MUTATION_FAILED = "mutation_failed"
    ADMIN_UNLOCKED = "admin_unlocked"
    CURRENCY_GRANTED = "currency_granted"
    CLICK_POWER_GRANTED = "click_power_granted"
    ITEM_GRANTED = "item_granted"
    PROGRESS_RESET = "progress_reset"


@dataclass
class Notification:
    """Something the presentation layer should show the player."""

    kind: NotificationKind
    title: str
    message: str
    data: Dict = field(default_factory=dict)


@dataclass
class OperationResult:
    """Tagged result returned by every session operation."""

    outcome: Outcome
    message: str = ""
    data: Dict = field(default_factory=dict)
    notifications: List[Notification] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    @classmethod
    def success(
        cls,
        data: Optional[Dict] = None,
        notifications: Optional[List[Notification]] = None,
        message: str = "",
    ) -> "OperationResult":
        return cls(
            outcome=Outcome.OK,
            message=message,
            data=data or {},
            notifications=notifications or [],
        )

    @classmethod
    def failure(cls, error: "EconomyError") -> "OperationResult":
        return cls(outcome=error.outcome, message=str(error), data=error.details())


# ── Errors ───────────────────────────────────────────────────────────


class EconomyError(Exception):
    """Base for expected, recoverable operation failures.

    Raised before any state mutation, so catching one means the player
    state is exactly as it was before the call.
    """

    outcome: Outcome

    def details(self) -> Dict:
        return {}


class InsufficientFunds(EconomyError):
    outcome = Outcome.INSUFFICIENT_FUNDS

    def __init__(self, price, balance):
        super().__init__(f"Need {price} clicks (balance: {balance})")
        self.price = price
        self.balance = balance

    def details(self) -> Dict:
        return {"price": self.price, "balance": self.balance}


class InvalidCode(EconomyError):
    outcome = Outcome.INVALID_CODE

    def __init__(self, code: str):
        super().__init__("Invalid promo code")
        self.code = code


class AlreadyMutated(EconomyError):
    outcome = Outcome.ALREADY_MUTATED

    def __init__(self, item_id: str):
        super().__init__(f"Item {item_id} has already been mutated")
        self.item_id = item_id

    def details(self) -> Dict:
        return {"item_id": self.item_id}


class ItemNotFound(EconomyError):
    outcome = Outcome.NOT_FOUND

    def __init__(self, item_id: str):
        super().__init__(f"Item {item_id} not found in inventory")
        self.item_id = item_id

    def details(self) -> Dict:
        return {"item_id": self.item_id}


class OperationInFlight(EconomyError):
    outcome = Outcome.OPERATION_IN_FLIGHT

    def __init__(self, operation: str, item_id: Optional[str] = None):
        target = f" for item {item_id}" if item_id else ""
        super().__init__(f"{operation} already in progress{target}")
        self.operation = operation
        self.item_id = item_id

    def details(self) -> Dict:
        return {"operation": self.operation, "item_id": self.item_id}


class NotAuthorized(EconomyError):
    outcome = Outcome.FORBIDDEN

    def __init__(self, operation: str):
        super().__init__(f"{operation} requires admin access")
        self.operation = operation

    def details(self) -> Dict:
        return {"operation": self.operation}
