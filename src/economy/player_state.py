"""Player state data models - single source of truth for one player's progress."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional
import uuid


@dataclass
class InventoryItem:
    """A collectible that generates passive income."""

    item_id: str
    tier_id: str
    cps: int
    display_name: str
    mutated: bool = False

    @classmethod
    def create(
        cls,
        tier_id: str,
        cps: int,
        display_name: str,
        mutated: bool = False,
    ) -> "InventoryItem":
        return cls(
            item_id=uuid.uuid4().hex,
            tier_id=tier_id,
            cps=cps,
            display_name=display_name,
            mutated=mutated,
        )

    def to_dict(self) -> Dict:
        return {
            "item_id": self.item_id,
            "tier_id": self.tier_id,
            "cps": self.cps,
            "display_name": self.display_name,
            "mutated": self.mutated,
        }


@dataclass
class PlayerState:
    """Complete player state for one session."""

    player_id: str
    player_name: str
    session_start_time: str
    balance: float = 0
    click_power: int = 1
    inventory: List[InventoryItem] = field(default_factory=list)
    is_admin: bool = False
    banned: bool = False
    warning_count: int = 0
    last_click_timestamp_ms: int = 0

    @classmethod
    def create_new(cls, player_name: str = "player") -> "PlayerState":
        """Factory method for a fresh session."""
        if not player_name or not player_name.strip():
            raise ValueError("player_name cannot be empty")
        return cls(
            player_id=str(uuid.uuid4()),
            player_name=player_name.strip(),
            session_start_time=datetime.now().isoformat(),
        )

    @property
    def total_cps(self) -> int:
        """Passive income per second, derived from the inventory."""
        return sum(item.cps for item in self.inventory)

    def find_item(self, item_id: str) -> Optional[InventoryItem]:
        for item in self.inventory:
            if item.item_id == item_id:
                return item
        return None

    def to_dict(self) -> Dict:
        """JSON-serializable snapshot for rendering or transport."""
        return {
            "player_id": self.player_id,
            "player_name": self.player_name,
            "session_start_time": self.session_start_time,
            "balance": self.balance,
            "click_power": self.click_power,
            "total_cps": self.total_cps,
            "inventory": [item.to_dict() for item in self.inventory],
            "is_admin": self.is_admin,
            "banned": self.banned,
            "warning_count": self.warning_count,
            "last_click_timestamp_ms": self.last_click_timestamp_ms,
        }
