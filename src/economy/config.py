from dataclasses import dataclass

# Prices (in clicks)
CASE_PRICE = 100
UPGRADE_PRICE = 50
MUTATION_PRICE = 500

# Click guard
MIN_CLICK_INTERVAL_MS = 10  # Faster than this is treated as automated clicking
PENALTY_WARNING_COUNT = 2  # Strike that halves the balance
BAN_WARNING_COUNT = 3

# Mutation
MUTATION_SUCCESS_CHANCE = 0.5

# Privileges
ADMIN_PROMO_CODE = "setup"  # Compared case-insensitively
ADMIN_CURRENCY_GRANT = 10_000
ADMIN_CLICK_POWER_GRANT = 10

# Timing
TICK_INTERVAL_SECONDS = 1.0
CASE_OPEN_DELAY_SECONDS = 2.0
MUTATION_DELAY_SECONDS = 2.0

# Item display serials are drawn from [0, ITEM_SERIAL_LIMIT)
ITEM_SERIAL_LIMIT = 9999


@dataclass(frozen=True)
class EconomyConfig:
    """Tunable economy settings for one game session."""

    case_price: int = CASE_PRICE
    upgrade_price: int = UPGRADE_PRICE
    mutation_price: int = MUTATION_PRICE
    min_click_interval_ms: int = MIN_CLICK_INTERVAL_MS
    penalty_warning_count: int = PENALTY_WARNING_COUNT
    ban_warning_count: int = BAN_WARNING_COUNT
    mutation_success_chance: float = MUTATION_SUCCESS_CHANCE
    admin_promo_code: str = ADMIN_PROMO_CODE
    admin_currency_grant: int = ADMIN_CURRENCY_GRANT
    admin_click_power_grant: int = ADMIN_CLICK_POWER_GRANT
    tick_interval_seconds: float = TICK_INTERVAL_SECONDS
    case_open_delay_seconds: float = CASE_OPEN_DELAY_SECONDS
    mutation_delay_seconds: float = MUTATION_DELAY_SECONDS

    def __post_init__(self):
        for name in ("case_price", "upgrade_price", "mutation_price"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative")
        if not 0.0 <= self.mutation_success_chance <= 1.0:
            raise ValueError(
                f"mutation_success_chance ({self.mutation_success_chance}) "
                "must be in [0, 1]"
            )
        if self.ban_warning_count < 1:
            raise ValueError("ban_warning_count must be at least 1")

    @classmethod
    def instant(cls, **overrides) -> "EconomyConfig":
        """Config with no pending delays (for tests and headless simulation)."""
        overrides.setdefault("case_open_delay_seconds", 0.0)
        overrides.setdefault("mutation_delay_seconds", 0.0)
        return cls(**overrides)
