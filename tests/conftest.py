"""Shared fixtures for the economy engine test suite."""

import random

import pytest

from src.economy.config import EconomyConfig
from src.economy.game_session import GameSession
from src.economy.player_state import PlayerState
from src.economy.rarity_table import RarityTable, RarityTier, default_rarity_table


class ScriptedRandom(random.Random):
    """Random whose ``random()`` replays a fixed script of values.

    Only ``random()`` is scripted. Defining ``getrandbits`` keeps
    ``randrange`` (display serials) on the seeded base generator instead
    of routing it through ``random()``. Once the script runs out,
    ``random()`` falls back to the seeded stream too.
    """

    def __init__(self, values=(), seed=0):
        super().__init__(seed)
        self.script = list(values)

    def push(self, *values):
        self.script.extend(values)

    def random(self):
        if self.script:
            return self.script.pop(0)
        return super().random()

    def getrandbits(self, k):
        return super().getrandbits(k)


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture
def table():
    return default_rarity_table()


@pytest.fixture
def small_table():
    """Three tiers summing to 100, easy to reason about."""
    return RarityTable([
        RarityTier("low", "Low", 50, 1, 10),
        RarityTier("mid", "Mid", 30, 20, 30),
        RarityTier("high", "High", 20, 100, 100),
    ])


@pytest.fixture
def rng():
    return ScriptedRandom()


@pytest.fixture
def state():
    return PlayerState.create_new("tester")


@pytest.fixture
def session(rng, table):
    """Session with no pending delays and a scripted RNG."""
    return GameSession(
        state=PlayerState.create_new("tester"),
        config=EconomyConfig.instant(),
        table=table,
        rng=rng,
    )

