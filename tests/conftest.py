"""
Shared pytest fixtures for the HabitVault test suite.

Argon2id runs with minimal cost parameters so that every save and load
takes milliseconds instead of hundreds of milliseconds.
"""

import datetime

import pytest

from habitvault import habit as habit_mod
from habitvault.crypto import CryptoManager
from habitvault.habit import Habit, HabitLedger
from habitvault.storage import Vault

TODAY = datetime.date(2026, 3, 15)


@pytest.fixture
def fast_crypto():
    return CryptoManager(time_cost=1, memory_cost=1024, parallelism=1)


@pytest.fixture
def vault(tmp_path, fast_crypto):
    """Vault backed by a file in a temp directory."""
    return Vault(str(tmp_path / "data" / "habits.encrypted"), crypto=fast_crypto)


@pytest.fixture
def today(monkeypatch):
    """Pin the ledger's notion of "today" to a fixed date."""
    monkeypatch.setattr(habit_mod, "_local_today", lambda: TODAY)
    return TODAY


@pytest.fixture
def sample_ledger(today):
    ledger = HabitLedger()
    ledger.add_habit(Habit(id="habit_1", name="Read", description="20 pages"))
    ledger.add_habit(Habit(id="habit_2", name="Run", description="", target_days_per_week=3))
    for offset in range(3):
        ledger.mark_completed("habit_1", today - datetime.timedelta(days=offset))
    ledger.mark_completed("habit_2", today - datetime.timedelta(days=1), notes="5k")
    return ledger
