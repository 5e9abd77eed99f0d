"""
Test the capped history log and its manager
"""
from datetime import datetime, timedelta

from database import Database


def test_history_is_newest_first(history_manager):
    history_manager.add_calculation("1 + 1", "2")
    history_manager.add_calculation("2 + 2", "4")
    assert history_manager.get_history() == [("2 + 2", "4"), ("1 + 1", "2")]


def test_history_keeps_only_newest_ten(db, history_manager):
    for i in range(12):
        history_manager.add_calculation(f"{i} + 0", str(i))
    history = history_manager.get_history()
    assert len(history) == 10
    assert len(db.get_calculations(limit=100)) == 10
    assert history[0] == ("11 + 0", "11")
    assert history[-1] == ("2 + 0", "2")


def test_custom_capacity(tmp_path):
    db = Database(str(tmp_path / "small.db"), max_items=3)
    for i in range(5):
        db.add_calculation(str(i), str(i))
    assert [row[0] for row in db.get_calculations()] == ["4", "3", "2"]


def test_retention_window(history_manager):
    now = datetime(2024, 3, 10, 12, 0, 0)
    history_manager.add_calculation("old", "1", now - timedelta(days=8))
    history_manager.add_calculation("recent", "2", now - timedelta(days=6))
    assert history_manager.get_history(days=7, now=now) == [("recent", "2")]
    assert len(history_manager.get_history()) == 2


def test_clear_history(db, history_manager):
    history_manager.add_calculation("1 + 1", "2")
    history_manager.clear_calculation_history()
    assert history_manager.get_history() == []
    assert db.get_calculations() == []


def test_format_calculation_history(history_manager):
    history_manager.add_calculation("6 × 7", "42", datetime(2024, 1, 2, 3, 4, 5))
    assert history_manager.format_calculation_history() == ["2024-01-02 03:04:05: 6 × 7 = 42"]


def test_database_survives_reopen(tmp_path):
    path = str(tmp_path / "persist.db")
    Database(path).add_calculation("1 + 2", "3")
    assert Database(path).get_calculations()[0][:2] == ("1 + 2", "3")
