"""
Shared pytest fixtures for NeonCalc
"""
import pytest

from api import create_app
from compute_service import ComputeService
from database import Database
from history_manager import HistoryManager


@pytest.fixture
def db(tmp_path):
    return Database(str(tmp_path / "history.db"))


@pytest.fixture
def history_manager(db):
    return HistoryManager(db)


@pytest.fixture
def compute_service(history_manager):
    return ComputeService(history_manager)


@pytest.fixture
def app(history_manager):
    app = create_app(history_manager)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
