import os
import sys

import pytest
from fastapi.testclient import TestClient

# Add the project root to the path so Python can find the app module
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.config import Settings
from app.main import create_app


def sqlite_url(directory) -> str:
    return f"sqlite+aiosqlite:///{os.path.join(str(directory), 'users.db')}"


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=sqlite_url(tmp_path), force_memory_cache=True)


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as test_client:
        yield test_client
