import json
import os

import httpx
import pytest
from fastapi.testclient import TestClient

from backend.app.core.clients import get_http_client
from backend.main import app

API_DIR = os.path.dirname(os.path.abspath(__file__))
SCHEMA_DIR = os.path.join(API_DIR, "schemas")
DATA_DIR = os.path.join(API_DIR, "data")


@pytest.fixture
def load_schema():
    def _load(schema_path):
        with open(os.path.join(SCHEMA_DIR, schema_path), encoding="utf-8") as f:
            return json.load(f)
    return _load


@pytest.fixture
def load_data():
    def _load(data_path):
        with open(os.path.join(DATA_DIR, data_path), encoding="utf-8") as f:
            return json.load(f)
    return _load


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def mock_upstream():
    """Route the gateway's outbound HTTP calls through an httpx.MockTransport handler."""
    def _install(handler):
        mock_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        app.dependency_overrides[get_http_client] = lambda: mock_client
        return mock_client
    return _install
