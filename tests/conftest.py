# tests/conftest.py

import pytest
from fastapi.testclient import TestClient
from unittest.mock import MagicMock, patch

import main


@pytest.fixture(scope="session")
def client():
    return TestClient(main.app)


# ----------------------------------------------------------
# Disable Supabase edge-function calls for ALL tests
# ----------------------------------------------------------
def _response(status_code=200, payload=None, text=None):
    resp = MagicMock()
    resp.status_code = status_code
    if isinstance(payload, Exception):
        resp.json.side_effect = payload
    else:
        resp.json.return_value = payload
    resp.text = text if text is not None else str(payload)
    return resp


@pytest.fixture(autouse=True)
def mock_supabase():
    with patch("utils.supabase_client._session.post") as mock:
        mock.return_value = _response(
            payload={"zones": [], "total_zones_found": 0, "top_zones_returned": 0}
        )
        yield mock


@pytest.fixture
def supabase_env(monkeypatch):
    monkeypatch.setenv("SUPABASE_URL", "https://example.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-test-key")
    monkeypatch.delenv("RESILIENCE_FUNCTION_NAME", raising=False)


# ----------------------------------------------------------
# Disable Gemini
# ----------------------------------------------------------
@pytest.fixture(autouse=True)
def mock_gemini():
    with patch("google.generativeai.GenerativeModel") as mock_model:
        instance = mock_model.return_value
        instance.generate_content.return_value = type("Obj", (), {"text": '{"message": "ok"}'})
        yield instance


@pytest.fixture
def gemini_key(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "test-google-key")


@pytest.fixture
def make_response():
    return _response
