# tests/conftest.py
import json
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from scriptgen.core.config import Settings
from scriptgen.main import create_app
from scriptgen.services.gemini_client import GeminiClient

_SAMPLE_FILES = [
    {"name": "package.json", "content": '{"name": "bot", "type": "module"}'},
    {"name": "src/index.js", "content": "import './commands/ping.js';\n"},
    {"name": "src/commands/ping.js", "content": "export const ping = () => 'pong';\n"},
    {"name": "README.md", "content": "# Bot\n"},
    {"name": ".gitignore", "content": "node_modules\n.env\n"},
]


@pytest.fixture
def sample_files():
    return [dict(f) for f in _SAMPLE_FILES]


@pytest.fixture
def settings():
    return Settings(
        gemini_api_key="test-key",
        gemini_base_url="https://gemini.test",
        gemini_model="gemini-2.5-flash",
        gemini_timeout=5.0,
        gemini_temperature=0.3,
        log_level="DEBUG",
        host="127.0.0.1",
        port=8000,
    )


@pytest.fixture
def gemini_reply():
    """
    Builds a fake requests.Response carrying a generateContent body whose
    text part is `text`, or the JSON dump of `obj`.
    """
    def _make(obj=None, text=None):
        if text is None:
            text = json.dumps(obj)
        resp = MagicMock()
        resp.raise_for_status.return_value = None
        resp.json.return_value = {
            "candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]
        }
        return resp
    return _make


@pytest.fixture
def mock_post():
    with patch("scriptgen.services.gemini_client.http_requests.post") as post:
        yield post


@pytest.fixture
def gemini_client(settings):
    return GeminiClient(settings)


@pytest.fixture
def client(settings, gemini_client):
    return TestClient(create_app(settings, gemini_client))
