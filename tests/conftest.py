"""
Configuration for pytest tests.
"""

import json
from unittest.mock import MagicMock

import pytest
import requests
from loguru import logger


@pytest.fixture(autouse=True)
def lemonfox_env(monkeypatch):
    """Keep tests independent of a developer's .env / shell."""
    monkeypatch.setenv("LEMONFOX_API_KEY", "test_api_key")
    for name in (
        "YOUTUBE_URL",
        "OUTPUT_PATH",
        "LEMONFOX_LANGUAGE",
        "LEMONFOX_RESPONSE_FORMAT",
        "DOWNLOAD_SOCKET_TIMEOUT",
        "REQUEST_TIMEOUT",
        "CONTINUE_ON_DOWNLOAD_FAILURE",
        "YT2TEXT_HOME",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def test_video_url():
    """Return a test YouTube video URL."""
    return "https://www.youtube.com/watch?v=Y9QfOPxmxVI"


@pytest.fixture
def audio_file(tmp_path):
    """A small dummy mp3 on disk."""
    path = tmp_path / "downloaded_audio.mp3"
    path.write_bytes(b"0123456789")
    return path


def make_response(status_code=200, payload=None, text=None):
    """Build a stand-in for requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    if payload is not None:
        response.json.return_value = payload
        response.text = json.dumps(payload)
    else:
        response.json.side_effect = ValueError("No JSON object could be decoded")
        response.text = text or ""
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Client Error", response=response
        )
    return response


@pytest.fixture
def lemonfox_response():
    return make_response


@pytest.fixture
def error_logs():
    """Collect ERROR-level loguru messages emitted during a test."""
    messages = []
    handler_id = logger.add(messages.append, level="ERROR", format="{message}")
    yield messages
    logger.remove(handler_id)
