from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional
import os

from dotenv import find_dotenv, load_dotenv
from loguru import logger


# ---- Environment Variables ----

# Search for .env from the working directory upwards, not from the install location
ENV_PATH = find_dotenv(usecwd=True)

if ENV_PATH:
    load_dotenv(ENV_PATH)
else:
    # Not fatal, variables may come from the real environment
    logger.warning(f"[config] .env file not found from {Path.cwd()}")


# --- Paths & Base Directories ----

def _resolve_base_dir() -> Path:
    """
    Folder that holds 'data/' and 'logs/': YT2TEXT_HOME if set, else the
    current working directory.
    """
    return Path(os.getenv("YT2TEXT_HOME") or Path.cwd()).resolve()


BASE_DIR = _resolve_base_dir()

# --- Data Directories ----
# Created on first use (download_audio / configure_logging)
DATA_DIR = BASE_DIR / "data"
DOWNLOADS_DIR = DATA_DIR / "downloads"
LOGS_DIR = BASE_DIR / "logs"

# --- YouTube / yt-dlp Defaults ---
DEFAULT_SOURCE_URL = "https://www.youtube.com/watch?v=Y9QfOPxmxVI"
DEFAULT_OUTPUT_PATH = DOWNLOADS_DIR / "downloaded_audio.mp3"
DEFAULT_AUDIO_FORMAT = "mp3"
DEFAULT_AUDIO_QUALITY = 0  # 0 = best
DEFAULT_DOWNLOAD_SOCKET_TIMEOUT = 30.0

# --- Lemonfox Defaults ---
LEMONFOX_TRANSCRIPTION_URL = "https://api.lemonfox.ai/v1/audio/transcriptions"
DEFAULT_LANGUAGE = "english"
DEFAULT_RESPONSE_FORMAT = "json"
DEFAULT_REQUEST_TIMEOUT = 600.0

RESPONSE_FORMATS = ("json", "verbose_json", "text", "srt", "vtt")


def get_lemonfox_api_key() -> str:
    api_key = os.getenv("LEMONFOX_API_KEY")
    if not api_key:
        # Fail fast, don't run without a valid api key
        raise RuntimeError(
            "LEMONFOX_API_KEY is not set. "
            "Create a .env file in the project root with LEMONFOX_API_KEY=your_api_key"
        )
    return api_key


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class PipelineConfig:
    """
    Everything one pipeline run needs: where to fetch from, where to write,
    and how to talk to Lemonfox.
    """

    source_url: str
    output_path: Path
    api_key: str
    language: str = DEFAULT_LANGUAGE
    response_format: str = DEFAULT_RESPONSE_FORMAT
    download_timeout: float = DEFAULT_DOWNLOAD_SOCKET_TIMEOUT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    continue_on_download_failure: bool = True


def load_config(**overrides: Any) -> PipelineConfig:
    """
    Build a PipelineConfig from the environment.

    Keyword overrides (e.g. parsed CLI flags) win over environment variables;
    overrides that are None are ignored.
    """
    given = {key: value for key, value in overrides.items() if value is not None}

    api_key: Optional[str] = given.get("api_key")
    if not api_key:
        api_key = get_lemonfox_api_key()

    response_format = given.get(
        "response_format",
        os.getenv("LEMONFOX_RESPONSE_FORMAT", DEFAULT_RESPONSE_FORMAT),
    )
    if response_format not in RESPONSE_FORMATS:
        raise ValueError(
            f"Unsupported response_format {response_format!r}; "
            f"expected one of {', '.join(RESPONSE_FORMATS)}"
        )

    return PipelineConfig(
        source_url=given.get("source_url", os.getenv("YOUTUBE_URL", DEFAULT_SOURCE_URL)),
        output_path=Path(
            given.get("output_path", os.getenv("OUTPUT_PATH", str(DEFAULT_OUTPUT_PATH)))
        ).resolve(),
        api_key=api_key,
        language=given.get("language", os.getenv("LEMONFOX_LANGUAGE", DEFAULT_LANGUAGE)),
        response_format=response_format,
        download_timeout=float(
            given.get(
                "download_timeout",
                os.getenv("DOWNLOAD_SOCKET_TIMEOUT", DEFAULT_DOWNLOAD_SOCKET_TIMEOUT),
            )
        ),
        request_timeout=float(
            given.get("request_timeout", os.getenv("REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT))
        ),
        continue_on_download_failure=given.get(
            "continue_on_download_failure",
            _env_bool("CONTINUE_ON_DOWNLOAD_FAILURE", True),
        ),
    )
