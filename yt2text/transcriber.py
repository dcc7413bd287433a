from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import requests
from loguru import logger

from .config import (
    DEFAULT_LANGUAGE,
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_RESPONSE_FORMAT,
    LEMONFOX_TRANSCRIPTION_URL,
)
from .models import Transcript
from .vtt import parse_vtt

JSON_FORMATS = ("json", "verbose_json")


class TranscriptionError(RuntimeError):
    """Lemonfox answered, but not with a usable transcript."""


def _build_headers(api_key: str) -> Dict[str, str]:
    if not api_key:
        logger.error("Cannot call Lemonfox: API key is empty")
        raise ValueError("A Lemonfox API key is required")
    return {"Authorization": f"Bearer {api_key}"}


def _extract_transcript(response: requests.Response, response_format: str) -> Transcript:
    if response_format in JSON_FORMATS:
        try:
            data: Any = response.json()
        except ValueError as exc:
            logger.error(f"Lemonfox returned a non-JSON body: {response.text[:500]}")
            raise TranscriptionError("Lemonfox response is not valid JSON") from exc

        text = data.get("text") if isinstance(data, dict) else None
        if not isinstance(text, str):
            logger.error(f"Unexpected transcription response format: {data}")
            raise TranscriptionError("Lemonfox transcription failed: missing 'text'")
        return Transcript(text=text, response_format=response_format, raw=data)

    # text / srt / vtt come back as plain bodies
    body = response.text
    cues = parse_vtt(body) if response_format == "vtt" else []
    return Transcript(text=body, response_format=response_format, raw=body, cues=cues)


def transcribe_file(
    file_path: Path,
    api_key: str,
    language: str = DEFAULT_LANGUAGE,
    response_format: str = DEFAULT_RESPONSE_FORMAT,
    timeout: float = DEFAULT_REQUEST_TIMEOUT,
) -> Transcript:
    """
    Upload a local audio file to Lemonfox and print the transcript.

    :param file_path: Path to the local audio file; read fully into memory.
    :param api_key: Lemonfox key, sent verbatim as a bearer token.
    :param language: Spoken language hint.
    :param response_format: One of json, verbose_json, text, srt, vtt.
    :param timeout: Seconds before the HTTP request gives up.
    :return: The parsed Transcript.
    Every failure is logged and re-raised.
    """
    file_path = Path(file_path)
    headers = _build_headers(api_key)

    try:
        audio_bytes = file_path.read_bytes()
    except OSError as exc:
        logger.error(f"Error reading audio file {file_path}: {exc}")
        raise

    logger.info(
        f"Uploading {file_path} ({len(audio_bytes)} bytes) to Lemonfox "
        f"(language={language}, response_format={response_format})"
    )

    try:
        response = requests.post(
            LEMONFOX_TRANSCRIPTION_URL,
            headers=headers,
            files={"file": (file_path.name, audio_bytes)},
            data={"language": language, "response_format": response_format},
            timeout=timeout,
        )
    except requests.RequestException as exc:
        logger.error(f"Error sending audio to Lemonfox: {exc}")
        raise

    try:
        response.raise_for_status()
    except requests.HTTPError as exc:
        logger.error(
            f"Transcription request failed with status {response.status_code}: "
            f"{response.text}"
        )
        raise exc

    try:
        transcript = _extract_transcript(response, response_format)
    except ValueError as exc:
        # Malformed VTT body
        logger.error(f"Error parsing Lemonfox response: {exc}")
        raise

    print(f"Transcription result: {transcript.text}")
    logger.info("Transcription completed successfully.")
    return transcript
