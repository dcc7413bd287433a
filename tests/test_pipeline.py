"""
Tests for the download -> transcribe pipeline.
"""

from unittest.mock import patch

import pytest
import requests
import yt_dlp

from yt2text.config import PipelineConfig
from yt2text.models import DownloadResult, Transcript
from yt2text.pipeline import DownloadFailedError, run_pipeline



@pytest.fixture
def config(tmp_path, test_video_url):
    return PipelineConfig(
        source_url=test_video_url,
        output_path=tmp_path / "downloaded_audio.mp3",
        api_key="test_api_key",
    )


@patch("yt2text.pipeline.transcribe_file")
@patch("yt2text.pipeline.download_audio")
def test_pipeline_calls_steps_in_order(mock_download, mock_transcribe, config):
    mock_download.return_value = DownloadResult(
        url=config.source_url, output_path=config.output_path, ok=True
    )
    mock_transcribe.return_value = Transcript(text="hi", response_format="json", raw={})

    result = run_pipeline(config)

    mock_download.assert_called_once_with(
        config.source_url, config.output_path, socket_timeout=config.download_timeout
    )
    mock_transcribe.assert_called_once_with(
        config.output_path,
        "test_api_key",
        language="english",
        response_format="json",
        timeout=config.request_timeout,
    )
    assert result.transcript.text == "hi"


@patch("yt2text.pipeline.transcribe_file")
@patch("yt2text.youtube_downloader.yt_dlp.YoutubeDL")
def test_pipeline_continues_after_download_failure(mock_ydl, mock_transcribe, config):
    mock_ydl.return_value.__enter__.return_value.extract_info.side_effect = (
        yt_dlp.utils.DownloadError("boom")
    )
    mock_transcribe.return_value = Transcript(text="stale", response_format="json", raw={})

    result = run_pipeline(config)

    assert result.download.ok is False
    mock_transcribe.assert_called_once()


@patch("yt2text.pipeline.transcribe_file")
@patch("yt2text.pipeline.download_audio")
def test_pipeline_halts_on_download_failure_when_configured(
    mock_download, mock_transcribe, config
):
    config.continue_on_download_failure = False
    mock_download.return_value = DownloadResult(
        url=config.source_url, output_path=config.output_path, ok=False, error="boom"
    )

    with pytest.raises(DownloadFailedError, match="boom"):
        run_pipeline(config)

    mock_transcribe.assert_not_called()


@patch("yt2text.transcriber.requests.post")
@patch("yt2text.pipeline.download_audio")
def test_pipeline_propagates_transcription_failure(
    mock_download, mock_post, config, audio_file, lemonfox_response
):
    mock_download.return_value = DownloadResult(
        url=config.source_url, output_path=audio_file, ok=True
    )
    mock_post.return_value = lemonfox_response(status_code=401, text="Unauthorized")

    with pytest.raises(requests.HTTPError):
        run_pipeline(config)


@patch("yt2text.transcriber.requests.post")
@patch("yt2text.youtube_downloader.yt_dlp.YoutubeDL")
def test_pipeline_end_to_end(mock_ydl, mock_post, config, capsys, lemonfox_response):
    ydl = mock_ydl.return_value.__enter__.return_value
    ydl.extract_info.side_effect = (
        lambda url, download: config.output_path.write_bytes(b"0123456789")
    )
    mock_post.return_value = lemonfox_response(payload={"text": "test transcript"})

    result = run_pipeline(config)

    out_lines = capsys.readouterr().out.strip().splitlines()
    assert out_lines[-1] == "Transcription result: test transcript"
    assert result.download.ok is True
    ydl.extract_info.assert_called_once_with(
        "https://www.youtube.com/watch?v=Y9QfOPxmxVI", download=True
    )
    assert mock_post.call_args.kwargs["files"]["file"][1] == b"0123456789"
