from __future__ import annotations

from pathlib import Path
from typing import Optional, Dict, Any

import yt_dlp
from loguru import logger

from .config import DEFAULT_AUDIO_FORMAT, DEFAULT_AUDIO_QUALITY
from .models import DownloadResult


def _output_template(output_path: Path) -> str:
    """
    yt-dlp writes the raw stream first and the postprocessor swaps the
    extension, so the template must end in %(ext)s.
    """
    stem = str(output_path.with_suffix(""))
    # '%' is the template escape character
    return stem.replace("%", "%%") + ".%(ext)s"


def _build_yt_dlp_opts(
    output_path: Path,
    audio_format: str = DEFAULT_AUDIO_FORMAT,
    audio_quality: int = DEFAULT_AUDIO_QUALITY,
    socket_timeout: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Building the options dictionary for yt-dlp
    """
    opts: Dict[str, Any] = {
        "format": "bestaudio/best",
        "outtmpl": _output_template(output_path),
        "postprocessors": [
            {
                "key": "FFmpegExtractAudio",
                "preferredcodec": audio_format,
                "preferredquality": str(audio_quality),
            }
        ],
        "noplaylist": True,
        "quiet": True,
        "no_warnings": True,
    }
    if socket_timeout:
        opts["socket_timeout"] = socket_timeout
    return opts


def download_audio(
    youtube_url: str,
    output_path: Path,
    audio_format: str = DEFAULT_AUDIO_FORMAT,
    audio_quality: int = DEFAULT_AUDIO_QUALITY,
    socket_timeout: Optional[float] = None,
) -> DownloadResult:
    """
    Download the audio track of a YouTube video and transcode it.

    Never raises: any yt-dlp failure is logged and reported through the
    returned DownloadResult so the caller decides whether to go on.
    """
    output_path = Path(output_path)
    final_path = output_path.with_suffix(f".{audio_format}")
    if final_path != output_path:
        logger.warning(
            f"Output path {output_path} does not end in .{audio_format}; "
            f"audio will be written to {final_path}"
        )

    logger.info(f"Starting download for URL: {youtube_url}")
    ydl_opts = _build_yt_dlp_opts(
        final_path,
        audio_format=audio_format,
        audio_quality=audio_quality,
        socket_timeout=socket_timeout,
    )
    logger.debug(f"yt-dlp options: {ydl_opts}")

    try:
        final_path.parent.mkdir(parents=True, exist_ok=True)
        with yt_dlp.YoutubeDL(ydl_opts) as ydl:
            ydl.extract_info(youtube_url, download=True)
    except Exception as exc:
        logger.error(f"Error downloading audio from {youtube_url}: {exc}")
        return DownloadResult(
            url=youtube_url, output_path=final_path, ok=False, error=str(exc)
        )

    if not final_path.exists():
        message = f"Download was reported as success, but no file found at {final_path}"
        logger.error(message)
        return DownloadResult(
            url=youtube_url, output_path=final_path, ok=False, error=message
        )

    logger.info(f"Audio downloaded successfully: {final_path}")
    return DownloadResult(url=youtube_url, output_path=final_path, ok=True)
