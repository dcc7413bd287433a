from __future__ import annotations

from loguru import logger

from .config import PipelineConfig
from .models import PipelineResult
from .transcriber import transcribe_file
from .youtube_downloader import download_audio


class DownloadFailedError(RuntimeError):
    """Raised when the download fails and the run is set to halt on it."""


def run_pipeline(config: PipelineConfig) -> PipelineResult:
    """
    Download -> transcribe, strictly in sequence.

    A failed download only stops the run when
    config.continue_on_download_failure is False; otherwise the upload is
    attempted against whatever sits at the output path. Transcription
    failures always propagate.
    """
    logger.info(f"Step 1: downloading audio for {config.source_url}")
    download = download_audio(
        config.source_url,
        config.output_path,
        socket_timeout=config.download_timeout,
    )

    if not download.ok:
        if not config.continue_on_download_failure:
            logger.error("Download failed, aborting.")
            raise DownloadFailedError(
                f"Could not download audio from {config.source_url}: {download.error}"
            )
        logger.warning(
            f"Download failed; continuing with {download.output_path} anyway."
        )

    logger.info("Step 2: sending audio to Lemonfox")
    transcript = transcribe_file(
        download.output_path,
        config.api_key,
        language=config.language,
        response_format=config.response_format,
        timeout=config.request_timeout,
    )

    return PipelineResult(download=download, transcript=transcript)
