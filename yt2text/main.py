from __future__ import annotations
import sys
import argparse
from typing import List, Optional

from loguru import logger

from .config import LOGS_DIR, RESPONSE_FORMATS, load_config
from .pipeline import run_pipeline


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Download a YouTube video's audio and transcribe it with Lemonfox."
    )

    p.add_argument("url", nargs="?", default=None,
                   help="YouTube URL (defaults to YOUTUBE_URL or the built-in example).")
    p.add_argument("--output", dest="output_path", default=None,
                   help="Where to write the mp3 (defaults to data/downloads/downloaded_audio.mp3).")
    p.add_argument("--api-key", default=None,
                   help="Lemonfox API key (defaults to LEMONFOX_API_KEY).")
    p.add_argument("--language", default=None,
                   help="Spoken language sent to Lemonfox (default: english).")
    p.add_argument("--response-format", choices=RESPONSE_FORMATS, default=None,
                   help="Lemonfox response format (default: json).")
    p.add_argument("--download-timeout", type=float, default=None,
                   help="yt-dlp socket timeout in seconds.")
    p.add_argument("--request-timeout", type=float, default=None,
                   help="Lemonfox HTTP timeout in seconds.")
    p.add_argument("--halt-on-download-failure", action="store_true",
                   help="Stop instead of uploading when the download fails.")
    p.add_argument("--quiet", action="store_true",
                   help="Less verbose logging")
    p.add_argument("--log-file", action="store_true",
                   help=f"Also log to a rotating file under {LOGS_DIR}")
    return p.parse_args(argv)


def configure_logging(quiet: bool = False, log_file: bool = False) -> None:
    if quiet:
        logger.remove()
        logger.add(sys.stderr, level="WARNING")

    if log_file:
        LOGS_DIR.mkdir(parents=True, exist_ok=True)
        path = LOGS_DIR / "yt2text_{time}.log"
        logger.add(
            path,
            rotation="10 MB",
            retention="14 days",
            compression="zip",
            backtrace=True,
            diagnose=True,
        )
        logger.info(f"Logging to file: {path}")


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    configure_logging(quiet=args.quiet, log_file=args.log_file)

    config = load_config(
        source_url=args.url,
        output_path=args.output_path,
        api_key=args.api_key,
        language=args.language,
        response_format=args.response_format,
        download_timeout=args.download_timeout,
        request_timeout=args.request_timeout,
        # only an explicit flag overrides the environment
        continue_on_download_failure=False if args.halt_on_download_failure else None,
    )

    try:
        run_pipeline(config)
    except Exception as exc:
        logger.error(f"Pipeline failed: {exc}")
        raise


if __name__ == "__main__":
    main()
