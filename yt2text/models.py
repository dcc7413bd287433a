from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path
from typing import Any, List, Optional


@dataclass
class DownloadResult:
    """
    Outcome of one audio download. A failed download is reported here
    instead of being raised.
    """

    url: str
    output_path: Path
    ok: bool
    error: Optional[str] = None


@dataclass
class VTTCue:
    number: int         # 1-based block position in the VTT body
    start: timedelta
    end: timedelta
    text: str


@dataclass
class Transcript:
    """
    Transcript returned by Lemonfox for one uploaded file
    """

    text: str
    response_format: str
    raw: Any                    # parsed JSON dict, or the raw body for text formats
    cues: List[VTTCue] = field(default_factory=list)   # only filled for 'vtt'


@dataclass
class PipelineResult:
    download: DownloadResult
    transcript: Transcript
