from __future__ import annotations

from datetime import timedelta
from typing import List

from loguru import logger

from .models import VTTCue

VTT_HEADER = "WEBVTT\n\n"


def parse_vtt_timestamp(value: str) -> timedelta:
    """
    Parse a strict HH:MM:SS.mmm timestamp.
    """
    if "." not in value:
        raise ValueError(f"Invalid timestamp {value!r}: missing milliseconds")

    parts = value.split(":")
    if len(parts) != 3 or len(parts[0]) != 2:
        raise ValueError(f"Invalid timestamp {value!r}: expected HH:MM:SS.mmm")

    second_parts = parts[2].split(".")
    if len(second_parts) != 2:
        raise ValueError(f"Invalid timestamp {value!r}: missing milliseconds")

    try:
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(second_parts[0])
        milliseconds = int(second_parts[1])
    except ValueError as exc:
        raise ValueError(f"Invalid timestamp {value!r}: {exc}") from exc

    return timedelta(
        hours=hours, minutes=minutes, seconds=seconds, milliseconds=milliseconds
    )


def parse_vtt(content: str) -> List[VTTCue]:
    """
    Parse a WebVTT body (as returned with response_format=vtt) into cues.

    Blocks that carry no 'start --> end' line are skipped; multi-line cue
    text is joined with single spaces.
    """
    content = content.strip('"')

    # Bodies that went through JSON encoding carry literal '\n' escapes
    if "\\n" in content:
        content = content.replace("\\n", "\n")

    if not content.startswith(VTT_HEADER):
        raise ValueError("Invalid VTT format: missing WEBVTT header")
    content = content[len(VTT_HEADER):]

    cues: List[VTTCue] = []
    for index, block in enumerate(content.split("\n\n")):
        lines = block.strip("\n").split("\n")
        # Optional cue identifier before the timing line
        if len(lines) > 2 and " --> " not in lines[0] and " --> " in lines[1]:
            lines = lines[1:]
        if len(lines) < 2:
            continue

        timestamps = lines[0].split(" --> ")
        if len(timestamps) != 2:
            continue

        cues.append(
            VTTCue(
                number=index + 1,
                start=parse_vtt_timestamp(timestamps[0]),
                end=parse_vtt_timestamp(timestamps[1]),
                text=" ".join(lines[1:]),
            )
        )

    logger.debug(f"Parsed {len(cues)} VTT cues")
    return cues
