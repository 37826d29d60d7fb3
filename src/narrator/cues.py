"""
Word-level transcription timing -> grouped subtitle cues.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from .models import RecognitionEvent, SubtitleCue

logger = logging.getLogger("narrator")

DEFAULT_DURATION_SECS = 30.0


def _to_seconds(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        secs = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(secs) or math.isinf(secs):
        return None
    return secs


def events_from_transcript(payload: Mapping[str, Any]) -> list[RecognitionEvent]:
    """Read recognition events from a transcription result document.

    Items are expected under ``results.items``; each carries string
    ``start_time``/``end_time`` and ``alternatives[0].content``. Punctuation
    items have no timing and come back with ``None`` fields.
    """
    results = payload.get("results") if isinstance(payload, Mapping) else None
    items = results.get("items") if isinstance(results, Mapping) else None
    if not items:
        return []

    events: list[RecognitionEvent] = []
    for item in items:
        if not isinstance(item, Mapping):
            continue
        alternatives = item.get("alternatives")
        first = {}
        if isinstance(alternatives, list) and alternatives and isinstance(alternatives[0], Mapping):
            first = alternatives[0]
        content = first.get("content")
        events.append(
            RecognitionEvent(
                start_time=_to_seconds(item.get("start_time")),
                end_time=_to_seconds(item.get("end_time")),
                text=content if isinstance(content, str) else None,
            )
        )
    return events


def transcript_duration(
    payload: Mapping[str, Any], default: float = DEFAULT_DURATION_SECS
) -> float:
    """Duration hint of a transcription result (end of the first audio segment)."""
    try:
        segments = payload["results"]["audio_segments"]
        hint = _to_seconds(segments[0].get("end_time"))
    except (KeyError, IndexError, TypeError, AttributeError):
        hint = None
    return hint if hint is not None and hint > 0 else default


def normalize(events: Iterable[RecognitionEvent]) -> list[SubtitleCue]:
    """Group recognition events into cues keyed on the floored start second.

    Events without finite timing or without text are skipped. Input order is kept as is,
    so the result is only sorted when the recognizer's output is.
    """
    cues: list[SubtitleCue] = []
    current: SubtitleCue | None = None
    dropped = 0

    for ev in events:
        if (
            ev.start_time is None
            or ev.end_time is None
            or not math.isfinite(ev.start_time)
            or not math.isfinite(ev.end_time)
            or not ev.text
        ):
            dropped += 1
            continue

        floored_start = math.floor(ev.start_time)
        floored_end = math.floor(ev.end_time)

        if current is not None and floored_start == current.start_second:
            current.words.append(ev.text)
            current.end_second = max(current.end_second, floored_end)
            continue

        if current is not None:
            if floored_start < current.start_second:
                logger.warning(
                    "Out-of-order recognition event at %.3fs (open cue starts at %ds)",
                    ev.start_time,
                    current.start_second,
                )
            cues.append(current)
        current = SubtitleCue(start_second=floored_start, end_second=floored_end, words=[ev.text])

    if current is not None and current.words:
        cues.append(current)

    if dropped:
        logger.debug("Skipped %d recognition event(s) without timing or text", dropped)
    return cues
