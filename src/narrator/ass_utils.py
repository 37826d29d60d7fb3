"""
Cue-sheet (ASS subtitle script) rendering and writing.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from .cues import events_from_transcript, normalize
from .models import CueStyle, SubtitleCue

logger = logging.getLogger("narrator")

STYLE_FORMAT = (
    "Format: Name, Fontname, Fontsize, PrimaryColour, SecondaryColour, OutlineColour, "
    "BackColour, Bold, Italic, BorderStyle, Outline, Shadow, Alignment, MarginL, MarginR, "
    "MarginV, Encoding"
)
EVENTS_FORMAT = "Format: Layer, Start, End, Style, Name, MarginL, MarginR, MarginV, Effect, Text"


def format_timestamp(t: float) -> str:
    """Format seconds as HH:MM:SS,cc (centiseconds)."""
    cs = max(0, int(round(float(t) * 100)))
    h, cs = divmod(cs, 360000)
    m, cs = divmod(cs, 6000)
    s, cs = divmod(cs, 100)
    return f"{h:02}:{m:02}:{s:02},{cs:02}"


def _flag(value: bool) -> int:
    return -1 if value else 0


def style_line(style: CueStyle) -> str:
    fields = [
        style.name,
        style.font_family,
        style.font_size,
        style.primary_color,
        style.secondary_color,
        style.outline_color,
        style.background_color,
        _flag(style.bold),
        _flag(style.italic),
        style.border_style,
        style.outline_width,
        style.shadow_depth,
        style.alignment,
        style.margin_left,
        style.margin_right,
        style.margin_vertical,
        style.text_encoding,
    ]
    return "Style: " + ", ".join(str(f) for f in fields)


def render_header(style: CueStyle) -> str:
    return (
        "[Script Info]\n"
        "Title: Subtitles\n"
        "ScriptType: v4.00+\n"
        "Collisions: Normal\n"
        "PlayDepth: 0\n"
        "\n"
        "[V4+ Styles]\n"
        f"{STYLE_FORMAT}\n"
        f"{style_line(style)}\n"
        "\n"
        "[Events]\n"
        f"{EVENTS_FORMAT}\n"
    )


def _escape_text(text: str) -> str:
    # a raw newline would end the Dialogue row; \N is the script's line break
    return text.replace("\r\n", "\\N").replace("\r", "\\N").replace("\n", "\\N")


def dialogue_line(cue: SubtitleCue, style_name: str) -> str:
    start = format_timestamp(cue.start_second)
    end = format_timestamp(cue.end_second)
    text = _escape_text(" ".join(cue.words))
    return f"Dialogue: 0,{start},{end},{style_name},,0,0,0,,{text}"


def render_ass(cues: Sequence[SubtitleCue], style: CueStyle | None = None) -> str:
    """Render cues as a subtitle script: style header plus one Dialogue row per cue."""
    style = style or CueStyle()
    body = "\n".join(dialogue_line(c, style.name) for c in cues)
    return render_header(style) + body


def write_ass(cues: Sequence[SubtitleCue], path: str, style: CueStyle | None = None) -> None:
    """Write cues to an .ass file."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(render_ass(cues, style))
    logger.info(f"ASS file generated: {path} ({len(cues)} cues)")


def generate_subtitles(
    transcript: Mapping[str, Any], path: str, style: CueStyle | None = None
) -> list[SubtitleCue]:
    """Build cues from a transcription result and write them to ``path``."""
    cues = normalize(events_from_transcript(transcript))
    write_ass(cues, path, style)
    return cues
