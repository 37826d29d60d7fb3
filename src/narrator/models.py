"""
Data models for the narration pipeline.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RecognitionEvent:
    """One recognized token from speech-to-text output."""

    start_time: float | None  # seconds, absent for punctuation
    end_time: float | None  # seconds
    text: str | None


@dataclass
class SubtitleCue:
    """A subtitle line visible from start_second to end_second."""

    start_second: int
    end_second: int
    words: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return " ".join(self.words)


@dataclass(frozen=True)
class CueStyle:
    """Style block of the cue sheet. Colors are &HAABBGGRR strings."""

    name: str = "Default"
    font_family: str = "Arial"
    font_size: int = 24
    primary_color: str = "&H00FFFFFF"
    secondary_color: str = "&H000000FF"
    outline_color: str = "&H00000000"
    background_color: str = "&H64000000"
    bold: bool = True
    italic: bool = False
    border_style: int = 1
    outline_width: int = 1
    shadow_depth: int = 0
    alignment: int = 2  # bottom center
    margin_left: int = 20
    margin_right: int = 20
    margin_vertical: int = 50
    text_encoding: int = 1


@dataclass
class PipelineResult:
    """Outcome of one narration run."""

    summary: str
    audio_url: str
    video_url: str
    transcription_job: str
    subtitle_path: str
    output_video_path: str
