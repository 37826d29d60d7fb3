"""
Runtime settings read from the environment (.env is loaded by the CLI).
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from None


@dataclass
class Settings:
    huggingface_api_key: str | None = None
    openai_api_key: str | None = None
    aws_region: str | None = None

    audio_bucket: str = "narratogenie-audio"
    video_bucket: str = "narratogenie-video"
    source_video: str = "./videos/movie1.mp4"
    workdir: str = "."

    summary_model: str = "facebook/bart-large-cnn"
    openai_summary_model: str = "gpt-4o-mini"
    voice_id: str = "Joanna"
    openai_tts_model: str = "gpt-4o-mini-tts"
    openai_voice: str = "alloy"
    language_code: str = "en-US"

    poll_interval: float = 5.0
    poll_attempts: int = 6
    default_duration: float = 30.0

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        env = os.environ if env is None else env
        d = cls()
        return cls(
            huggingface_api_key=env.get("HUGGING_API") or env.get("HUGGINGFACE_API_KEY"),
            openai_api_key=env.get("OPENAI_API_KEY"),
            aws_region=env.get("AWS_DEFAULT_REGION"),
            audio_bucket=env.get("NARRATOR_AUDIO_BUCKET", d.audio_bucket),
            video_bucket=env.get("NARRATOR_VIDEO_BUCKET", d.video_bucket),
            source_video=env.get("NARRATOR_SOURCE_VIDEO", d.source_video),
            workdir=env.get("NARRATOR_WORKDIR", d.workdir),
            summary_model=env.get("NARRATOR_SUMMARY_MODEL", d.summary_model),
            openai_summary_model=env.get("NARRATOR_OPENAI_SUMMARY_MODEL", d.openai_summary_model),
            voice_id=env.get("NARRATOR_VOICE_ID", d.voice_id),
            openai_tts_model=env.get("NARRATOR_OPENAI_TTS_MODEL", d.openai_tts_model),
            openai_voice=env.get("NARRATOR_OPENAI_VOICE", d.openai_voice),
            language_code=env.get("NARRATOR_LANGUAGE", d.language_code),
            poll_interval=_env_float(env, "NARRATOR_POLL_INTERVAL", d.poll_interval),
            poll_attempts=int(_env_float(env, "NARRATOR_POLL_ATTEMPTS", d.poll_attempts)),
            default_duration=_env_float(env, "NARRATOR_DEFAULT_DURATION", d.default_duration),
        )
