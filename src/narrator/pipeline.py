"""
End-to-end narration run: summary -> speech -> transcript -> subtitles -> video.
"""

import logging
import os
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from .ass_utils import generate_subtitles
from .config import Settings
from .cues import transcript_duration
from .io_ffmpeg import audio_duration_seconds, burn_subtitles, ensure_dir
from .models import CueStyle, PipelineResult
from .storage import S3Storage
from .stt import RetryPolicy, start_transcription, wait_for_transcription

logger = logging.getLogger("narrator")


def _remove(path: str) -> None:
    try:
        Path(path).unlink()
        logger.debug("Removed %s", path)
    except FileNotFoundError:
        pass


class NarrationPipeline:
    """Runs the narration steps in order; every external service is injected."""

    def __init__(
        self,
        settings: Settings,
        *,
        summarize: Callable[[str], str],
        synth: Callable[[str, str], None],
        audio_storage: S3Storage,
        video_storage: S3Storage,
        transcribe_client: Any,
        style: CueStyle | None = None,
        render: Callable[..., None] = burn_subtitles,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
    ):
        self.settings = settings
        self.summarize = summarize
        self.synth = synth
        self.audio_storage = audio_storage
        self.video_storage = video_storage
        self.transcribe_client = transcribe_client
        self.style = style
        self.render = render
        self.sleep = sleep
        self.clock = clock

    def _stamp(self) -> int:
        return int(self.clock() * 1000)

    def _duration(self, transcript: dict, audio_path: str) -> float:
        fallback = self.settings.default_duration
        hint = transcript_duration(transcript, default=0.0)
        if hint > 0:
            return hint
        try:
            measured = audio_duration_seconds(audio_path)
        except Exception as e:
            logger.warning(f"Could not measure audio duration ({e}); using {fallback}s")
            return fallback
        return measured if measured > 0 else fallback

    def run(self, content: str, *, keep_intermediates: bool = False) -> PipelineResult:
        if not content or not content.strip():
            raise ValueError("Content is required for summarization")

        s = self.settings
        ensure_dir(s.workdir)

        summary = self.summarize(content)
        logger.info(f"Generated summary: {summary}")

        audio_path = os.path.join(s.workdir, f"audio-{self._stamp()}.mp3")
        subs_path = os.path.join(s.workdir, f"subtitles-{self._stamp()}.ass")
        output_path = os.path.join(s.workdir, f"output-video-{self._stamp()}.mp4")
        try:
            self.synth(summary, audio_path)

            audio_key = os.path.basename(audio_path)
            audio_url = self.audio_storage.upload_file(
                audio_path, audio_key, content_type="audio/mpeg"
            )

            job_name = start_transcription(
                self.transcribe_client,
                self.audio_storage.bucket_name,
                audio_key,
                language_code=s.language_code,
            )
            transcript = wait_for_transcription(
                self.transcribe_client,
                self.audio_storage,
                job_name,
                RetryPolicy(interval=s.poll_interval, max_attempts=s.poll_attempts),
                sleep=self.sleep,
            )

            generate_subtitles(transcript, subs_path, self.style)

            duration = self._duration(transcript, audio_path)
            self.render(s.source_video, audio_path, subs_path, output_path, duration)
            logger.info(f"Video processing complete: {output_path}")

            video_url = self.video_storage.upload_file(
                output_path, os.path.basename(output_path), content_type="video/mp4"
            )

            if not keep_intermediates:
                self.audio_storage.delete_file(f"{job_name}.json")
        finally:
            if not keep_intermediates:
                _remove(audio_path)
                _remove(subs_path)

        return PipelineResult(
            summary=summary,
            audio_url=audio_url,
            video_url=video_url,
            transcription_job=job_name,
            subtitle_path=subs_path,
            output_video_path=output_path,
        )
