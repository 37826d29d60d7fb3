"""
Audio and video processing utilities using ffmpeg and pydub.
"""

import logging
import subprocess
from pathlib import Path

from pydub import AudioSegment

logger = logging.getLogger("narrator")


def run(cmd: list[str], *, check: bool = True) -> str:
    """Run a command and return stdout."""
    logger.debug("Running: %s", " ".join(map(str, cmd)))
    proc = subprocess.run(
        cmd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True, check=False
    )
    if proc.returncode != 0 and check:
        logger.error("Command failed with code %d: %s", proc.returncode, proc.stdout)
        msg = f"Command failed with code {proc.returncode}"
        raise RuntimeError(msg)
    return proc.stdout


def ensure_dir(path: str) -> None:
    """Ensure directory exists."""
    if path:
        Path(path).mkdir(parents=True, exist_ok=True)


def audio_duration_seconds(path: str) -> float:
    """Decode an audio file and return its length in seconds."""
    return len(AudioSegment.from_file(path)) / 1000.0


def burn_subtitles(
    input_video: str,
    audio_path: str,
    subs_path: str,
    output_video: str,
    duration: float,
    crf: int = 23,
    preset: str = "medium",
) -> None:
    """Replace the video's audio and burn the subtitle script into the picture.

    The output is cut to ``duration`` seconds.
    """
    if not Path(subs_path).exists():
        raise FileNotFoundError(f"Subtitle file does not exist: {subs_path}")

    cmd = [
        "ffmpeg",
        "-y",
        "-i",
        str(Path(input_video).resolve()),
        "-i",
        str(Path(audio_path).resolve()),
        "-vf",
        f"subtitles={Path(subs_path).resolve()}",
        "-t",
        f"{duration:.3f}",
        "-map",
        "0:v:0",
        "-map",
        "1:a:0",
        "-c:v",
        "libx264",
        "-crf",
        str(crf),
        "-preset",
        preset,
        "-c:a",
        "aac",
        str(Path(output_video).resolve()),
    ]
    logger.info("Rendering video -> %s", output_video)
    run(cmd)
