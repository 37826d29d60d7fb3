"""
Text-to-speech synthesis with Amazon Polly or OpenAI.
"""

import logging
from collections.abc import Callable
from typing import Any

from openai import OpenAI

logger = logging.getLogger("narrator")


def synthesize_polly(
    polly_client: Any,
    text: str,
    out_path: str,
    voice_id: str = "Joanna",
    output_format: str = "mp3",
) -> None:
    """Synthesize speech with Polly and save the audio stream to out_path."""
    resp = polly_client.synthesize_speech(Text=text, OutputFormat=output_format, VoiceId=voice_id)
    stream = resp.get("AudioStream")
    if stream is None:
        raise RuntimeError("Polly returned no audio stream")
    try:
        with open(out_path, "wb") as f:
            f.write(stream.read())
    finally:
        stream.close()
    logger.info(f"Audio saved locally at: {out_path}")


def tts_speak_openai(
    client: OpenAI,
    text: str,
    model: str,
    voice: str,
    out_path: str,
    response_format: str = "mp3",
) -> None:
    """Synthesize speech using OpenAI TTS."""
    if client is None:
        raise RuntimeError("OpenAI client is not initialized (missing OPENAI_API_KEY)")

    with client.audio.speech.with_streaming_response.create(
        model=model,
        voice=voice,
        input=text,
        response_format=response_format,
    ) as resp:
        resp.stream_to_file(out_path)
    logger.info(f"Audio saved locally at: {out_path}")


def make_synth_polly(polly_client: Any, voice_id: str) -> Callable[[str, str], None]:
    """Create Polly synthesis function."""

    def _synth(text: str, out_path: str) -> None:
        synthesize_polly(polly_client, text, out_path, voice_id=voice_id)

    return _synth


def make_synth_openai(client: OpenAI, tts_model: str, voice: str) -> Callable[[str, str], None]:
    """Create OpenAI TTS synthesis function."""

    def _synth(text: str, out_path: str) -> None:
        tts_speak_openai(client, text, tts_model, voice, out_path)

    return _synth
