"""
Tests for the Polly, OpenAI TTS, S3 and ffmpeg wrappers.
"""

import io
import json
import subprocess
from contextlib import contextmanager
from types import SimpleNamespace

import pytest
from botocore.exceptions import ClientError

from src.narrator import io_ffmpeg
from src.narrator.io_ffmpeg import burn_subtitles, run
from src.narrator.storage import S3Storage
from src.narrator.tts import (
    make_synth_openai,
    make_synth_polly,
    synthesize_polly,
    tts_speak_openai,
)


class FakePolly:
    def __init__(self):
        self.calls = []

    def synthesize_speech(self, **params):
        self.calls.append(params)
        return {"AudioStream": io.BytesIO(b"ID3fake-mp3"), "ContentType": "audio/mpeg"}


def test_synthesize_polly(tmp_path):
    polly = FakePolly()
    out = tmp_path / "audio.mp3"

    make_synth_polly(polly, "Joanna")("A summary.", str(out))

    assert out.read_bytes() == b"ID3fake-mp3"
    assert polly.calls == [{"Text": "A summary.", "OutputFormat": "mp3", "VoiceId": "Joanna"}]


def test_synthesize_polly_without_stream(tmp_path):
    polly = SimpleNamespace(synthesize_speech=lambda **kw: {})

    with pytest.raises(RuntimeError):
        synthesize_polly(polly, "text", str(tmp_path / "a.mp3"))


class FakeStreamingSpeech:
    """Stands in for client.audio.speech.with_streaming_response."""

    def __init__(self, audio: bytes):
        self.audio = audio
        self.calls = []

    @contextmanager
    def create(self, **kwargs):
        self.calls.append(kwargs)

        def stream_to_file(path):
            with open(path, "wb") as f:
                f.write(self.audio)

        yield SimpleNamespace(stream_to_file=stream_to_file)


def fake_openai_tts(audio: bytes):
    speech = FakeStreamingSpeech(audio)
    client = SimpleNamespace(
        audio=SimpleNamespace(speech=SimpleNamespace(with_streaming_response=speech))
    )
    return client, speech


def test_make_synth_openai(tmp_path):
    client, speech = fake_openai_tts(b"ID3openai-mp3")
    out = tmp_path / "audio.mp3"

    make_synth_openai(client, "gpt-4o-mini-tts", "alloy")("A summary.", str(out))

    assert out.read_bytes() == b"ID3openai-mp3"
    assert speech.calls == [
        {
            "model": "gpt-4o-mini-tts",
            "voice": "alloy",
            "input": "A summary.",
            "response_format": "mp3",
        }
    ]


def test_tts_speak_openai_requires_client(tmp_path):
    with pytest.raises(RuntimeError, match="OPENAI_API_KEY"):
        tts_speak_openai(None, "text", "gpt-4o-mini-tts", "alloy", str(tmp_path / "a.mp3"))


class FakeS3:
    def __init__(self):
        self.uploads = []
        self.objects = {}

    def upload_file(self, filename, bucket, key, ExtraArgs=None):
        self.uploads.append((filename, bucket, key, ExtraArgs))

    def get_object(self, Bucket, Key):
        if Key not in self.objects:
            raise ClientError({"Error": {"Code": "NoSuchKey", "Message": "missing"}}, "GetObject")
        return {"Body": io.BytesIO(self.objects[Key])}

    def delete_object(self, Bucket, Key):
        self.objects.pop(Key, None)


def test_s3_upload_returns_object_url(tmp_path):
    s3 = FakeS3()
    storage = S3Storage("narratogenie-video", client=s3)

    url = storage.upload_file(tmp_path / "out.mp4", "out.mp4", content_type="video/mp4")

    assert url == "https://narratogenie-video.s3.amazonaws.com/out.mp4"
    assert s3.uploads == [
        (str(tmp_path / "out.mp4"), "narratogenie-video", "out.mp4", {"ContentType": "video/mp4"})
    ]


def test_s3_get_json_and_missing_key():
    s3 = FakeS3()
    s3.objects["job.json"] = json.dumps({"results": {"items": []}}).encode()
    storage = S3Storage("bucket", client=s3)

    assert storage.get_json("job.json") == {"results": {"items": []}}
    with pytest.raises(ClientError):
        storage.get_json("other.json")

    storage.delete_file("job.json")
    assert "job.json" not in s3.objects


def test_run_raises_on_failure(monkeypatch):
    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 1, stdout="boom")

    monkeypatch.setattr(io_ffmpeg.subprocess, "run", fake_run)

    with pytest.raises(RuntimeError, match="code 1"):
        run(["ffmpeg", "-version"])
    assert run(["ffmpeg", "-version"], check=False) == "boom"


def test_burn_subtitles_requires_subtitle_file(tmp_path, monkeypatch):
    monkeypatch.setattr(io_ffmpeg, "run", lambda cmd, **kw: pytest.fail("ffmpeg must not run"))

    with pytest.raises(FileNotFoundError, match="Subtitle file does not exist"):
        burn_subtitles("in.mp4", "a.mp3", str(tmp_path / "missing.ass"), "out.mp4", 10.0)


def test_burn_subtitles_command(tmp_path, monkeypatch):
    subs = tmp_path / "subs.ass"
    subs.write_text("[Script Info]\n", encoding="utf-8")
    seen = []
    monkeypatch.setattr(io_ffmpeg, "run", lambda cmd, **kw: seen.append(cmd) or "")

    burn_subtitles("in.mp4", "a.mp3", str(subs), str(tmp_path / "out.mp4"), 12.5)

    cmd = seen[0]
    assert cmd[0] == "ffmpeg"
    assert cmd[cmd.index("-vf") + 1] == f"subtitles={subs.resolve()}"
    assert cmd[cmd.index("-t") + 1] == "12.500"
    assert cmd[cmd.index("-c:v") + 1] == "libx264"
    assert cmd[cmd.index("-c:a") + 1] == "aac"
    assert "1:a:0" in cmd
    assert cmd[-1] == str((tmp_path / "out.mp4").resolve())
