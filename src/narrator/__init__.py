"""
Narrator - turn a text passage into a narrated, subtitled video.

A linear pipeline for:
- Summarizing text (Hugging Face inference API or OpenAI)
- Synthesizing speech (Amazon Polly or OpenAI TTS)
- Transcribing the narration with Amazon Transcribe
- Grouping word timings into subtitle cues and rendering an ASS script
- Burning subtitles and audio onto a source video with ffmpeg
- Uploading audio and video to S3
"""

__version__ = "0.1.0"
