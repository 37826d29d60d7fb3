"""
Shared fixtures.
"""

import pytest


@pytest.fixture
def sample_transcript() -> dict:
    """A small Amazon Transcribe result: three words and a period."""
    return {
        "jobName": "transcription-job-1",
        "results": {
            "transcripts": [{"transcript": "Hello world today."}],
            "items": [
                {
                    "start_time": "0.1",
                    "end_time": "0.4",
                    "alternatives": [{"confidence": "0.99", "content": "Hello"}],
                    "type": "pronunciation",
                },
                {
                    "start_time": "0.6",
                    "end_time": "0.9",
                    "alternatives": [{"confidence": "0.98", "content": "world"}],
                    "type": "pronunciation",
                },
                {
                    "alternatives": [{"confidence": "0.0", "content": "."}],
                    "type": "punctuation",
                },
                {
                    "start_time": "1.2",
                    "end_time": "1.8",
                    "alternatives": [{"confidence": "0.97", "content": "today"}],
                    "type": "pronunciation",
                },
            ],
            "audio_segments": [{"id": 0, "start_time": "0.0", "end_time": "1.8"}],
        },
        "status": "COMPLETED",
    }
