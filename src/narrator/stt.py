"""
Speech-to-text with Amazon Transcribe: job start and bounded result polling.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from .storage import S3Storage

logger = logging.getLogger("narrator")

T = TypeVar("T")


class TranscriptionTimeoutError(RuntimeError):
    """The transcription result did not appear within the poll budget."""


@dataclass(frozen=True)
class RetryPolicy:
    interval: float = 5.0  # seconds between attempts
    max_attempts: int = 6


def poll(
    check: Callable[[], T | None],
    policy: RetryPolicy,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call ``check`` until it returns something other than None.

    Raises TranscriptionTimeoutError once ``policy.max_attempts`` calls came back empty.
    """
    for attempt in range(1, policy.max_attempts + 1):
        result = check()
        if result is not None:
            return result
        logger.info(
            f"Waiting for transcription to complete... ({attempt}/{policy.max_attempts})"
        )
        if attempt < policy.max_attempts:
            sleep(policy.interval)
    raise TranscriptionTimeoutError("Transcription did not complete within the expected time.")


def start_transcription(
    transcribe_client: Any,
    bucket_name: str,
    file_key: str,
    language_code: str = "en-US",
    job_name: str | None = None,
) -> str:
    """Start a transcription job for s3://bucket/key and return its name.

    The result JSON lands in the same bucket as ``<job_name>.json``.
    """
    job_name = job_name or f"transcription-job-{int(time.time() * 1000)}"
    params = {
        "TranscriptionJobName": job_name,
        "LanguageCode": language_code,
        "Media": {"MediaFileUri": f"s3://{bucket_name}/{file_key}"},
        "OutputBucketName": bucket_name,
    }
    logger.debug("Starting transcription with params: %s", params)
    resp = transcribe_client.start_transcription_job(**params)
    status = resp.get("TranscriptionJob", {}).get("TranscriptionJobStatus")
    logger.info(f"Transcription job {job_name} started ({status})")
    return job_name


def check_transcription(transcribe_client: Any, storage: S3Storage, job_name: str) -> dict | None:
    """Return the transcript when the job is done, None while it is still running."""
    resp = transcribe_client.get_transcription_job(TranscriptionJobName=job_name)
    job = resp.get("TranscriptionJob", {})
    status = job.get("TranscriptionJobStatus")
    if status == "FAILED":
        reason = job.get("FailureReason", "unknown reason")
        raise RuntimeError(f"Transcription job {job_name} failed: {reason}")
    if status != "COMPLETED":
        return None
    return storage.get_json(f"{job_name}.json")


def wait_for_transcription(
    transcribe_client: Any,
    storage: S3Storage,
    job_name: str,
    policy: RetryPolicy | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> dict:
    """Poll the job until its transcript is available in the output bucket."""
    policy = policy or RetryPolicy()
    transcript = poll(
        lambda: check_transcription(transcribe_client, storage, job_name), policy, sleep=sleep
    )
    n_items = len((transcript.get("results") or {}).get("items") or [])
    logger.info(f"Transcription {job_name} complete ({n_items} items)")
    return transcript
