"""
Amazon S3 object storage for audio, transcripts and rendered video.
"""

import json
import logging
from pathlib import Path
from typing import Any

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger("narrator")


class S3Storage:
    """Thin wrapper around one S3 bucket."""

    def __init__(self, bucket_name: str, client: Any = None, region_name: str | None = None):
        self.bucket_name = bucket_name
        self.s3_client = client or boto3.client("s3", region_name=region_name)

    def object_url(self, object_key: str) -> str:
        return f"https://{self.bucket_name}.s3.amazonaws.com/{object_key}"

    def upload_file(
        self, file_path: str | Path, object_key: str, content_type: str | None = None
    ) -> str:
        """Upload a local file and return its object URL."""
        extra_args = {}
        if content_type:
            extra_args["ContentType"] = content_type
        try:
            self.s3_client.upload_file(
                str(file_path), self.bucket_name, object_key, ExtraArgs=extra_args
            )
        except ClientError as e:
            logger.error(f"Failed to upload {file_path} to s3://{self.bucket_name}: {e}")
            raise

        url = self.object_url(object_key)
        logger.info(f"Uploaded to S3: {url}")
        return url

    def get_json(self, object_key: str) -> dict:
        """Download an object and decode it as JSON."""
        try:
            resp = self.s3_client.get_object(Bucket=self.bucket_name, Key=object_key)
        except ClientError as e:
            logger.error(f"Failed to fetch s3://{self.bucket_name}/{object_key}: {e}")
            raise
        body = resp["Body"].read()
        return json.loads(body.decode("utf-8"))

    def delete_file(self, object_key: str) -> None:
        try:
            self.s3_client.delete_object(Bucket=self.bucket_name, Key=object_key)
        except ClientError as e:
            logger.error(f"Failed to delete s3://{self.bucket_name}/{object_key}: {e}")
            raise
        logger.info(f"Deleted from S3: {object_key}")
