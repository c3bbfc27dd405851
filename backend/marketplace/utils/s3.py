import logging
import os
import re
import secrets
import time

import boto3
from botocore.exceptions import ClientError

from marketplace.config import Settings
from marketplace.errors import ApiError

logger = logging.getLogger(__name__)


def get_s3_client(settings: Settings):
    """Get S3 client; credentials come from the usual boto3 sources"""
    return boto3.client("s3", region_name=settings.s3_region)


def safe_file_name(original: str) -> str:
    """
    Build a unique object name that keeps a readable, sanitized stem of
    the uploaded file name, e.g. `1718000000000-a1b2c3-my-chair.jpg`.
    """
    stem, ext = os.path.splitext(os.path.basename(original or ""))
    stem = re.sub(r"\s+", "-", stem or "file")
    stem = re.sub(r"[^a-zA-Z0-9_-]", "", stem)[:40]
    ext = re.sub(r"[^a-zA-Z0-9.]", "", ext)
    return f"{int(time.time() * 1000)}-{secrets.token_hex(3)}-{stem}{ext}"


def upload_file_to_s3(client, settings: Settings, file_data: bytes, file_name: str, content_type: str) -> str:
    """
    Upload a file to S3 and return its public URL
    """
    key = f"uploads/{file_name}"
    try:
        client.put_object(
            Bucket=settings.s3_bucket,
            Key=key,
            Body=file_data,
            ContentType=content_type or "application/octet-stream",
        )
    except ClientError as e:
        logger.error("S3 upload of %s failed: %s", key, e)
        raise ApiError(500, "Upload failed")

    return f"{settings.public_upload_base}/{key}"
