import os
import io
import logging
from datetime import datetime, timezone
from functools import lru_cache
from PIL import Image, UnidentifiedImageError
import boto3
from botocore.exceptions import BotoCoreError, ClientError

from lostfound import errors
from lostfound.config import AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY, CLOUDFLARE_ACCOUNT_ID, R2_BUCKET

logger = logging.getLogger(__name__)

FOLDER = "items"
URL = f"https://{CLOUDFLARE_ACCOUNT_ID}.r2.cloudflarestorage.com"


@lru_cache
def get_s3_client():
    return boto3.client(
        service_name="s3",
        endpoint_url=URL,
        aws_access_key_id=AWS_ACCESS_KEY_ID,
        aws_secret_access_key=AWS_SECRET_ACCESS_KEY,
        region_name="auto",
    )


def compress_image(data: bytes, max_width=1400, quality=80):
    try:
        img = Image.open(io.BytesIO(data))
        img = img.convert("RGB")
    except (UnidentifiedImageError, OSError):
        raise errors.ValidationError("File is not a readable image")

    # Resize while keeping aspect ratio
    w, h = img.size
    if w > max_width:
        new_height = int(h * (max_width / w))
        img = img.resize((max_width, new_height), Image.LANCZOS)

    # Try WebP first
    buffer = io.BytesIO()

    try:
        img.save(buffer, format="WEBP", quality=quality, method=6)
        ext = "webp"
    except (OSError, KeyError) as e:
        logger.warning("WebP encoding failed, falling back to JPEG: %s", e)

        buffer = io.BytesIO()
        img.save(buffer, format="JPEG", quality=quality, optimize=True)
        ext = "jpg"

    buffer.seek(0)
    return buffer, ext


def upload_to_s3(buffer: io.BytesIO, ext: str, original_name: str):
    base = os.path.splitext(os.path.basename(original_name or "image"))[0] or "image"

    ts = int(datetime.now(timezone.utc).timestamp())
    key = f"{FOLDER}/{base}-{ts}.{ext}"

    try:
        get_s3_client().upload_fileobj(buffer, R2_BUCKET, key)
    except (BotoCoreError, ClientError) as e:
        logger.error("Error uploading S3 object %s: %s", key, e)
        raise errors.UpstreamError("Image storage unavailable") from e

    return key


def generate_signed_url(key: str, expires_in=3600):
    try:
        return get_s3_client().generate_presigned_url(
                "get_object",
                Params={"Bucket": R2_BUCKET, "Key": key},
                ExpiresIn=expires_in
            )
    except (BotoCoreError, ClientError) as e:
        logger.error("Error generating signed URL for %s: %s", key, e)
        return None
