"""
Blob storage for uploaded images and attachments.
Objects live in a Cloudflare R2 bucket (S3 API) and are referenced by public URL.
"""

import logging
import uuid
from typing import Optional
from urllib.parse import unquote, urlparse

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError
from fastapi import Request, UploadFile

from ..config import Settings
from ..exceptions import ServerError, StorageError, ValidationError
from ..security_utils import sanitize_filename

logger = logging.getLogger(__name__)

MAX_UPLOAD_SIZE_BYTES = 6 * 1024 * 1024  # 6MB

ALLOWED_IMAGE_TYPES = [
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/webp",
    "image/gif",
    "image/avif",
    "image/heic",
]

ALLOWED_ATTACHMENT_TYPES = ALLOWED_IMAGE_TYPES + ["application/pdf"]


def get_r2_client(settings: Settings):
    """Get configured boto3 client for Cloudflare R2"""
    return boto3.client(
        "s3",
        endpoint_url=f"https://{settings.r2_account_id}.r2.cloudflarestorage.com",
        aws_access_key_id=settings.r2_access_key_id,
        aws_secret_access_key=settings.r2_secret_access_key,
        config=Config(signature_version="s3v4"),
        region_name="auto",
    )


def generate_object_key(folder: str, filename: str) -> str:
    """
    Generate a unique key for blob storage.

    Format: {folder}/{uuid}_{sanitized filename}
    """
    return f"{folder}/{uuid.uuid4().hex}_{sanitize_filename(filename)}"


class R2BlobStorage:
    """Public-read object storage; every method raises StorageError on failure."""

    def __init__(self, client, bucket: str, public_url: Optional[str]):
        self.client = client
        self.bucket = bucket
        self.public_url = (public_url or "").rstrip("/")

    @classmethod
    def from_settings(cls, settings: Settings) -> "R2BlobStorage":
        return cls(get_r2_client(settings), settings.r2_bucket_name, settings.r2_public_url)

    def url_for(self, key: str) -> str:
        return f"{self.public_url}/{key}"

    def key_for(self, url: str) -> str:
        if self.public_url and url.startswith(self.public_url + "/"):
            return url[len(self.public_url) + 1 :]
        return unquote(urlparse(url).path.lstrip("/"))

    def upload(self, key: str, content: bytes, content_type: str) -> str:
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=content,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"❌ Failed to upload {key} to R2: {e}")
            raise StorageError(f"Upload failed for {key}") from e

        logger.info(f"✅ Uploaded {key} ({len(content)} bytes)")
        return self.url_for(key)

    def delete(self, url: str) -> None:
        key = self.key_for(url)
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"❌ Failed to delete {key} from R2: {e}")
            raise StorageError(f"Delete failed for {key}") from e

        logger.info(f"🗑️ Deleted {key} from R2")


async def store_upload(storage, file: UploadFile, folder: str, allowed_types: list[str]) -> dict:
    """Validate an uploaded file and push it to blob storage; returns the blob descriptor."""
    if file.content_type not in allowed_types:
        raise ValidationError("Nieprawidłowy typ pliku.")

    filename = file.filename or ""
    if not filename or len(filename) > 255 or ".." in filename:
        raise ValidationError("Nieprawidłowa nazwa pliku.")

    contents = await file.read()
    if not contents:
        raise ValidationError("Plik jest pusty.")
    if len(contents) > MAX_UPLOAD_SIZE_BYTES:
        raise ValidationError(
            f"Plik przekracza limit {MAX_UPLOAD_SIZE_BYTES // (1024 * 1024)}MB."
        )

    key = generate_object_key(folder, filename)
    try:
        url = storage.upload(key, contents, file.content_type)
    except StorageError as e:
        raise ServerError("Błąd przesyłania pliku.") from e

    return {"url": url, "pathname": key, "contentType": file.content_type, "size": len(contents)}


def get_storage(request: Request):
    return request.app.state.storage
