# services/learning-service/src/apps/core/services/media_service.py
"""
Media Storage Service

MinIO/S3 compatible object storage for lesson videos and PDFs.
"""

import uuid
import logging
import os
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from django.conf import settings

from .exceptions import InvalidInputError, StorageFailureError

logger = logging.getLogger(__name__)


class MediaKind:
    VIDEO = 'video'
    PDF = 'pdf'


MEDIA_RULES = {
    MediaKind.VIDEO: {
        'prefix': 'learnwise/videos',
        'max_size': 100 * 1024 * 1024,  # 100MB
        'content_type_prefix': 'video/',
    },
    MediaKind.PDF: {
        'prefix': 'learnwise/pdfs',
        'max_size': 10 * 1024 * 1024,  # 10MB
        'content_type_prefix': 'application/pdf',
    },
}


class MediaStorageService:
    """
    Uploads lesson media and returns its public URL.

    The boto3 client is created on first use; tests pass their own.
    """

    def __init__(self, client: Any = None, bucket_name: str = None):
        self._client = client
        self.bucket_name = bucket_name or settings.AWS_STORAGE_BUCKET_NAME

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client(
                's3',
                endpoint_url=settings.AWS_S3_ENDPOINT_URL,
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
                region_name=settings.AWS_S3_REGION_NAME,
            )
        return self._client

    def upload(
        self,
        content: Any,
        kind: str,
        filename: str,
        content_type: Optional[str],
    ) -> str:
        """
        Store a media file and return its public URL.

        Args:
            content: Raw bytes or a file-like object (e.g. an UploadedFile)
            kind: 'video' or 'pdf'
            filename: Original file name, only its extension is kept
            content_type: MIME type reported by the client

        Raises:
            InvalidInputError: Wrong kind, content type or size
            StorageFailureError: The object store rejected the write
        """
        rules = MEDIA_RULES.get(kind)
        if rules is None:
            raise InvalidInputError(f"Unsupported media kind: {kind}", field='kind')

        if not content_type or not content_type.startswith(rules['content_type_prefix']):
            raise InvalidInputError(
                f"Invalid content type for {kind}: {content_type}",
                field=kind,
                details={'content_type': content_type}
            )

        size = self._content_size(content)
        if size > rules['max_size']:
            raise InvalidInputError(
                f"{kind} exceeds the maximum size of {rules['max_size'] // (1024 * 1024)}MB",
                field=kind,
                details={'size': size, 'max_size': rules['max_size']}
            )

        extension = os.path.splitext(filename or '')[1].lower()
        key = f"{rules['prefix']}/{uuid.uuid4().hex}{extension}"

        try:
            if isinstance(content, (bytes, bytearray)):
                self.client.put_object(
                    Bucket=self.bucket_name,
                    Key=key,
                    Body=bytes(content),
                    ContentType=content_type,
                )
            else:
                content.seek(0)
                self.client.upload_fileobj(
                    content,
                    self.bucket_name,
                    key,
                    ExtraArgs={'ContentType': content_type}
                )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Upload failed for {key}: {e}")
            raise StorageFailureError(
                f"Failed to upload {kind}",
                details={'key': key}
            ) from e

        logger.info(f"Uploaded {kind} to {key}, size: {size} bytes")
        return self.public_url(key)

    def public_url(self, key: str) -> str:
        base_url = settings.MEDIA_PUBLIC_BASE_URL.rstrip('/')
        return f"{base_url}/{self.bucket_name}/{key}"

    @staticmethod
    def _content_size(content: Any) -> int:
        if isinstance(content, (bytes, bytearray)):
            return len(content)
        size = getattr(content, 'size', None)
        if size is not None:
            return size
        content.seek(0, 2)  # Seek to end
        size = content.tell()
        content.seek(0)
        return size


def probe_media_storage() -> None:
    """Readiness probe: the media bucket is reachable."""
    storage = MediaStorageService()
    storage.client.head_bucket(Bucket=storage.bucket_name)


probe_media_storage.probe_name = 'media_storage'
