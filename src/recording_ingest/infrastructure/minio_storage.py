"""MinIO implementation of the StorageClient interface."""

from typing import BinaryIO

from minio import Minio

from recording_ingest.exceptions import StorageUploadError
from recording_ingest.infrastructure.interfaces import StorageClient
from recording_ingest.logging import setup_logging

logger = setup_logging()


class MinioStorageClient(StorageClient):
    """Handles recording uploads to a single MinIO (S3-compatible) bucket."""

    def __init__(self, client: Minio, bucket_name: str):
        self._client = client
        self._bucket_name = bucket_name

    def upload(
        self,
        object_name: str,
        data: BinaryIO,
        size: int,
        content_type: str,
    ) -> None:
        try:
            result = self._client.put_object(
                bucket_name=self._bucket_name,
                object_name=object_name,
                data=data,
                length=size,
                content_type=content_type,
            )
        except Exception as e:
            logger.exception(
                "MinIO upload failed",
                extra={"bucket_name": self._bucket_name, "object_name": object_name},
            )
            raise StorageUploadError(object_name, e) from e

        if not result.etag:
            logger.error(
                "MinIO upload not acknowledged",
                extra={"bucket_name": self._bucket_name, "object_name": object_name},
            )
            raise StorageUploadError(
                object_name, Exception("Storage returned no etag for the write")
            )

        logger.info(
            "File uploaded to MinIO",
            extra={
                "bucket_name": self._bucket_name,
                "object_name": object_name,
                "size": size,
                "etag": result.etag,
            },
        )

    def ensure_bucket_exists(self) -> None:
        if not self._client.bucket_exists(bucket_name=self._bucket_name):
            self._client.make_bucket(bucket_name=self._bucket_name)
            logger.info("Bucket created", extra={"bucket_name": self._bucket_name})
        else:
            logger.info(
                "Bucket already exists", extra={"bucket_name": self._bucket_name}
            )
