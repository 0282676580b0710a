# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
S3 backend.

Stores one artifact per object in a single bucket. Works with AWS S3 and
with S3-compatible stores such as DigitalOcean Spaces via endpoint_url.
"""

from typing import Any

import structlog
from botocore.exceptions import BotoCoreError, ClientError

from s3backups.config import BackupsConfig
from s3backups.exceptions import NoSuchName, StorageError

logger = structlog.get_logger()

# Error codes S3 uses for a missing key on GetObject
_MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


class S3Backend:
    """Backend backed by an S3 bucket through aiobotocore."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        session: Any = None,
    ) -> None:
        if session is None:
            from aiobotocore.session import get_session

            session = get_session()

        self.bucket = bucket
        self.region = region
        self.endpoint_url = endpoint_url
        self._session = session

    @classmethod
    def from_config(cls, config: BackupsConfig, session: Any = None) -> "S3Backend":
        return cls(
            bucket=config.bucket,
            region=config.region,
            endpoint_url=config.endpoint_url,
            session=session,
        )

    def _client(self) -> Any:
        # Created per-operation via context manager
        return self._session.create_client(
            "s3",
            region_name=self.region,
            endpoint_url=self.endpoint_url,
        )

    async def store(self, name: str, data: bytes) -> None:
        """Upload data as the object `name` in the configured bucket."""
        try:
            async with self._client() as s3_client:
                await s3_client.put_object(Bucket=self.bucket, Key=name, Body=data)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(
                f"Failed to store object: {e}",
                details={"bucket": self.bucket, "key": name},
            ) from e

        logger.debug("s3_object_stored", bucket=self.bucket, key=name, size=len(data))

    async def read(self, name: str) -> bytes:
        """Download the object `name`, raising NoSuchName if it is absent."""
        try:
            async with self._client() as s3_client:
                response = await s3_client.get_object(Bucket=self.bucket, Key=name)
                async with response["Body"] as stream:
                    data = await stream.read()
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in _MISSING_KEY_CODES:
                raise NoSuchName(name) from e
            raise StorageError(
                f"Failed to read object: {e}",
                details={"bucket": self.bucket, "key": name},
            ) from e
        except BotoCoreError as e:
            raise StorageError(
                f"Failed to read object: {e}",
                details={"bucket": self.bucket, "key": name},
            ) from e

        logger.debug("s3_object_read", bucket=self.bucket, key=name, size=len(data))
        return data
