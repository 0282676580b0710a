# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
s3backups Configuration - Immutable configuration data structures.

The configuration is frozen after creation so a manager and its backend
always agree on which bucket they are talking to.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List
import re
import tempfile


def _validate_bucket_name(bucket: str) -> bool:
    """
    Validate S3 bucket name according to AWS rules.

    Rules:
    - 3-63 characters
    - Lowercase letters, numbers, hyphens
    - Must start and end with letter or number
    - No consecutive periods
    - Not formatted as IP address
    """
    if not bucket or len(bucket) < 3 or len(bucket) > 63:
        return False

    # Must be lowercase letters, numbers, hyphens, or periods
    if not re.match(r"^[a-z0-9][a-z0-9.-]*[a-z0-9]$", bucket):
        return False

    # No consecutive periods
    if ".." in bucket:
        return False

    # Not IP address format
    if re.match(r"^\d+\.\d+\.\d+\.\d+$", bucket):
        return False

    return True


def _validate_endpoint_url(url: str) -> bool:
    """Validate that an endpoint is an absolute http(s) URL."""
    return bool(re.match(r"^https?://[^\s/]+", url))


@dataclass(frozen=True)
class BackupsConfig:
    """
    Immutable configuration for the S3 backend and the archiver.
    """

    # Required: bucket that holds artifacts and locks
    bucket: str

    # Region (default: us-east-1)
    region: str = "us-east-1"

    # Custom endpoint for S3-compatible stores (DigitalOcean Spaces, MinIO, ...)
    endpoint_url: str | None = None

    # Where directory tarballs are written before upload
    scratch_dir: Path = field(default_factory=lambda: Path(tempfile.gettempdir()))

    def __post_init__(self) -> None:
        """Validate configuration after creation."""
        errors: List[str] = []

        if not _validate_bucket_name(self.bucket):
            errors.append(f"Invalid bucket name: {self.bucket}")

        if not self.region:
            errors.append("region must not be empty")

        if self.endpoint_url is not None and not _validate_endpoint_url(self.endpoint_url):
            errors.append(f"Invalid endpoint_url: {self.endpoint_url}")

        # Raise all errors at once
        if errors:
            from s3backups.exceptions import ConfigurationError

            raise ConfigurationError(
                "Configuration validation failed",
                details={"errors": errors},
            )

    def with_updates(self, **kwargs) -> "BackupsConfig":
        """
        Create a new config with updated values.

        Since the config is frozen, this creates a new instance.
        """
        from dataclasses import asdict

        current = asdict(self)
        current.update(kwargs)
        return BackupsConfig(**current)
