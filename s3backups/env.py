# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Environment-based configuration.

The command line never takes store credentials or coordinates as flags;
they come from the environment:

- S3BACKUPS_S3_BUCKET: bucket holding artifacts and locks (required)
- S3BACKUPS_S3_REGION: region (default: us-east-1)
- S3BACKUPS_S3_ENDPOINT: endpoint URL for S3-compatible stores (optional)
- S3BACKUPS_SCRATCH_DIR: directory for temporary tarballs (default: system temp)

Credentials are resolved by botocore as usual (AWS_ACCESS_KEY_ID, profiles, ...).
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from s3backups.config import BackupsConfig, _validate_endpoint_url
from s3backups.errors import (
    explain_invalid_endpoint_env,
    explain_invalid_scratch_dir_env,
    explain_missing_bucket_env,
)
from s3backups.exceptions import ConfigurationError


def _parse_endpoint(value: str | None) -> str | None:
    if not value:
        return None
    if not _validate_endpoint_url(value):
        raise ConfigurationError(explain_invalid_endpoint_env(value))
    return value


def _parse_scratch_dir(value: str | None) -> Path | None:
    if not value:
        return None
    path = Path(value)
    if not path.is_dir():
        raise ConfigurationError(explain_invalid_scratch_dir_env(value))
    return path


def create_config_from_env(environ: Mapping[str, str] | None = None) -> BackupsConfig:
    """
    Create a BackupsConfig from environment variables.

    Args:
        environ: Mapping to read instead of os.environ (useful in tests)

    Returns:
        Validated BackupsConfig
    """

    env = os.environ if environ is None else environ

    bucket = env.get("S3BACKUPS_S3_BUCKET")
    if not bucket:
        raise ConfigurationError(explain_missing_bucket_env())

    region = env.get("S3BACKUPS_S3_REGION") or "us-east-1"
    endpoint_url = _parse_endpoint(env.get("S3BACKUPS_S3_ENDPOINT"))
    scratch_dir = _parse_scratch_dir(env.get("S3BACKUPS_SCRATCH_DIR"))

    config = BackupsConfig(bucket=bucket, region=region, endpoint_url=endpoint_url)
    if scratch_dir is not None:
        config = config.with_updates(scratch_dir=scratch_dir)
    return config
