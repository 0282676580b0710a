# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
s3backups - Versioned backups of files and directories to S3.

Each backup is stored as ``<name>_<version>.bak`` next to a small JSON
lock, ``<name>.lock``, that points at the current and previous backups.
Directories travel as tarballs. Package name: s3backups.
"""

__version__ = "0.1.0"

# Core engine
from s3backups.manager import BackupManager
from s3backups.lock import Lock, artifact_name, lock_name, next_lock
from s3backups.versioner import (
    StaticVersioner,
    TimestampVersioner,
    UlidVersioner,
    Versioner,
)

# Storage
from s3backups.backend import Backend, InMemoryBackend, S3Backend

# Directory archiving
from s3backups.archive import create_tarball, extract_tarball

# Configuration
from s3backups.config import BackupsConfig
from s3backups.env import create_config_from_env

__all__ = [
    # Version
    "__version__",
    # Core
    "BackupManager",
    "Lock",
    "artifact_name",
    "lock_name",
    "next_lock",
    "Versioner",
    "TimestampVersioner",
    "UlidVersioner",
    "StaticVersioner",
    # Storage
    "Backend",
    "InMemoryBackend",
    "S3Backend",
    # Archiving
    "create_tarball",
    "extract_tarball",
    # Configuration
    "BackupsConfig",
    "create_config_from_env",
]
