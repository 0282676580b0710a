# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Storage backends - where artifacts and locks are persisted.
"""

from s3backups.backend.base import Backend
from s3backups.backend.memory import InMemoryBackend
from s3backups.backend.s3 import S3Backend

__all__ = [
    "Backend",
    "InMemoryBackend",
    "S3Backend",
]
