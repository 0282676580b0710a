# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Backup Manager - Versioned backup and restore of named resources.

Every backup stores the content under ``<name>_<version>.bak`` and then
replaces ``<name>.lock`` with a lock pointing at it. Restores read the
lock and return the artifact it points to.

The manager assumes a single writer per resource name. Two concurrent
backups of the same name race on the lock: the last lock written wins
and the other artifact is orphaned.
"""

from datetime import datetime, UTC
from typing import BinaryIO

import structlog

from s3backups.backend.base import Backend
from s3backups.exceptions import BackupError, NoBackupError, NoSuchName
from s3backups.lock import Lock, artifact_name, lock_name, next_lock
from s3backups.versioner import Versioner

logger = structlog.get_logger()


class BackupManager:
    """Performs versioned backup and restoration through a backend."""

    def __init__(self, backend: Backend, versioner: Versioner) -> None:
        self.backend = backend
        self.versioner = versioner

    async def backup(self, name: str, content: bytes | BinaryIO) -> Lock:
        """
        Back up content under name and advance its lock.

        Steps:
        1. Read the current lock (a missing lock is not an error)
        2. Store the content under a freshly versioned artifact name
        3. Store a new lock pointing at that artifact

        If step 3 fails the artifact stays orphaned and the old lock,
        which is still valid, keeps pointing at the prior backup.

        Args:
            name: Resource name
            content: Bytes, or a binary file object read to the end

        Returns:
            The newly stored lock
        """
        start_time = datetime.now(UTC)
        current_lock = await self.get_lock(name)

        data = content if isinstance(content, (bytes, bytearray)) else content.read()
        artifact = artifact_name(name, self.versioner.get_version())

        logger.info(
            "backup_started",
            name=name,
            artifact=artifact,
            size=len(data),
            has_lock=current_lock is not None,
        )

        await self.backend.store(artifact, bytes(data))
        logger.debug("artifact_stored", name=name, artifact=artifact)

        new_lock = next_lock(current_lock, name, artifact)
        await self.backend.store(new_lock.id, new_lock.to_json())

        logger.info(
            "backup_completed",
            name=name,
            current=new_lock.current,
            previous=new_lock.previous,
            duration=(datetime.now(UTC) - start_time).total_seconds(),
        )
        return new_lock

    async def restore(self, name: str) -> bytes:
        """
        Return the content of the latest backup of name.

        Raises:
            NoBackupError: If name has never been backed up
        """
        lock = await self.get_lock(name)
        if lock is None:
            raise NoBackupError(name)

        data = await self.backend.read(lock.current)

        logger.info("restore_completed", name=name, artifact=lock.current, size=len(data))
        return data

    async def restore_artifact(self, artifact: str) -> bytes:
        """
        Read a specific artifact, bypassing the lock.

        Artifact names are deterministic, so any historical version can be
        restored this way as long as its name is known.
        """
        return await self.backend.read(artifact)

    async def get_lock(self, name: str) -> Lock | None:
        """
        Return the current lock for name, or None if it has none.

        Only a missing lock maps to None. Other backend failures and
        malformed lock contents propagate.
        """
        try:
            raw = await self.backend.read(lock_name(name))
        except NoSuchName:
            return None

        return Lock.from_json(raw)

    async def pin(self, name: str, artifact: str) -> Lock:
        """
        Point name's lock at an existing artifact.

        The previously current artifact becomes the rollback target.

        Raises:
            NoBackupError: If name has never been backed up
            NoSuchName: If artifact does not exist
        """
        lock = await self.get_lock(name)
        if lock is None:
            raise NoBackupError(name)

        # Raises NoSuchName when the artifact is gone
        await self.backend.read(artifact)

        new_lock = next_lock(lock, name, artifact)
        await self.backend.store(new_lock.id, new_lock.to_json())

        logger.info("lock_pinned", name=name, current=artifact, previous=new_lock.previous)
        return new_lock

    async def rollback(self, name: str) -> Lock:
        """Swap name's lock back to its previous artifact."""
        lock = await self.get_lock(name)
        if lock is None:
            raise NoBackupError(name)
        if not lock.previous:
            raise BackupError(
                f"No previous backup to roll back to for {name}",
                details={"name": name, "current": lock.current},
            )

        return await self.pin(name, lock.previous)
