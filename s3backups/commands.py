# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Backup and restore of local paths.

Glue between the filesystem and the BackupManager: files are uploaded
as-is, directories are packed into a tarball first. Both are stored
under the path string the user gave, which is also how they are found
again on restore.
"""

import io
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime, UTC
from pathlib import Path

import aiofiles
import structlog

from s3backups.archive import create_tarball, extract_tarball
from s3backups.exceptions import S3BackupsError
from s3backups.lock import Lock
from s3backups.manager import BackupManager

logger = structlog.get_logger()

FILE = "file"
DIRECTORY = "directory"


@dataclass
class CommandResult:
    """Outcome of a backup or restore of one path."""

    name: str
    kind: str
    success: bool
    summary: str
    error: str | None = None
    lock: Lock | None = None
    duration_seconds: float = 0.0


async def backup_path(
    manager: BackupManager,
    path: str,
    kind: str,
    scratch_dir: Path | None = None,
) -> CommandResult:
    """
    Back up a file or directory.

    Args:
        manager: Manager to back up through
        path: Path to back up, also used as the resource name
        kind: FILE or DIRECTORY
        scratch_dir: Where directory tarballs are staged (default: system temp)

    Returns:
        CommandResult describing what happened
    """
    start_time = datetime.now(UTC)
    logger.info("backing_up_path", path=path, kind=kind)

    try:
        if kind == DIRECTORY:
            lock = await _backup_directory(manager, path, scratch_dir)
        else:
            lock = await _backup_file(manager, path)
    except (S3BackupsError, OSError) as e:
        logger.error("backup_path_failed", path=path, kind=kind, error=str(e))
        return CommandResult(
            name=path,
            kind=kind,
            success=False,
            summary=f"Failed to back up {path}: {e}",
            error=str(e),
            duration_seconds=(datetime.now(UTC) - start_time).total_seconds(),
        )

    return CommandResult(
        name=path,
        kind=kind,
        success=True,
        summary=f"Successfully backed up {path} as {lock.current}",
        lock=lock,
        duration_seconds=(datetime.now(UTC) - start_time).total_seconds(),
    )


async def restore_path(manager: BackupManager, path: str, kind: str) -> CommandResult:
    """
    Restore a file or directory from its latest backup.

    Files are rewritten in place. Directory tarballs are extracted into the
    parent of path, recreating path itself.
    """
    start_time = datetime.now(UTC)
    logger.info("restoring_path", path=path, kind=kind)

    try:
        if kind == DIRECTORY:
            await _restore_directory(manager, path)
        else:
            await _restore_file(manager, path)
    except (S3BackupsError, OSError) as e:
        logger.error("restore_path_failed", path=path, kind=kind, error=str(e))
        return CommandResult(
            name=path,
            kind=kind,
            success=False,
            summary=f"Failed to restore {path}: {e}",
            error=str(e),
            duration_seconds=(datetime.now(UTC) - start_time).total_seconds(),
        )

    return CommandResult(
        name=path,
        kind=kind,
        success=True,
        summary=f"Successfully restored {path}",
        duration_seconds=(datetime.now(UTC) - start_time).total_seconds(),
    )


async def _backup_file(manager: BackupManager, filename: str) -> Lock:
    async with aiofiles.open(filename, "rb") as f:
        content = await f.read()

    return await manager.backup(filename, content)


async def _backup_directory(
    manager: BackupManager,
    dirname: str,
    scratch_dir: Path | None,
) -> Lock:
    tarball_path = await create_tarball(Path(dirname), scratch_dir or Path(tempfile.gettempdir()))

    try:
        async with aiofiles.open(tarball_path, "rb") as f:
            content = await f.read()

        logger.info("tarball_ready_uploading", path=dirname, size=len(content))
        return await manager.backup(dirname, content)
    finally:
        tarball_path.unlink(missing_ok=True)


async def _restore_file(manager: BackupManager, filename: str) -> None:
    content = await manager.restore(filename)

    # Write atomically: temp file -> rename
    target = Path(filename)
    temp_path = target.with_name(f"{target.name}.tmp")

    try:
        async with aiofiles.open(temp_path, "wb") as f:
            await f.write(content)

        temp_path.replace(target)
    except OSError:
        temp_path.unlink(missing_ok=True)
        raise


async def _restore_directory(manager: BackupManager, dirname: str) -> None:
    content = await manager.restore(dirname)

    parent = Path(os.path.abspath(dirname)).parent
    await extract_tarball(io.BytesIO(content), parent)
