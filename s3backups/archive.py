# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Archiver - Turn a directory tree into a single tar stream and back.

Directories are backed up through the same byte-oriented backend as files
by packing them into a tarball first. Entry names keep the source
directory's own base name as their first component, so extracting
``/srv/site`` into ``/restore`` recreates ``/restore/site``.
"""

import os
import shutil
import tarfile
import tempfile
from pathlib import Path
from typing import BinaryIO

import structlog

from s3backups.exceptions import ArchiveFilesystemError, ArchiveFormatError

logger = structlog.get_logger()


async def create_tarball(source: Path, scratch_dir: Path) -> Path:
    """
    Archive source into a new tar file inside scratch_dir.

    Directories are walked recursively with parents emitted before their
    contents. Symbolic links are stored by target and never followed.
    A single file becomes a one-entry archive.

    Args:
        source: File or directory to archive
        scratch_dir: Directory the tarball is written to

    Returns:
        Path to the created tarball. The caller owns (and removes) it.
    """
    source = Path(os.path.abspath(source))
    base_name = source.name

    if not os.path.lexists(source):
        raise ArchiveFilesystemError(
            f"Source does not exist: {source}",
            details={"source": str(source)},
        )

    entries = 0

    def _prepare(tarinfo: tarfile.TarInfo) -> tarfile.TarInfo:
        nonlocal entries
        entries += 1
        # Every path of a hard-linked file carries its own bytes
        if tarinfo.islnk():
            tarinfo.type = tarfile.REGTYPE
            tarinfo.linkname = ""
            tarinfo.size = os.lstat(source.parent / tarinfo.name).st_size
        return tarinfo

    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f"{base_name}-", suffix=".tar", dir=scratch_dir)
    except OSError as e:
        raise ArchiveFilesystemError(
            f"Failed to create tarball in {scratch_dir}: {e}",
            details={"scratch_dir": str(scratch_dir)},
        ) from e

    tarball_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "wb") as fh:
            with tarfile.open(fileobj=fh, mode="w", format=tarfile.PAX_FORMAT) as tar:
                tar.add(source, arcname=base_name, recursive=True, filter=_prepare)
    except OSError as e:
        tarball_path.unlink(missing_ok=True)
        raise ArchiveFilesystemError(
            f"Failed to create tarball: {e}",
            details={"source": str(source)},
        ) from e

    logger.info(
        "tarball_created",
        source=str(source),
        tarball_path=str(tarball_path),
        entries=entries,
        size=tarball_path.stat().st_size,
    )

    return tarball_path


async def extract_tarball(stream: BinaryIO, target_dir: Path) -> None:
    """
    Extract a tar stream into target_dir, one entry at a time.

    Entries are applied in stream order with no reordering: a directory
    must appear before anything it contains. Extraction stops at the first
    error and leaves whatever was already written in place.

    Args:
        stream: Readable binary stream holding a tar archive
        target_dir: Directory entries are extracted under
    """
    target_dir = Path(target_dir)
    entries = 0

    try:
        with tarfile.open(fileobj=stream, mode="r|*") as tar:
            for member in tar:
                _extract_member(tar, member, target_dir)
                entries += 1
    except tarfile.TarError as e:
        raise ArchiveFormatError(
            f"Invalid tar stream: {e}",
            details={"target_dir": str(target_dir), "entries_extracted": entries},
        ) from e
    except OSError as e:
        raise ArchiveFilesystemError(
            f"Failed to read tar stream: {e}",
            details={"target_dir": str(target_dir), "entries_extracted": entries},
        ) from e

    logger.info("tarball_extracted", target_dir=str(target_dir), entries=entries)


def _is_within(root: Path, path: Path) -> bool:
    return path == root or root in path.parents


def _extract_member(tar: tarfile.TarFile, member: tarfile.TarInfo, target_dir: Path) -> None:
    """Write a single archive entry to disk."""
    # Security: Check for path traversal
    if member.name.startswith("/") or ".." in Path(member.name).parts:
        raise ArchiveFormatError(
            f"Unsafe path in tarball: {member.name}",
            details={"name": member.name},
        )

    root = target_dir.resolve()
    path = target_dir / member.name
    mode = member.mode & 0o7777

    # Symlinks extracted earlier must not lead a later entry outside root
    resolved = path.resolve() if member.isdir() else path.parent.resolve()
    if not _is_within(root, resolved):
        raise ArchiveFormatError(
            f"Entry escapes the target directory: {member.name}",
            details={"name": member.name, "resolved": str(resolved)},
        )

    try:
        if not member.isdir() and path.is_symlink():
            path.unlink()

        if member.isdir():
            os.makedirs(path, mode=mode, exist_ok=True)
            os.chmod(path, mode)
        elif member.issym():
            os.symlink(member.linkname, path)
        elif member.islnk():
            link_target = target_dir / member.linkname
            if not _is_within(root, link_target.resolve()):
                raise ArchiveFormatError(
                    f"Hard link escapes the target directory: {member.name}",
                    details={"name": member.name, "linkname": member.linkname},
                )
            if os.path.lexists(path):
                path.unlink()
            os.link(link_target, path)
        elif member.isreg():
            source = tar.extractfile(member)
            fd = os.open(path, os.O_CREAT | os.O_TRUNC | os.O_WRONLY, mode)
            with os.fdopen(fd, "wb") as fh:
                shutil.copyfileobj(source, fh)
            os.chmod(path, mode)
        else:
            raise ArchiveFormatError(
                f"Unsupported entry type in tarball: {member.name}",
                details={"name": member.name, "type": member.type.decode(errors="replace")},
            )
    except OSError as e:
        raise ArchiveFilesystemError(
            f"Failed to extract {member.name}: {e}",
            details={"name": member.name, "path": str(path)},
        ) from e

    logger.debug("tarball_entry_extracted", name=member.name, size=member.size)
