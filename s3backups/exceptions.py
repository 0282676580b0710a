# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
S3 Backups Exceptions - Custom exceptions for the s3backups package.
"""


class S3BackupsError(Exception):
    """Base exception for all s3backups errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(S3BackupsError):
    """Raised when configuration is invalid."""

    pass


class NoSuchName(S3BackupsError):
    """
    Raised by a backend when a name has never been stored.

    Deliberately not a StorageError: lock lookup branches on this.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} does not exist", details={"name": name})


class StorageError(S3BackupsError):
    """Raised when a backend read or write fails for any other reason."""

    pass


class MalformedLockError(S3BackupsError):
    """Raised when a stored lock cannot be decoded."""

    pass


class BackupError(S3BackupsError):
    """Raised when backup operations fail."""

    pass


class NoBackupError(BackupError):
    """Raised when restoring a resource that was never backed up."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No backup exists for {name}", details={"name": name})


class ArchiveError(S3BackupsError):
    """Base class for archive creation and extraction failures."""

    pass


class ArchiveFormatError(ArchiveError):
    """Raised when an archive stream is corrupt or holds an unsupported entry."""

    pass


class ArchiveFilesystemError(ArchiveError):
    """Raised when a path cannot be read or written during archiving."""

    pass
