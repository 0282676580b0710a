# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Lock records and backend naming.

A resource may have many stored versions. Its lock points at the current
version to restore from and at the previous one as an easy rollback
target. Locks are values: every backup stores a brand-new lock under the
same name instead of editing the old one.

Naming contract inside the backend namespace:

- ``<resource>_<version>.bak`` holds an artifact
- ``<resource>.lock`` holds the lock as JSON
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, UTC

from s3backups.exceptions import MalformedLockError


def artifact_name(resource: str, version: str) -> str:
    """Name an artifact is stored under for a resource and version token."""
    return f"{resource}_{version}.bak"


def lock_name(resource: str) -> str:
    """Name a resource's lock is stored under."""
    return f"{resource}.lock"


@dataclass(frozen=True)
class Lock:
    """Pointer record for a resource's current and previous artifacts."""

    name: str
    current: str
    previous: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def new(cls, name: str, current: str, previous: str = "") -> "Lock":
        return cls(name=name, current=current, previous=previous)

    @property
    def id(self) -> str:
        """The backend name this lock is stored under."""
        return lock_name(self.name)

    def shift(self, next_artifact: str) -> "Lock":
        """Return a new lock advanced to next_artifact."""
        return Lock.new(self.name, next_artifact, self.current)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "current": self.current,
            "previous": self.previous,
            "created_at": self.created_at.isoformat(),
        }

    def to_json(self) -> bytes:
        return json.dumps(self.to_dict()).encode("utf-8")

    @classmethod
    def from_json(cls, raw: bytes) -> "Lock":
        """
        Decode a stored lock.

        Raises:
            MalformedLockError: If raw is not a valid lock record
        """
        try:
            data = json.loads(raw)
        except (UnicodeDecodeError, ValueError) as e:
            raise MalformedLockError(f"Lock is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise MalformedLockError(
                "Lock must be a JSON object",
                details={"type": type(data).__name__},
            )

        missing = [key for key in ("name", "current", "created_at") if key not in data]
        if missing:
            raise MalformedLockError(
                "Lock is missing required fields",
                details={"missing": missing},
            )

        previous = data.get("previous")
        if previous is None:
            previous = ""
        for key, value in (
            ("name", data["name"]),
            ("current", data["current"]),
            ("previous", previous),
            ("created_at", data["created_at"]),
        ):
            if not isinstance(value, str):
                raise MalformedLockError(
                    f"Lock field {key!r} must be a string",
                    details={"field": key},
                )

        try:
            created_at = datetime.fromisoformat(data["created_at"])
        except ValueError as e:
            raise MalformedLockError(
                f"Lock has an invalid created_at: {data['created_at']!r}",
                details={"name": data["name"]},
            ) from e

        return cls(
            name=data["name"],
            current=data["current"],
            previous=previous,
            created_at=created_at,
        )


def next_lock(existing: Lock | None, resource: str, artifact: str) -> Lock:
    """
    Compute the lock that follows a successful artifact upload.

    The chain shifts forward by exactly one step; anything older than the
    previous artifact is no longer reachable through the lock.
    """
    if existing is None:
        return Lock.new(resource, artifact)
    return Lock.new(resource, artifact, existing.current)
