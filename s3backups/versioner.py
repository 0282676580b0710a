# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Version generators for backup artifacts.

A version token only has to tell two backups of the same resource apart;
the manager never orders or parses it.
"""

from datetime import datetime, UTC
from typing import Protocol, runtime_checkable


@runtime_checkable
class Versioner(Protocol):
    """Produces the version token for one backup."""

    def get_version(self) -> str:
        ...


class TimestampVersioner:
    """
    Filename-safe UTC timestamp in the format ``YYYYmmddTHHMMSS``.

    A backup taken on August 15, 2019 at 15:00:00 UTC gets the version
    ``20190815T150000``. Pass ``at`` to pin the timestamp instead of
    reading the clock on every call.
    """

    FORMAT = "%Y%m%dT%H%M%S"

    def __init__(self, at: datetime | None = None) -> None:
        self._at = at

    def get_version(self) -> str:
        moment = self._at or datetime.now(UTC)
        if moment.tzinfo is not None:
            moment = moment.astimezone(UTC)
        return moment.strftime(self.FORMAT)


class UlidVersioner:
    """ULID per call: sortable by creation time and unique within a second."""

    def get_version(self) -> str:
        from ulid import ULID

        return str(ULID())


class StaticVersioner:
    """
    Always returns the same version.

    Test-only: every backup of a resource lands on the same artifact name.
    """

    def __init__(self, version: str) -> None:
        self.version = version

    def get_version(self) -> str:
        return self.version
