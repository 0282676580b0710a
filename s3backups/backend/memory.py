# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
In-memory backend. Only meant for tests.
"""

from typing import Dict

from s3backups.exceptions import NoSuchName


class InMemoryBackend:
    """Backend that keeps every stored payload in a dict."""

    def __init__(self) -> None:
        self.backups: Dict[str, bytes] = {}

    async def store(self, name: str, data: bytes) -> None:
        self.backups[name] = bytes(data)

    async def read(self, name: str) -> bytes:
        try:
            return self.backups[name]
        except KeyError:
            raise NoSuchName(name) from None
