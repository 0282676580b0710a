# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Storage backend protocol.

A backend maps opaque names in a flat namespace to byte payloads.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Backend(Protocol):
    """Read and write capability over a flat, byte-oriented namespace."""

    async def store(self, name: str, data: bytes) -> None:
        """
        Store data under name, replacing anything already there.

        Raises:
            StorageError: If the write fails
        """
        ...

    async def read(self, name: str) -> bytes:
        """
        Return the exact bytes previously stored under name.

        Raises:
            NoSuchName: If name was never stored
            StorageError: If the read fails for any other reason
        """
        ...
