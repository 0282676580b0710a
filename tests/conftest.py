# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Test fixtures for s3backups tests.

Provides temporary directories, in-memory and moto-backed S3 backends,
and small helpers for building directory trees.
"""

import os
import tempfile
import uuid
from pathlib import Path
from typing import Generator

import pytest
import pytest_asyncio

from s3backups.backend import InMemoryBackend
from s3backups.exceptions import StorageError
from s3backups.manager import BackupManager
from s3backups.versioner import StaticVersioner

# Dummy credentials so botocore never looks for real ones
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def manager(backend: InMemoryBackend) -> BackupManager:
    return BackupManager(backend, StaticVersioner("VERSION"))


@pytest.fixture(scope="session")
def moto_endpoint() -> Generator[str, None, None]:
    """
    Run moto's S3 server in a background thread.

    aiobotocore talks real HTTP, so the server mode is used instead of
    in-process patching.
    """
    from moto.server import ThreadedMotoServer

    server = ThreadedMotoServer(ip_address="127.0.0.1", port=0, verbose=False)
    server.start()
    host, port = server.get_host_and_port()
    yield f"http://{host}:{port}"
    server.stop()


@pytest_asyncio.fixture
async def s3_bucket(moto_endpoint: str) -> str:
    """Create a fresh bucket on the moto server."""
    from aiobotocore.session import get_session

    bucket = f"test-bucket-{uuid.uuid4().hex[:8]}"
    session = get_session()

    async with session.create_client(
        "s3",
        region_name="us-east-1",
        endpoint_url=moto_endpoint,
    ) as client:
        await client.create_bucket(Bucket=bucket)

    return bucket


@pytest.fixture
def s3_backend(moto_endpoint: str, s3_bucket: str):
    from s3backups.backend import S3Backend

    return S3Backend(bucket=s3_bucket, region="us-east-1", endpoint_url=moto_endpoint)


class FailingBackend(InMemoryBackend):
    """
    In-memory backend that fails on selected names.

    Names listed in fail_store raise StorageError on store, names listed
    in fail_read raise StorageError on read.
    """

    def __init__(self, fail_store=(), fail_read=()) -> None:
        super().__init__()
        self.fail_store = set(fail_store)
        self.fail_read = set(fail_read)

    async def store(self, name: str, data: bytes) -> None:
        if name in self.fail_store:
            raise StorageError(f"Simulated store failure for {name}")
        await super().store(name, data)

    async def read(self, name: str) -> bytes:
        if name in self.fail_read:
            raise StorageError(f"Simulated read failure for {name}")
        return await super().read(name)


def make_tree(root: Path) -> Path:
    """
    Build a small directory tree under root and return its top directory.

    site/
      index.html         (0o644)
      empty.txt          (0 bytes, 0o600)
      bin/run.sh         (0o755)
      assets/css/app.css (4 KiB)
      current -> assets/css/app.css
    """
    site = root / "site"
    (site / "bin").mkdir(parents=True)
    (site / "assets" / "css").mkdir(parents=True)

    (site / "index.html").write_text("<h1>hello</h1>\n")
    (site / "index.html").chmod(0o644)

    (site / "empty.txt").write_bytes(b"")
    (site / "empty.txt").chmod(0o600)

    (site / "bin" / "run.sh").write_text("#!/bin/sh\necho run\n")
    (site / "bin" / "run.sh").chmod(0o755)

    (site / "assets" / "css" / "app.css").write_bytes(b"body { margin: 0 }\n" * 216)
    (site / "assets").chmod(0o750)

    os.symlink("assets/css/app.css", site / "current")

    return site


def snapshot_tree(top: Path) -> dict:
    """Map each relative path under top to (kind, mode, content-or-target)."""
    entries = {}
    for dirpath, dirnames, filenames in os.walk(top):
        for name in dirnames + filenames:
            path = Path(dirpath) / name
            rel = str(path.relative_to(top))
            st = path.lstat()
            if path.is_symlink():
                entries[rel] = ("symlink", None, os.readlink(path))
            elif path.is_dir():
                entries[rel] = ("dir", st.st_mode & 0o7777, None)
            else:
                entries[rel] = ("file", st.st_mode & 0o7777, path.read_bytes())
    return entries
