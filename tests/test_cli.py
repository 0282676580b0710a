# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Command line tests.

The manager is injected through the click context object so no store
is contacted.
"""

import asyncio
from pathlib import Path

import pytest
from click.testing import CliRunner

from s3backups.backend import InMemoryBackend
from s3backups.cli import main
from s3backups.manager import BackupManager
from s3backups.versioner import StaticVersioner


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cli_manager() -> BackupManager:
    return BackupManager(InMemoryBackend(), StaticVersioner("V1"))


def test_backup_and_restore_file(runner, cli_manager, temp_dir: Path):
    path = temp_dir / "notes.txt"
    path.write_text("keep me\n")

    result = runner.invoke(main, ["backup", "-f", str(path)], obj={"manager": cli_manager})

    assert result.exit_code == 0, result.output
    assert f"Successfully backed up {path}" in result.output
    assert asyncio.run(cli_manager.restore(str(path))) == b"keep me\n"

    path.write_text("oops\n")
    result = runner.invoke(main, ["restore", "--file", str(path)], obj={"manager": cli_manager})

    assert result.exit_code == 0, result.output
    assert path.read_text() == "keep me\n"


def test_backup_directory(runner, cli_manager, temp_dir: Path):
    source = temp_dir / "site"
    source.mkdir()
    (source / "a.txt").write_text("a")

    result = runner.invoke(
        main,
        ["backup", "-d", str(source)],
        obj={"manager": cli_manager, "scratch_dir": temp_dir},
    )

    assert result.exit_code == 0, result.output
    assert cli_manager.backend.backups[f"{source}_V1.bak"]


def test_restore_missing_backup_fails(runner, cli_manager, temp_dir: Path):
    path = temp_dir / "never.txt"

    result = runner.invoke(main, ["restore", "-f", str(path)], obj={"manager": cli_manager})

    assert result.exit_code == 1
    assert "No backup exists for" in result.output


def test_file_and_directory_are_mutually_exclusive(runner, cli_manager):
    result = runner.invoke(
        main,
        ["backup", "-f", "a.txt", "-d", "site"],
        obj={"manager": cli_manager},
    )

    assert result.exit_code != 0
    assert "Only one of -f/--file or -d/--directory is allowed" in result.output


def test_target_is_required(runner, cli_manager):
    result = runner.invoke(main, ["restore"], obj={"manager": cli_manager})

    assert result.exit_code != 0
    assert "You must specify either a file (-f) or a directory (-d)" in result.output


def test_missing_bucket_env_is_reported(runner, temp_dir: Path, monkeypatch):
    monkeypatch.delenv("S3BACKUPS_S3_BUCKET", raising=False)
    path = temp_dir / "notes.txt"
    path.write_text("x")

    result = runner.invoke(main, ["backup", "-f", str(path)])

    assert result.exit_code == 1
    assert "S3BACKUPS_S3_BUCKET" in result.output
