# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Command line interface.

    s3backups backup -f notes.txt
    s3backups backup -d /srv/site
    s3backups restore -d /srv/site

Store coordinates come from the environment (see s3backups.env).
"""

import asyncio
import logging

import click
import structlog

from s3backups.backend.s3 import S3Backend
from s3backups.commands import DIRECTORY, FILE, CommandResult, backup_path, restore_path
from s3backups.env import create_config_from_env
from s3backups.errors import explain_conflicting_targets, explain_missing_target
from s3backups.exceptions import ConfigurationError
from s3backups.manager import BackupManager
from s3backups.versioner import TimestampVersioner


def configure_logging(verbose: bool) -> None:
    """Route structlog output at INFO, or DEBUG when verbose."""
    level = logging.DEBUG if verbose else logging.INFO
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(level))


def _resolve_target(file: str | None, directory: str | None) -> tuple[str, str]:
    if file and directory:
        raise click.UsageError(explain_conflicting_targets())
    if not file and not directory:
        raise click.UsageError(explain_missing_target())
    if file:
        return file, FILE
    return directory, DIRECTORY


def _manager(ctx: click.Context) -> BackupManager:
    obj = ctx.obj
    if "manager" not in obj:
        try:
            config = create_config_from_env()
        except ConfigurationError as e:
            raise click.ClickException(str(e)) from e

        obj["config"] = config
        obj["scratch_dir"] = config.scratch_dir
        obj["manager"] = BackupManager(S3Backend.from_config(config), TimestampVersioner())
    return obj["manager"]


def _report(ctx: click.Context, result: CommandResult) -> None:
    click.echo(result.summary)
    if not result.success:
        ctx.exit(1)


target_options = [
    click.option("-f", "--file", "file", default=None, help="The file to process. Mutually exclusive with -d."),
    click.option(
        "-d",
        "--directory",
        "directory",
        default=None,
        help="The directory to process. Stored as a tarball. Mutually exclusive with -f.",
    ),
]


def with_target_options(func):
    for option in reversed(target_options):
        func = option(func)
    return func


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Versioned backups of files and directories to S3."""
    configure_logging(verbose)
    ctx.ensure_object(dict)


@main.command()
@with_target_options
@click.pass_context
def backup(ctx: click.Context, file: str | None, directory: str | None) -> None:
    """Back up a file or directory to the remote store."""
    path, kind = _resolve_target(file, directory)
    manager = _manager(ctx)

    result = asyncio.run(backup_path(manager, path, kind, scratch_dir=ctx.obj.get("scratch_dir")))
    _report(ctx, result)


@main.command()
@with_target_options
@click.pass_context
def restore(ctx: click.Context, file: str | None, directory: str | None) -> None:
    """Restore a file or directory from the remote store."""
    path, kind = _resolve_target(file, directory)
    manager = _manager(ctx)

    result = asyncio.run(restore_path(manager, path, kind))
    _report(ctx, result)


if __name__ == "__main__":
    main()
