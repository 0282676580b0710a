# SPDX-License-Identifier: LGPL-2.1-only
# Copyright (c) 2026 Akshat Kotpalliwar (alias IntegerAlex)

"""
Human-friendly error message helpers for s3backups.

These helpers centralize wording for common configuration errors so that
the environment loader and the CLI present consistent, actionable messages.
"""


def explain_missing_bucket_env() -> str:
    """
    Explain that the S3 bucket environment variable is missing.
    """

    return (
        "S3 bucket is not configured. "
        "Set the S3BACKUPS_S3_BUCKET environment variable or pass bucket=... to BackupsConfig()."
    )


def explain_invalid_endpoint_env(value: str | None) -> str:
    """
    Explain that S3BACKUPS_S3_ENDPOINT is invalid.
    """

    return (
        f"Invalid S3BACKUPS_S3_ENDPOINT value: {value!r}. "
        "It must be an http:// or https:// URL, e.g. https://nyc3.digitaloceanspaces.com."
    )


def explain_invalid_scratch_dir_env(value: str | None) -> str:
    """
    Explain that S3BACKUPS_SCRATCH_DIR does not point at a directory.
    """

    return (
        f"Invalid S3BACKUPS_SCRATCH_DIR value: {value!r}. "
        "It must be an existing directory where temporary tarballs can be written."
    )


def explain_conflicting_targets() -> str:
    """
    Explain that both a file and a directory were given on the command line.
    """

    return "Only one of -f/--file or -d/--directory is allowed."


def explain_missing_target() -> str:
    """
    Explain that neither a file nor a directory was given on the command line.
    """

    return "You must specify either a file (-f) or a directory (-d)."
