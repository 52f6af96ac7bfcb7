"""AWS client construction.

This module encapsulates boto3 session creation for the payload bucket,
data table, and webhook queue. Handles are built once per process.
"""

from __future__ import annotations

from typing import Any

import boto3

from core.config import ReadmapConfig


def create_session(config: ReadmapConfig) -> Any:
    """Create a boto3 session honoring optional profile and region.

    Args:
        config: Runtime config with optional session settings.

    Returns:
        Boto3 session.
    """
    return boto3.session.Session(**_build_session_kwargs(config))


def create_s3_client(session: Any) -> Any:
    """Create an S3 client from a session."""
    return session.client("s3")


def create_sqs_client(session: Any) -> Any:
    """Create an SQS client from a session."""
    return session.client("sqs")


def create_dynamodb_table(session: Any, table_name: str) -> Any:
    """Create a DynamoDB table resource handle.

    Args:
        session: Boto3 session.
        table_name: Data table name.

    Returns:
        DynamoDB ``Table`` resource.
    """
    return session.resource("dynamodb").Table(table_name)


def _build_session_kwargs(config: ReadmapConfig) -> dict[str, str]:
    """Build boto3 Session kwargs from config.

    Args:
        config: Runtime config.

    Returns:
        Session keyword arguments.
    """
    kwargs: dict[str, str] = {}
    if config.aws_profile:
        kwargs["profile_name"] = config.aws_profile
    if config.aws_region:
        kwargs["region_name"] = config.aws_region
    return kwargs
