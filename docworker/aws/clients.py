"""boto3 client construction shared by every AWS-backed adapter."""

from typing import Any

import boto3
from botocore.config import Config

from docworker.config.settings import Settings
from docworker.logging.logger import Log


class AwsClientFactory:
    """Builds boto3 clients from application settings.

    All clients share the configured region, endpoint override and botocore
    timeout/retry policy. boto3 low-level clients are thread-safe, so one
    instance per service is reused by every worker thread.
    """

    def __init__(self, settings: Settings, session: boto3.Session | None = None) -> None:
        self._settings = settings
        self._session = session if session is not None else boto3.Session()
        self._config = Config(
            region_name=settings.aws_region,
            connect_timeout=settings.aws_connect_timeout_seconds,
            read_timeout=settings.aws_read_timeout_seconds,
            retries={"max_attempts": settings.aws_max_attempts, "mode": "standard"},
        )

    def client(self, service_name: str) -> Any:
        """Return a low-level client for service_name ("sqs", "dynamodb", ...)."""
        client = self._session.client(
            service_name,
            region_name=self._settings.aws_region,
            endpoint_url=self._settings.aws_endpoint_url,
            config=self._config,
        )
        Log.debug(f"{service_name} client initialized for {self._settings.aws_region}")
        return client

