import json
from collections.abc import Callable
from urllib.parse import quote_plus

import pytest
from botocore.exceptions import ClientError

from docworker.config.settings import Settings
from docworker.queue.models import QueueMessage


@pytest.fixture()
def settings() -> Settings:
    """Settings with the three required values and fast loop timings."""
    return Settings(
        queue_url="https://sqs.us-east-1.amazonaws.com/123456789012/doc-queue",
        table_name="doc-results",
        aws_region="us-east-1",
        receive_wait_seconds=0,
        error_backoff_seconds=0,
    )


@pytest.fixture()
def s3_event_body() -> Callable[..., str]:
    """Build an S3 ObjectCreated notification body; the key is URL-encoded as S3 does."""

    def _build(bucket: str = "docs", key: str = "uploads/report.pdf") -> str:
        return json.dumps(
            {
                "Records": [
                    {
                        "eventSource": "aws:s3",
                        "eventName": "ObjectCreated:Put",
                        "s3": {
                            "bucket": {"name": bucket},
                            "object": {"key": quote_plus(key, safe="/"), "size": 1024},
                        },
                    }
                ]
            }
        )

    return _build


@pytest.fixture()
def make_message(s3_event_body: Callable[..., str]) -> Callable[..., QueueMessage]:
    def _build(
        message_id: str = "msg-1",
        body: str | None = None,
        receive_count: int = 1,
        receipt_handle: str | None = None,
    ) -> QueueMessage:
        return QueueMessage(
            message_id=message_id,
            receipt_handle=receipt_handle or f"rh-{message_id}-{receive_count}",
            body=s3_event_body() if body is None else body,
            receive_count=receive_count,
        )

    return _build


@pytest.fixture()
def client_error() -> Callable[..., ClientError]:
    def _build(code: str = "ServiceUnavailable", operation: str = "Operation") -> ClientError:
        return ClientError({"Error": {"Code": code, "Message": "test"}}, operation)

    return _build
