import itertools
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from docworker.config.settings import Settings
from docworker.database.repositories.job_results_repository import JobResultsRepository
from docworker.extraction.textract_adapter import TextractExtractor
from docworker.processor.decoder import NotificationDecoder
from docworker.processor.processor import Processor
from docworker.processor.steps import (
    DecodeStep,
    ExtractTextStep,
    PersistResultStep,
    ScoreSentimentStep,
)
from docworker.queue.sqs_consumer import SqsConsumer
from docworker.sentiment.comprehend_adapter import ComprehendSentimentAnalyzer
from docworker.worker.job_runner import JobRunner
from docworker.worker.worker import Worker


class FakeSqsClient:
    """In-memory SQS queue.

    Received messages stay in flight until deleted; expire_visibility() puts
    undeleted ones back on the queue, as the visibility timeout would.
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._handles = itertools.count(1)
        self._pending: list[dict[str, Any]] = []
        self._in_flight: dict[str, dict[str, Any]] = {}
        self.deleted: list[str] = []
        self._lock = threading.Lock()

    def send(self, body: str) -> str:
        message_id = f"msg-{next(self._ids)}"
        with self._lock:
            self._pending.append({"id": message_id, "body": body, "receives": 0})
        return message_id

    @property
    def depth(self) -> int:
        with self._lock:
            return len(self._pending) + len(self._in_flight)

    def expire_visibility(self) -> None:
        with self._lock:
            self._pending.extend(self._in_flight.values())
            self._in_flight.clear()

    def receive_message(self, **_kwargs: Any) -> dict[str, Any]:
        with self._lock:
            if not self._pending:
                return {}
            entry = self._pending.pop(0)
            entry["receives"] += 1
            handle = f"rh-{next(self._handles)}"
            self._in_flight[handle] = entry
        return {
            "Messages": [
                {
                    "MessageId": entry["id"],
                    "ReceiptHandle": handle,
                    "Body": entry["body"],
                    "Attributes": {"ApproximateReceiveCount": str(entry["receives"])},
                }
            ]
        }

    def delete_message(self, *, QueueUrl: str, ReceiptHandle: str) -> None:  # noqa: N803
        _ = QueueUrl
        with self._lock:
            if ReceiptHandle not in self._in_flight:
                raise ClientError(
                    {"Error": {"Code": "ReceiptHandleIsInvalid", "Message": "gone"}},
                    "DeleteMessage",
                )
            del self._in_flight[ReceiptHandle]
            self.deleted.append(ReceiptHandle)


class FakeDynamoDbClient:
    """In-memory single-table DynamoDB keyed by the jobId string attribute."""

    def __init__(self) -> None:
        self.items: dict[str, dict[str, Any]] = {}
        self.put_calls = 0
        self.failures_remaining = 0

    def put_item(self, *, TableName: str, Item: dict[str, Any]) -> dict[str, Any]:  # noqa: N803
        _ = TableName
        self.put_calls += 1
        if self.failures_remaining:
            self.failures_remaining -= 1
            raise ClientError(
                {"Error": {"Code": "ProvisionedThroughputExceededException", "Message": "slow"}},
                "PutItem",
            )
        self.items[Item["jobId"]["S"]] = dict(Item)
        return {}

    def get_item(self, *, TableName: str, Key: dict[str, Any], **_kwargs: Any) -> dict[str, Any]:  # noqa: N803
        _ = TableName
        item = self.items.get(Key["jobId"]["S"])
        return {"Item": dict(item)} if item is not None else {}


@dataclass
class PipelineHarness:
    sqs: FakeSqsClient
    dynamodb: FakeDynamoDbClient
    textract: MagicMock
    comprehend: MagicMock
    repository: JobResultsRepository
    build_worker: Callable[..., Worker]


def _textract_lines(*lines: str) -> dict[str, Any]:
    return {"Blocks": [{"BlockType": "LINE", "Text": line} for line in lines]}


@pytest.fixture()
def harness(settings: Settings) -> PipelineHarness:
    sqs = FakeSqsClient()
    dynamodb = FakeDynamoDbClient()
    textract = MagicMock()
    comprehend = MagicMock()
    textract.detect_document_text.return_value = _textract_lines("Revenue grew strongly")
    comprehend.detect_sentiment.return_value = {
        "Sentiment": "POSITIVE",
        "SentimentScore": {"Positive": 0.97},
    }
    repository = JobResultsRepository(dynamodb, settings.table_name)

    def _build_worker(**overrides: Any) -> Worker:
        worker_settings = settings.model_copy(update=overrides)
        consumer = SqsConsumer(sqs, worker_settings.queue_url)
        processor = Processor(
            steps=[
                DecodeStep(NotificationDecoder()),
                ExtractTextStep(
                    TextractExtractor(textract, max_chars=worker_settings.max_extracted_chars)
                ),
                ScoreSentimentStep(ComprehendSentimentAnalyzer(comprehend)),
                PersistResultStep(repository),
            ]
        )
        job_runner = JobRunner(processor, consumer, worker_settings)
        return Worker(consumer, job_runner, worker_settings)

    return PipelineHarness(
        sqs=sqs,
        dynamodb=dynamodb,
        textract=textract,
        comprehend=comprehend,
        repository=repository,
        build_worker=_build_worker,
    )
