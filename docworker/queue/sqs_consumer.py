from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from docworker.logging.logger import Log
from docworker.queue.exceptions import TransportError
from docworker.queue.models import QueueMessage


class SqsConsumer:
    """Receives and acknowledges messages on a single SQS queue."""

    def __init__(self, client: Any, queue_url: str) -> None:
        self._client = client
        self._queue_url = queue_url

    @property
    def queue_url(self) -> str:
        return self._queue_url

    def receive(self, *, wait_seconds: int, max_messages: int = 1) -> list[QueueMessage]:
        """Long-poll the queue for up to max_messages deliveries.

        Returns an empty list when the wait elapses with nothing to deliver.

        Raises:
            TransportError: if the receive request fails.
        """
        try:
            response = self._client.receive_message(
                QueueUrl=self._queue_url,
                MaxNumberOfMessages=max_messages,
                WaitTimeSeconds=wait_seconds,
                AttributeNames=["All"],
                MessageAttributeNames=["All"],
            )
        except (ClientError, BotoCoreError) as exc:
            raise TransportError(f"SQS receive failed: {exc}") from exc

        messages = [QueueMessage.from_sqs(raw) for raw in response.get("Messages", [])]
        if messages:
            Log.debug(f"Received {len(messages)} message(s) from {self._queue_url}")
        return messages

    def delete(self, receipt_handle: str) -> None:
        """Acknowledge exactly the delivery identified by receipt_handle.

        Raises:
            TransportError: if the delete request fails.
        """
        try:
            self._client.delete_message(
                QueueUrl=self._queue_url,
                ReceiptHandle=receipt_handle,
            )
        except (ClientError, BotoCoreError) as exc:
            raise TransportError(f"SQS delete failed: {exc}") from exc
