from typing import Any

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore.exceptions import BotoCoreError, ClientError

from docworker.database.models import JobRecord
from docworker.processor.exceptions import PersistenceError


class JobResultsRepository:
    """DynamoDB operations for the job results table."""

    def __init__(self, client: Any, table_name: str) -> None:
        self._client = client
        self._table_name = table_name
        self._serializer = TypeSerializer()
        self._deserializer = TypeDeserializer()

    def upsert(self, record: JobRecord) -> None:
        """Write the record, replacing any item with the same jobId.

        Writing identical content twice leaves the table unchanged.

        Raises:
            PersistenceError: if the write is rejected or cannot be sent.
        """
        item = {
            name: self._serializer.serialize(value)
            for name, value in record.to_item().items()
        }
        try:
            self._client.put_item(TableName=self._table_name, Item=item)
        except (ClientError, BotoCoreError) as exc:
            raise PersistenceError(
                f"Failed to write {record.job_id} to {self._table_name}: {exc}"
            ) from exc

    def find_by_id(self, job_id: str) -> JobRecord | None:
        """Find a result by job id. Useful for tests.

        Raises:
            PersistenceError: if the read is rejected or cannot be sent.
        """
        try:
            response = self._client.get_item(
                TableName=self._table_name,
                Key={"jobId": {"S": job_id}},
                ConsistentRead=True,
            )
        except (ClientError, BotoCoreError) as exc:
            raise PersistenceError(f"Failed to read {job_id}: {exc}") from exc

        raw = response.get("Item")
        if raw is None:
            return None
        item = {name: self._deserializer.deserialize(value) for name, value in raw.items()}
        return JobRecord.from_item(item)
