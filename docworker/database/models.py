from dataclasses import dataclass
from decimal import Decimal
from typing import Any

STATUS_PROCESSED = "PROCESSED"


def job_id_for(message_id: str) -> str:
    """Derive the result key from a queue message id."""
    return f"job-{message_id}"


@dataclass(frozen=True)
class JobRecord:
    """Represents an item in the results table, keyed by jobId."""

    job_id: str
    timestamp: str
    bucket: str
    key: str
    sentiment: str
    sentiment_score: float
    extracted_text: str
    status: str = STATUS_PROCESSED

    def to_item(self) -> dict[str, Any]:
        """Render the record as a plain DynamoDB item (numbers as Decimal)."""
        return {
            "jobId": self.job_id,
            "timestamp": self.timestamp,
            "status": self.status,
            "s3Bucket": self.bucket,
            "s3Key": self.key,
            "sentiment": self.sentiment,
            "sentimentScorePositive": Decimal(str(self.sentiment_score)),
            "extractedText": self.extracted_text,
        }

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> "JobRecord":
        return cls(
            job_id=item["jobId"],
            timestamp=item["timestamp"],
            status=item.get("status", STATUS_PROCESSED),
            bucket=item["s3Bucket"],
            key=item["s3Key"],
            sentiment=item["sentiment"],
            sentiment_score=float(item.get("sentimentScorePositive", 0)),
            extracted_text=item.get("extractedText", ""),
        )
