from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class QueueMessage:
    """One delivery of a queue message.

    receipt_handle identifies this delivery only; a redelivery of the same
    message arrives with a new handle and the same message_id.
    """

    message_id: str
    receipt_handle: str
    body: str
    receive_count: int = 1
    attributes: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_sqs(cls, raw: dict[str, Any]) -> "QueueMessage":
        attributes = dict(raw.get("Attributes") or {})
        return cls(
            message_id=raw["MessageId"],
            receipt_handle=raw["ReceiptHandle"],
            body=raw.get("Body") or "",
            receive_count=int(attributes.get("ApproximateReceiveCount", 1)),
            attributes=attributes,
        )
