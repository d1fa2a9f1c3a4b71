"""Decodes S3 object-created notifications carried in queue message bodies."""

import json
from typing import Any
from urllib.parse import unquote_plus

from docworker.processor.exceptions import DecodeError
from docworker.processor.models import ObjectLocator


class NotificationDecoder:
    """Turns a raw notification body into an ObjectLocator.

    Only the first record of the envelope is used; one upload produces one
    notification.
    """

    def decode(self, body: str | bytes) -> ObjectLocator:
        """Parse body as an S3 event envelope.

        Raises:
            DecodeError: if the body is not JSON, has no records, or the first
                record lacks a bucket name or object key.
        """
        envelope = _parse_envelope(body)
        record = _first_record(envelope)
        s3 = record.get("s3")
        if not isinstance(s3, dict):
            raise DecodeError("Record has no 's3' section")
        bucket = _require_name(s3.get("bucket"), "name", "bucket name")
        raw_key = _require_name(s3.get("object"), "key", "object key")
        key = unquote_plus(raw_key)
        if not key:
            raise DecodeError("Object key decodes to an empty string")
        return ObjectLocator(bucket=bucket, key=key)


def _parse_envelope(body: str | bytes) -> dict[str, Any]:
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Body is not valid UTF-8: {exc}") from exc
    try:
        envelope = json.loads(body)
    except json.JSONDecodeError as exc:
        raise DecodeError(f"Body is not valid JSON: {exc}") from exc
    if not isinstance(envelope, dict):
        raise DecodeError("Notification envelope must be a JSON object")
    return envelope


def _first_record(envelope: dict[str, Any]) -> dict[str, Any]:
    records = envelope.get("Records")
    if not isinstance(records, list) or not records:
        event = envelope.get("Event")
        detail = f" (event {event!r})" if event else ""
        raise DecodeError(f"Notification has no records{detail}")
    record = records[0]
    if not isinstance(record, dict):
        raise DecodeError("Notification record must be an object")
    return record


def _require_name(section: Any, field: str, label: str) -> str:
    if not isinstance(section, dict):
        raise DecodeError(f"Record is missing the {label}")
    value = section.get(field)
    if not value or not isinstance(value, str):
        raise DecodeError(f"Record {label} must be a non-empty string")
    return value
