from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from docworker.extraction.base import BaseTextExtractor
from docworker.processor.exceptions import ExtractionError
from docworker.processor.models import ExtractionResult, ObjectLocator


class TextractExtractor(BaseTextExtractor):
    """Extracts text with Amazon Textract, reading the object straight from S3."""

    def __init__(self, client: Any, max_chars: int) -> None:
        self._client = client
        self._max_chars = max_chars

    def extract(self, locator: ObjectLocator) -> ExtractionResult:
        try:
            response = self._client.detect_document_text(
                Document={"S3Object": {"Bucket": locator.bucket, "Name": locator.key}}
            )
        except (ClientError, BotoCoreError) as exc:
            raise ExtractionError(
                f"Textract failed for {locator.uri}: {exc}"
            ) from exc

        lines = [
            block["Text"]
            for block in response.get("Blocks") or []
            if block.get("BlockType") == "LINE" and block.get("Text")
        ]
        return ExtractionResult.from_lines(lines, self._max_chars)
