from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from docworker.processor.exceptions import SentimentError
from docworker.processor.models import SentimentLabel, SentimentResult
from docworker.sentiment.base import BaseSentimentAnalyzer

# DetectSentiment rejects documents larger than this many UTF-8 bytes.
MAX_TEXT_BYTES = 5000


def clip_utf8(text: str, max_bytes: int = MAX_TEXT_BYTES) -> str:
    """Trim text to at most max_bytes of UTF-8 without splitting a character."""
    encoded = text.encode("utf-8")
    if len(encoded) <= max_bytes:
        return text
    return encoded[:max_bytes].decode("utf-8", errors="ignore")


class ComprehendSentimentAnalyzer(BaseSentimentAnalyzer):
    """Scores sentiment with Amazon Comprehend DetectSentiment."""

    def __init__(self, client: Any, language_code: str = "en") -> None:
        self._client = client
        self._language_code = language_code

    def analyze(self, text: str) -> SentimentResult:
        if not text:
            raise ValueError("Sentiment text must be non-empty")
        try:
            response = self._client.detect_sentiment(
                Text=clip_utf8(text),
                LanguageCode=self._language_code,
            )
        except (ClientError, BotoCoreError) as exc:
            raise SentimentError(f"Comprehend sentiment failed: {exc}") from exc

        label = SentimentLabel.parse(response.get("Sentiment"))
        scores = response.get("SentimentScore") or {}
        positive = float(scores.get("Positive") or 0.0)
        return SentimentResult(label=label, positive_score=min(1.0, max(0.0, positive)))
