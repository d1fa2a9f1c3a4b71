from abc import ABC, abstractmethod

from docworker.processor.models import SentimentResult


class BaseSentimentAnalyzer(ABC):
    """Contract for all sentiment scoring adapters."""

    @abstractmethod
    def analyze(self, text: str) -> SentimentResult:
        """Score the sentiment of text.

        Args:
            text: Non-empty extracted text (or the no-text placeholder).

        Returns:
            SentimentResult with label and positive-confidence score.

        Raises:
            SentimentError: on any service or transport failure.
        """
