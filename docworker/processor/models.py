from dataclasses import dataclass
from enum import Enum

NO_TEXT_PLACEHOLDER = "<no text found>"


@dataclass(frozen=True)
class ObjectLocator:
    """Bucket and literal (URL-decoded) key of a stored document."""

    bucket: str
    key: str

    @property
    def uri(self) -> str:
        return f"s3://{self.bucket}/{self.key}"


@dataclass(frozen=True)
class ExtractionResult:
    """Line-level text recognized in a document."""

    lines: tuple[str, ...]
    text: str

    @classmethod
    def from_lines(cls, lines: list[str], max_chars: int) -> "ExtractionResult":
        """Join lines in service order and cap the text at max_chars.

        Falls back to NO_TEXT_PLACEHOLDER when nothing was recognized.
        """
        text = "\n".join(lines)[:max_chars]
        return cls(lines=tuple(lines), text=text or NO_TEXT_PLACEHOLDER)

    @property
    def is_empty(self) -> bool:
        return self.text == NO_TEXT_PLACEHOLDER


class SentimentLabel(str, Enum):
    POSITIVE = "POSITIVE"
    NEGATIVE = "NEGATIVE"
    NEUTRAL = "NEUTRAL"
    MIXED = "MIXED"
    ERROR = "ERROR"

    @classmethod
    def parse(cls, raw: object) -> "SentimentLabel":
        """Map a service label onto the fixed set; anything unknown is ERROR."""
        if isinstance(raw, str):
            try:
                return cls(raw.upper())
            except ValueError:
                pass
        return cls.ERROR


@dataclass(frozen=True)
class SentimentResult:
    """Sentiment label plus the positive-confidence score in [0, 1]."""

    label: SentimentLabel
    positive_score: float
