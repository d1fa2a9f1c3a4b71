class ProcessorError(Exception):
    """Base exception for a pipeline stage that could not complete."""


class DecodeError(ProcessorError):
    """Raised when a message body is not a usable storage notification.

    Retrying reproduces the same failure, so the message is dropped.
    """


class ExtractionError(ProcessorError):
    """Raised when the text-extraction service call fails."""


class SentimentError(ProcessorError):
    """Raised when the sentiment-scoring service call fails."""


class PersistenceError(ProcessorError):
    """Raised when the result record cannot be written."""
