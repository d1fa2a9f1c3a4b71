from abc import ABC, abstractmethod

from docworker.processor.models import ExtractionResult, ObjectLocator


class BaseTextExtractor(ABC):
    """Contract for all text extraction adapters."""

    @abstractmethod
    def extract(self, locator: ObjectLocator) -> ExtractionResult:
        """Extract line-level text from the stored document.

        Args:
            locator: Bucket and key the service reads the document from.

        Returns:
            ExtractionResult with lines in service order and capped text.

        Raises:
            ExtractionError: on any service or transport failure.
        """
