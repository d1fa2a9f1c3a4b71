from docworker.extraction.base import BaseTextExtractor
from docworker.extraction.textract_adapter import TextractExtractor

__all__ = ["BaseTextExtractor", "TextractExtractor"]
