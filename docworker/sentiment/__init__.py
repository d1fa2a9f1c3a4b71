from docworker.sentiment.base import BaseSentimentAnalyzer
from docworker.sentiment.comprehend_adapter import ComprehendSentimentAnalyzer

__all__ = ["BaseSentimentAnalyzer", "ComprehendSentimentAnalyzer"]
