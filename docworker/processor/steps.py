from collections.abc import Callable
from datetime import datetime, timezone

from docworker.database.models import JobRecord
from docworker.database.repositories.job_results_repository import JobResultsRepository
from docworker.extraction.base import BaseTextExtractor
from docworker.logging.logger import Log
from docworker.processor.decoder import NotificationDecoder
from docworker.processor.models import NO_TEXT_PLACEHOLDER
from docworker.processor.pipeline import PipelineContext, PipelineStep, Stage
from docworker.sentiment.base import BaseSentimentAnalyzer


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DecodeStep(PipelineStep):
    stage = Stage.DECODED

    def __init__(self, decoder: NotificationDecoder) -> None:
        self._decoder = decoder

    def run(self, context: PipelineContext) -> PipelineContext:
        context.locator = self._decoder.decode(context.message.body)
        Log.info(f"Processing file: {context.locator.uri}")
        return context


class ExtractTextStep(PipelineStep):
    stage = Stage.EXTRACTED

    def __init__(self, extractor: BaseTextExtractor) -> None:
        self._extractor = extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.locator is None:
            raise ValueError("PipelineContext.locator must be set before extraction")
        context.extraction = self._extractor.extract(context.locator)
        Log.info(
            f"Extracted {len(context.extraction.lines)} lines "
            f"({len(context.extraction.text)} chars) from {context.locator.uri}"
        )
        return context


class ScoreSentimentStep(PipelineStep):
    stage = Stage.SCORED

    def __init__(self, analyzer: BaseSentimentAnalyzer) -> None:
        self._analyzer = analyzer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.extraction is None:
            raise ValueError("PipelineContext.extraction must be set before scoring")
        text = context.extraction.text or NO_TEXT_PLACEHOLDER
        context.sentiment = self._analyzer.analyze(text)
        Log.info(
            f"Sentiment: {context.sentiment.label.value} "
            f"(positive score {context.sentiment.positive_score:.4f})"
        )
        return context


class PersistResultStep(PipelineStep):
    stage = Stage.PERSISTED

    def __init__(
        self,
        repository: JobResultsRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._repository = repository
        self._clock = clock

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.locator is None or context.extraction is None or context.sentiment is None:
            raise ValueError("PipelineContext must be fully populated before persist")
        record = JobRecord(
            job_id=context.job_id,
            timestamp=self._clock().isoformat(),
            bucket=context.locator.bucket,
            key=context.locator.key,
            sentiment=context.sentiment.label.value,
            sentiment_score=context.sentiment.positive_score,
            extracted_text=context.extraction.text,
        )
        self._repository.upsert(record)
        context.record = record
        Log.info(f"Result {record.job_id} written")
        return context
