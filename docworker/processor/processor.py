from docworker.aws.clients import AwsClientFactory
from docworker.config.settings import Settings
from docworker.database.repositories.job_results_repository import JobResultsRepository
from docworker.extraction.textract_adapter import TextractExtractor
from docworker.logging.logger import Log
from docworker.processor.decoder import NotificationDecoder
from docworker.processor.exceptions import ProcessorError
from docworker.processor.pipeline import (
    Failure,
    PipelineContext,
    PipelineOutcome,
    PipelineStep,
    Success,
)
from docworker.processor.steps import (
    DecodeStep,
    ExtractTextStep,
    PersistResultStep,
    ScoreSentimentStep,
)
from docworker.queue.models import QueueMessage
from docworker.sentiment.comprehend_adapter import ComprehendSentimentAnalyzer


class Processor:
    """Runs one queue message through the document pipeline.

    Pipeline: decode -> extract -> score -> persist. Steps run strictly in
    order and the first stage error ends the run. No step is retried here;
    redelivery by the queue is the retry.
    """

    def __init__(self, steps: list[PipelineStep]) -> None:
        self._steps = steps

    def process(self, message: QueueMessage) -> PipelineOutcome:
        """Return Success once every step ran, or Failure at the first stage error.

        Exceptions other than ProcessorError are not stage failures and propagate.
        """
        context = PipelineContext(message=message)
        for step in self._steps:
            try:
                context = step.run(context)
            except ProcessorError as exc:
                Log.error(
                    f"Message {message.message_id} failed entering {step.stage.value}: {exc}"
                )
                return Failure(stage=step.stage, cause=exc)
            context.stage = step.stage

        if context.record is None:
            raise RuntimeError("Pipeline finished without producing a result record")
        return Success(record=context.record)


def build_processor(
    settings: Settings,
    clients: AwsClientFactory | None = None,
) -> Processor:
    """Build a Processor wired to Textract, Comprehend and DynamoDB."""
    clients = clients if clients is not None else AwsClientFactory(settings)
    extractor = TextractExtractor(
        clients.client("textract"),
        max_chars=settings.max_extracted_chars,
    )
    analyzer = ComprehendSentimentAnalyzer(
        clients.client("comprehend"),
        language_code=settings.sentiment_language_code,
    )
    repository = JobResultsRepository(clients.client("dynamodb"), settings.table_name)
    return Processor(
        steps=[
            DecodeStep(NotificationDecoder()),
            ExtractTextStep(extractor),
            ScoreSentimentStep(analyzer),
            PersistResultStep(repository),
        ]
    )
