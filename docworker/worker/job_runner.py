from docworker.config.settings import Settings
from docworker.logging.logger import Log
from docworker.processor.pipeline import Failure, PipelineOutcome
from docworker.processor.processor import Processor
from docworker.queue.exceptions import TransportError
from docworker.queue.models import QueueMessage
from docworker.queue.sqs_consumer import SqsConsumer
from docworker.worker.ack_policy import AckDecision, decide_ack


class JobRunner:
    """Run one message through the processor and apply the acknowledgment policy."""

    def __init__(
        self,
        processor: Processor,
        consumer: SqsConsumer,
        settings: Settings,
    ) -> None:
        self._processor = processor
        self._consumer = consumer
        self._settings = settings

    def run(self, message: QueueMessage) -> AckDecision:
        """Process a single delivery and delete it unless it should be retried."""
        with Log.message_context(message.message_id):
            Log.info(
                f"Running message {message.message_id} (receive {message.receive_count})"
            )
            outcome = self._processor.process(message)
            decision = decide_ack(
                outcome,
                message.receive_count,
                self._settings.max_receive_count,
            )
            self._log_decision(message, outcome, decision)
            if decision.deletes_message:
                self._delete(message)
            return decision

    def _log_decision(
        self,
        message: QueueMessage,
        outcome: PipelineOutcome,
        decision: AckDecision,
    ) -> None:
        if decision is AckDecision.ACKNOWLEDGE:
            Log.info(f"Message {message.message_id} processed successfully")
        elif decision is AckDecision.RETAIN:
            Log.warning(
                f"Message {message.message_id} not deleted; "
                f"it will be redelivered after the visibility timeout"
            )
        elif isinstance(outcome, Failure) and outcome.is_poison:
            Log.error(f"Discarding malformed message {message.message_id}: {outcome.cause}")
        else:
            Log.error(
                f"Discarding message {message.message_id} after "
                f"{message.receive_count} deliveries"
            )

    def _delete(self, message: QueueMessage) -> None:
        try:
            self._consumer.delete(message.receipt_handle)
        except TransportError as exc:
            Log.error(
                f"Could not delete message {message.message_id}, "
                f"it will be redelivered: {exc}"
            )
            return
        Log.debug(f"Message {message.message_id} deleted")
