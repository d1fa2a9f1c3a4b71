import signal
import sys
from types import FrameType

from pydantic import ValidationError

from docworker.aws.clients import AwsClientFactory
from docworker.config.settings import Settings
from docworker.logging.logger import Log
from docworker.processor.processor import build_processor
from docworker.queue.sqs_consumer import SqsConsumer
from docworker.worker.job_runner import JobRunner
from docworker.worker.worker import Worker


def _install_signal_handlers(worker: Worker) -> None:
    def _handle(signum: int, _frame: FrameType | None) -> None:
        Log.info(f"Received {signal.Signals(signum).name}")
        worker.stop()

    signal.signal(signal.SIGTERM, _handle)
    signal.signal(signal.SIGINT, _handle)


def main() -> None:
    """Entry point: load settings -> build clients -> start worker loop."""
    try:
        settings = Settings()
    except ValidationError as exc:
        Log.configure("INFO")
        Log.error(
            "Invalid configuration (QUEUE_URL, TABLE_NAME and AWS_REGION are required): "
            f"{exc}"
        )
        sys.exit(1)
    Log.configure(settings.log_level)

    clients = AwsClientFactory(settings)
    consumer = SqsConsumer(clients.client("sqs"), settings.queue_url)
    processor = build_processor(settings, clients)
    job_runner = JobRunner(processor, consumer, settings)
    worker = Worker(consumer, job_runner, settings)
    _install_signal_handlers(worker)

    try:
        worker.run()
    except Exception:
        Log.exception("Polling loop exited unexpectedly")
        sys.exit(1)


if __name__ == "__main__":
    main()
