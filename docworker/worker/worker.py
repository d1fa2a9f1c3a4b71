import threading
from concurrent.futures import Future, ThreadPoolExecutor

from docworker.config.settings import Settings
from docworker.logging.logger import Log
from docworker.queue.exceptions import TransportError
from docworker.queue.models import QueueMessage
from docworker.queue.sqs_consumer import SqsConsumer
from docworker.worker.job_runner import JobRunner


class Worker:
    """Poll loop: receive -> dispatch -> repeat, until stopped.

    With worker_concurrency == 1 each message is fully processed before the
    next receive. With a larger value, messages run on a thread pool and a
    semaphore caps how many are in flight; each thread acknowledges only the
    delivery it was handed.
    """

    SLOT_WAIT_SECONDS = 1.0

    def __init__(
        self,
        consumer: SqsConsumer,
        job_runner: JobRunner,
        settings: Settings,
        stop_event: threading.Event | None = None,
    ) -> None:
        self._consumer = consumer
        self._job_runner = job_runner
        self._settings = settings
        self._stop_event = stop_event if stop_event is not None else threading.Event()
        self._slots = threading.BoundedSemaphore(settings.worker_concurrency)
        self._fatal: BaseException | None = None

    def stop(self) -> None:
        """Stop receiving. Messages already dispatched run to completion."""
        if not self._stop_event.is_set():
            Log.info("Stop requested, finishing in-flight messages")
        self._stop_event.set()

    def run(self, max_messages: int | None = None) -> None:
        """Main poll loop. Runs until stop() is called or interrupted.

        If max_messages is set, stop after dispatching that many messages (for testing).

        Raises:
            Exception: whatever a pooled message run raised outside the
                pipeline's own error handling; the loop stops first.
        """
        concurrency = self._settings.worker_concurrency
        Log.info(f"Worker started (concurrency {concurrency}), polling {self._consumer.queue_url}")
        executor = (
            ThreadPoolExecutor(max_workers=concurrency, thread_name_prefix="docworker")
            if concurrency > 1
            else None
        )
        dispatched = 0
        try:
            while not self._stop_event.is_set():
                if max_messages is not None and dispatched >= max_messages:
                    break
                if not self._acquire_slot():
                    break
                message = self._try_receive()
                if message is None:
                    self._slots.release()
                    continue
                self._dispatch(message, executor)
                dispatched += 1
        except KeyboardInterrupt:
            Log.info("Worker shutting down gracefully")
        finally:
            if executor is not None:
                executor.shutdown(wait=True)

        if self._fatal is not None:
            raise self._fatal
        Log.info("Worker stopped")

    def _acquire_slot(self) -> bool:
        """Block until a slot frees up; False if stop was requested meanwhile."""
        while not self._stop_event.is_set():
            if self._slots.acquire(timeout=self.SLOT_WAIT_SECONDS):
                return True
        return False

    def _try_receive(self) -> QueueMessage | None:
        """Receive at most one message. Back off on queue errors."""
        try:
            messages = self._consumer.receive(
                wait_seconds=self._settings.receive_wait_seconds,
                max_messages=1,
            )
        except TransportError as exc:
            backoff = self._settings.error_backoff_seconds
            Log.error(f"Queue receive failed, retrying in {backoff}s: {exc}")
            self._stop_event.wait(backoff)
            return None
        return messages[0] if messages else None

    def _dispatch(self, message: QueueMessage, executor: ThreadPoolExecutor | None) -> None:
        if executor is None:
            self._run_one(message)
            return
        future = executor.submit(self._run_one, message)
        future.add_done_callback(self._on_pooled_run_done)

    def _run_one(self, message: QueueMessage) -> None:
        try:
            self._job_runner.run(message)
        finally:
            self._slots.release()

    def _on_pooled_run_done(self, future: Future[None]) -> None:
        exc = future.exception()
        if exc is None:
            return
        Log.error(f"Unexpected error in message worker, stopping: {exc!r}")
        if self._fatal is None:
            self._fatal = exc
        self._stop_event.set()
