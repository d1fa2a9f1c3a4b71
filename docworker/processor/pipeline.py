from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from docworker.database.models import JobRecord, job_id_for
from docworker.processor.exceptions import DecodeError, ProcessorError
from docworker.processor.models import ExtractionResult, ObjectLocator, SentimentResult
from docworker.queue.models import QueueMessage


class Stage(str, Enum):
    RECEIVED = "RECEIVED"
    DECODED = "DECODED"
    EXTRACTED = "EXTRACTED"
    SCORED = "SCORED"
    PERSISTED = "PERSISTED"


@dataclass(slots=True)
class PipelineContext:
    message: QueueMessage
    stage: Stage = Stage.RECEIVED
    locator: ObjectLocator | None = None
    extraction: ExtractionResult | None = None
    sentiment: SentimentResult | None = None
    record: JobRecord | None = None

    @property
    def job_id(self) -> str:
        return job_id_for(self.message.message_id)


@dataclass(frozen=True)
class Success:
    """The message reached PERSISTED."""

    record: JobRecord


@dataclass(frozen=True)
class Failure:
    """The pipeline stopped while entering stage."""

    stage: Stage
    cause: ProcessorError

    @property
    def is_poison(self) -> bool:
        """True when retrying can never succeed (undecodable notification)."""
        return isinstance(self.cause, DecodeError)


PipelineOutcome = Success | Failure


class PipelineStep(ABC):
    stage: Stage

    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
