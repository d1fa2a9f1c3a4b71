"""Maps a pipeline outcome to what happens to the source message."""

from enum import Enum

from docworker.processor.pipeline import PipelineOutcome, Success


class AckDecision(str, Enum):
    ACKNOWLEDGE = "ACKNOWLEDGE"
    DISCARD = "DISCARD"
    RETAIN = "RETAIN"

    @property
    def deletes_message(self) -> bool:
        return self is not AckDecision.RETAIN


def decide_ack(
    outcome: PipelineOutcome,
    receive_count: int,
    max_receive_count: int = 0,
) -> AckDecision:
    """Decide whether the delivery is deleted.

    Success is acknowledged. A decode failure is discarded because a retry
    sees the same body. Any other failure is retained for redelivery after
    the visibility timeout, unless max_receive_count is set and this delivery
    has reached it. max_receive_count=0 leaves the cap to the queue's own
    dead-letter redrive policy.
    """
    if isinstance(outcome, Success):
        return AckDecision.ACKNOWLEDGE
    if outcome.is_poison:
        return AckDecision.DISCARD
    if max_receive_count and receive_count >= max_receive_count:
        return AckDecision.DISCARD
    return AckDecision.RETAIN
