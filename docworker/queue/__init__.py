from docworker.queue.exceptions import TransportError
from docworker.queue.models import QueueMessage
from docworker.queue.sqs_consumer import SqsConsumer

__all__ = ["QueueMessage", "SqsConsumer", "TransportError"]
