class TransportError(Exception):
    """Raised when the queue endpoint cannot be reached or rejects a request."""
