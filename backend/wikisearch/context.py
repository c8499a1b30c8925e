"""Per-request context: correlation id and the logger bound to it."""

from typing import Any
from uuid import uuid4

from wikisearch.utils.logging import BoundLogger


class RequestContext:
    """Created once per inbound request and stored on ``request.state``.

    ``bind`` replaces the logger with one carrying extra fields, so anything
    logged later for the same request (including the access log line)
    carries them as well.
    """

    def __init__(self, correlation_id: str, logger: BoundLogger) -> None:
        self.correlation_id = correlation_id
        self.logger = logger

    @classmethod
    def new(cls, base_logger: BoundLogger) -> "RequestContext":
        correlation_id = uuid4().hex
        return cls(correlation_id, base_logger.bind(correlation_id=correlation_id))

    def bind(self, **fields: Any) -> BoundLogger:
        self.logger = self.logger.bind(**fields)
        return self.logger
