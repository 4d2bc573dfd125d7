"""Failures a single proxy request can end in, each mapped to an HTTP status."""

from typing import Any


class ProxyError(Exception):
    """Base class; ``status_code`` and ``message`` become the error response."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ClientInputError(ProxyError):
    """Bad JSON, missing or oversized prompt, or a non-SELECT statement."""

    status_code = 400


class MethodNotAllowed(ProxyError):
    status_code = 405

    def __init__(self, message: str = "POST only"):
        super().__init__(message)


class GenerationError(ProxyError):
    """Raised when the generation service fails or returns no usable SQL."""

    status_code = 502


class QuotaExhaustedError(GenerationError):
    """Every configured model answered with a quota error."""

    def __init__(self, message: str = "Model quota exhausted – please retry later"):
        super().__init__(message)


class ExecutionUnavailableError(ProxyError):
    """The execution service could not be reached at all."""

    status_code = 502


class ExecutionError(ProxyError):
    """
    The execution service answered with a non-2xx status.
    ``body`` is relayed to the caller unchanged, with the same status.
    """

    def __init__(self, status_code: int, body: Any):
        super().__init__(f"Execution service returned {status_code}")
        self.status_code = status_code
        self.body = body
