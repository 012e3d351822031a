"""Exceptions raised by the eVatR client."""

from __future__ import annotations


class EvatrError(Exception):
    """Base class for every failure surfaced by this package."""


class InvalidInputError(EvatrError, ValueError):
    """The request is missing or lacks the fields a check needs. Raised before any I/O."""


class TransportError(EvatrError):
    """The HTTP fetch failed (connection, timeout, or non-2xx status).

    The underlying httpx exception is chained as ``__cause__`` and kept on ``cause``.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class DecodeError(EvatrError):
    """The response is not well-formed XML or carries a value outside the protocol."""

    def __init__(self, message: str, field: str | None = None, value: str | None = None) -> None:
        super().__init__(message)
        self.field = field
        self.value = value
