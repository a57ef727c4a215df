"""Exceptions raised by resendpager."""

from typing import Any, Optional


class ResendPagerError(Exception):
    """Base class for resendpager errors."""


class InvalidArgument(ResendPagerError, ValueError):
    """Raised when a caller supplies arguments the API cannot honour.

    Attributes:
        item_index: Index of the workflow item being processed, if any.
        parameter: Name of the offending parameter, if known.
    """

    def __init__(
        self,
        message: str,
        item_index: Optional[int] = None,
        parameter: Optional[str] = None,
    ):
        super().__init__(message)
        self.item_index = item_index
        self.parameter = parameter


class TransportError(ResendPagerError):
    """Raised when an HTTP call to the Resend API fails."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        body: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.url = url
        self.body = body
