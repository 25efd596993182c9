"""Errors raised by the Tailscale API client."""

from __future__ import annotations

from enum import Enum
from typing import Optional

# Response bodies are kept for diagnostics but never printed in full
MAX_BODY_LENGTH = 500


class ErrorKind(Enum):
    """Category of an API call failure."""

    TRANSPORT = "transport"
    STATUS = "status"
    DECODE = "decode"


class TailscaleAPIError(Exception):
    """Failure of a single Tailscale API call.

    The underlying cause (a requests or JSON exception) is chained through
    ``__cause__`` by the client.

    Attributes:
        kind: Failure category
        message: Short description of the failure
        url: Request URL
        status_code: HTTP status code (STATUS errors only)
        body: Raw response body (STATUS errors only)
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.url = url
        self.status_code = status_code
        self.body = body
        super().__init__(str(self))

    @property
    def body_snippet(self) -> str:
        """Response body truncated for display."""
        if not self.body:
            return ""
        body = self.body.strip()
        if len(body) > MAX_BODY_LENGTH:
            return body[:MAX_BODY_LENGTH] + "..."
        return body

    def __str__(self) -> str:
        if self.kind == ErrorKind.STATUS:
            return f"{self.message} {self.status_code}, body: {self.body_snippet}"
        if self.__cause__ is not None:
            return f"{self.message}: {self.__cause__}"
        return self.message
