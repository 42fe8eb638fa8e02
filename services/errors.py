from __future__ import annotations

from typing import Optional


class GatewayError(Exception):
    """Base for every failure the people data gateway reports."""

    kind = "gateway"


class ValidationError(GatewayError):
    """Caller-supplied identifier is malformed; the request never left the process."""

    kind = "validation"


class TransportError(GatewayError):
    """Data service unreachable, or it answered with a non-success status."""

    kind = "transport"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(GatewayError):
    """Response body could not be read as the expected envelope."""

    kind = "decode"
