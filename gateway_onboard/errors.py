"""Exception taxonomy for gateway onboarding."""

from __future__ import annotations

from typing import Optional


class OnboardError(Exception):
    """Base class for every error raised by gateway_onboard."""


class GatewayError(OnboardError):
    """A remote call to the gateway did not succeed."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation}: {message}")
        self.operation = operation


class TransportError(GatewayError):
    """The request never produced an HTTP response (DNS, connect, timeout...)."""

    def __init__(self, operation: str, cause: Exception) -> None:
        super().__init__(operation, f"transport error: {cause}")
        self.cause = cause


class RequestFailed(GatewayError):
    """The gateway answered with a non-2xx status."""

    def __init__(self, operation: str, status: int, body: str) -> None:
        super().__init__(operation, f"failed with status {status} - {body}")
        self.status = status
        self.body = body


class DecodeFailed(GatewayError):
    """The response body does not have the expected JSON shape."""

    def __init__(self, operation: str, detail: str, body: Optional[str] = None) -> None:
        super().__init__(operation, f"unexpected response body: {detail}")
        self.detail = detail
        self.body = body


class DomainError(OnboardError, ValueError):
    """Invalid onboarding input, e.g. a zero input price used as a divisor."""


__all__ = [
    "OnboardError",
    "GatewayError",
    "TransportError",
    "RequestFailed",
    "DecodeFailed",
    "DomainError",
]
