"""Error taxonomy for the prompt relay.

Every failure the handler can hit is one of these. Each knows the HTTP
status and JSON body it turns into, so the handler converts them at a
single boundary.
"""

from __future__ import annotations

from typing import Any

from prompt_relay.models import RelayResponse


class RelayError(Exception):
    """Base class for failures that map onto an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_body(self) -> dict[str, Any]:
        return {"message": self.message}

    def to_response(self) -> RelayResponse:
        return RelayResponse(self.status_code, self.to_body())


class ClientError(RelayError):
    """The caller sent something we cannot process (4xx)."""

    status_code = 400


class ConfigurationError(RelayError):
    """The server is missing required configuration."""

    status_code = 500


class UpstreamRejection(RelayError):
    """The upstream API answered with a non-success status."""

    def __init__(self, status_code: int, reason: str, details: Any = None) -> None:
        super().__init__(f"Error from AI service: {reason}", status_code)
        self.reason = reason
        self.details = details

    def to_body(self) -> dict[str, Any]:
        return {"message": self.message, "details": self.details}


class UpstreamTimeout(RelayError):
    status_code = 504

    def __init__(self) -> None:
        super().__init__("AI service call timed out. Please try again.")


class TransportFailure(RelayError):
    """Network, DNS or decoding failure while talking to the upstream API."""

    status_code = 500

    def __init__(self, reason: str) -> None:
        super().__init__("Failed to connect to the AI service due to a server-side error.")
        self.reason = reason

    def to_body(self) -> dict[str, Any]:
        return {"message": self.message, "error": self.reason}
