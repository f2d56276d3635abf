"""Thin async client for the Gemini generateContent REST endpoint."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from prompt_relay.config import RelayConfig
from prompt_relay.errors import TransportFailure, UpstreamRejection, UpstreamTimeout
from prompt_relay.models import UpstreamPayload
from prompt_relay.redaction import redact

logger = logging.getLogger(__name__)


class GeminiClient:
    """Issues one generateContent call per request, bounded by ``config.timeout_s``."""

    def __init__(
        self,
        config: RelayConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self.transport = transport

    @property
    def endpoint_preview(self) -> str:
        """The endpoint without its query string. Safe to log."""
        return f"{self.config.base_url.rstrip('/')}/{self.config.model}:generateContent"

    def build_url(self) -> str:
        return f"{self.endpoint_preview}?key={self.config.require_api_key()}"

    async def generate_content(self, payload: UpstreamPayload) -> dict[str, Any]:
        """POST ``payload`` upstream and return the decoded success body.

        Raises UpstreamTimeout when the deadline passes (the in-flight request
        is cancelled and its connection closed), UpstreamRejection for non-2xx
        answers and TransportFailure for everything else.
        """
        url = self.build_url()
        logger.info("Calling %s with %.0fs timeout", self.endpoint_preview, self.config.timeout_s)
        try:
            return await asyncio.wait_for(self._post(url, payload), timeout=self.config.timeout_s)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.error("AI service call timed out after %.1fs: %s", self.config.timeout_s, type(e).__name__)
            raise UpstreamTimeout() from None
        except httpx.HTTPError as e:
            reason = redact(str(e) or type(e).__name__, self.config.api_key)
            logger.error("Transport error calling AI service: %s", reason)
            raise TransportFailure(reason) from None

    async def _post(self, url: str, payload: UpstreamPayload) -> dict[str, Any]:
        async with httpx.AsyncClient(
            transport=self.transport,
            timeout=httpx.Timeout(self.config.timeout_s),
        ) as client:
            response = await client.post(
                url,
                json=payload.to_dict(),
                headers={"content-type": "application/json"},
            )
            logger.info("AI service responded with status %d", response.status_code)

            if not response.is_success:
                details = _best_effort_json(response)
                logger.error(
                    "AI service returned non-success status %d %s",
                    response.status_code, response.reason_phrase,
                )
                raise UpstreamRejection(response.status_code, response.reason_phrase, details)

            try:
                return response.json()
            except ValueError as e:
                logger.error("AI service success body is not valid JSON: %s", e)
                raise TransportFailure(str(e)) from None


def _best_effort_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None
