"""The prompt relay: one inbound POST becomes one generateContent call."""

from __future__ import annotations

import asyncio
import concurrent.futures
import base64
import json
import logging
from typing import Any

from prompt_relay.config import RelayConfig
from prompt_relay.errors import ClientError, RelayError, TransportFailure
from prompt_relay.gemini_client import GeminiClient
from prompt_relay.models import RelayResponse, UpstreamPayload, extract_text
from prompt_relay.redaction import install_redaction, redact

logger = logging.getLogger(__name__)


def request_method(event: dict[str, Any]) -> str:
    """HTTP method from a REST-style or HTTP-API-v2 style event."""
    method = event.get("httpMethod")
    if not method:
        http = (event.get("requestContext") or {}).get("http") or {}
        method = http.get("method", "")
    return str(method)


def parse_body(event: dict[str, Any]) -> Any:
    raw = event.get("body")
    if raw is None:
        raise ClientError("Invalid JSON body.")
    try:
        if event.get("isBase64Encoded"):
            raw = base64.b64decode(raw, validate=True)
        return json.loads(raw)
    except (ValueError, TypeError, RecursionError) as e:
        logger.warning("Error parsing request body: %s", e)
        raise ClientError("Invalid JSON body.") from None


def extract_prompt(body: Any) -> str:
    prompt = body.get("prompt") if isinstance(body, dict) else None
    if not isinstance(prompt, str) or not prompt:
        raise ClientError("Prompt is required in the request body.")
    return prompt


class PromptRelay:
    """Relays a prompt to Gemini and returns the generated text.

    ``handle`` never raises: every failure is converted to a RelayResponse.
    """

    def __init__(self, config: RelayConfig, client: GeminiClient | None = None) -> None:
        self.config = config
        self.client = client or GeminiClient(config)

    def __call__(self, event: dict[str, Any]) -> dict[str, Any]:
        """Synchronous entrypoint. Async hosts should await ``handle`` instead."""
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.handle(event)).to_event()
        # called from inside a running loop: run on a private loop in a worker thread
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, self.handle(event)).result().to_event()

    async def handle(self, event: dict[str, Any]) -> RelayResponse:
        logger.info("Prompt relay invoked")
        try:
            return await self._handle(event)
        except RelayError as e:
            return e.to_response()
        except Exception as e:
            logger.exception("Unexpected error while relaying prompt")
            reason = redact(str(e) or type(e).__name__, self.config.api_key)
            return TransportFailure(reason).to_response()
        finally:
            logger.info("Prompt relay finished")

    async def _handle(self, event: dict[str, Any]) -> RelayResponse:
        method = request_method(event)
        if method != "POST":
            logger.warning("Method not allowed: %s", method or "<none>")
            raise ClientError(
                "Method Not Allowed. This function only accepts POST requests.",
                status_code=405,
            )

        prompt = extract_prompt(parse_body(event))
        logger.info("Request body parsed. Prompt length: %d", len(prompt))

        try:
            api_key = self.config.require_api_key()
        except RelayError:
            logger.error("GEMINI_API_KEY is not set")
            raise
        install_redaction(api_key)
        logger.info("API key resolved (masked)")

        payload = UpstreamPayload.from_prompt(prompt)
        result = await self.client.generate_content(payload)

        text = extract_text(result)
        if text:
            logger.info("Generated text extracted. Length: %d", len(text))
        else:
            logger.warning("AI service returned no text (empty or filtered candidates)")
        return RelayResponse(200, {"text": text})
