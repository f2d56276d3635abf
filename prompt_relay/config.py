"""Runtime configuration for the prompt relay."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from prompt_relay.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash-preview-05-20"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_TIMEOUT_S = 20.0

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")


def resolve_api_key(explicit: str | None, *env_names: str) -> str:
    """Return the explicit key if set, else the first non-empty env var."""
    if explicit and explicit.strip():
        return explicit.strip()
    for name in env_names:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return ""


@dataclass(frozen=True)
class RelayConfig:
    api_key: str | None = field(default=None, repr=False)
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    timeout_s: float = DEFAULT_TIMEOUT_S

    @classmethod
    def from_env(cls) -> RelayConfig:
        """Build a config from the process environment."""
        timeout_raw = os.environ.get("GEMINI_TIMEOUT_SECONDS", "").strip()
        timeout_s = DEFAULT_TIMEOUT_S
        if timeout_raw:
            try:
                timeout_s = float(timeout_raw)
            except ValueError:
                logger.warning(
                    "Ignoring invalid GEMINI_TIMEOUT_SECONDS=%r, using %.1fs",
                    timeout_raw, DEFAULT_TIMEOUT_S,
                )
            if timeout_s <= 0:
                timeout_s = DEFAULT_TIMEOUT_S

        return cls(
            api_key=resolve_api_key(None, *API_KEY_ENV_VARS) or None,
            model=os.environ.get("GEMINI_MODEL", "").strip() or DEFAULT_MODEL,
            timeout_s=timeout_s,
        )

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    def require_api_key(self) -> str:
        if not self.api_key:
            raise ConfigurationError(
                "Server API key is not configured. "
                "Please set GEMINI_API_KEY in the environment."
            )
        return self.api_key
