"""Keep the API key out of log output."""

from __future__ import annotations

import logging

REDACTED = "***"

# httpx logs every request URL at INFO, and the key travels as a query param.
# Logger filters do not propagate to children, so each logger is listed.
THIRD_PARTY_LOGGERS = (
    "httpx",
    "httpcore",
    "httpcore.connection",
    "httpcore.http11",
    "httpcore.http2",
    "httpcore.proxy",
)


def redact(text: str, secret: str | None) -> str:
    if not secret or not text:
        return text
    return text.replace(secret, REDACTED)


class RedactSecretFilter(logging.Filter):
    """Rewrites records whose message contains the secret."""

    def __init__(self, secret: str) -> None:
        super().__init__()
        self.secret = secret

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except Exception:  # malformed record
            return True
        if self.secret and self.secret in message:
            record.msg = redact(message, self.secret)
            record.args = None
        return True


def install_redaction(secret: str | None) -> None:
    """Attach a single RedactSecretFilter for ``secret`` to each logger in THIRD_PARTY_LOGGERS.

    Only those named loggers are covered; records from other loggers pass unchanged.
    """
    if not secret:
        return
    for name in THIRD_PARTY_LOGGERS:
        target = logging.getLogger(name)
        for existing in list(target.filters):
            if isinstance(existing, RedactSecretFilter):
                target.removeFilter(existing)
        target.addFilter(RedactSecretFilter(secret))
