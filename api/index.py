"""Serverless entrypoint for the prompt relay.

Deploy this as the function behind ``POST /api``. The platform passes an
event dict (``httpMethod``, ``body``, ``isBase64Encoded``) and expects a
``{"statusCode", "headers", "body"}`` dict back.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# Ensure project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from prompt_relay.config import RelayConfig
from prompt_relay.handler import PromptRelay

load_dotenv()
logging.basicConfig(level=logging.INFO)


def handler(event, context=None):
    """Serverless function handler."""
    # Config is resolved per invocation.
    relay = PromptRelay(RelayConfig.from_env())
    return relay(event)
