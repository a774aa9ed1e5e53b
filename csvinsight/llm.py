"""
Thin async client for an OpenAI-compatible chat completions endpoint.
"""

import logging
from typing import Dict, List

import httpx

from . import config
from .errors import ExternalServiceFailure

logger = logging.getLogger(__name__)


async def call_llm(messages: List[Dict], temperature: float = None, max_tokens: int = None) -> str:
    """
    Send one chat completion request and return the reply text.

    A single attempt against LLM_MODEL: no key rotation, no retry. Any
    transport error, non-200 status or empty reply raises
    ExternalServiceFailure with a generic message; details go to the log.
    """
    if not config.LLM_API_KEY:
        logger.warning("LLM call skipped: no API key configured")
        raise ExternalServiceFailure("The AI report service is not configured.")

    headers = {
        "Authorization": f"Bearer {config.LLM_API_KEY}",
        "Content-Type": "application/json",
    }
    payload = {
        "model": config.LLM_MODEL.replace("groq/", ""),
        "messages": messages,
        "temperature": config.LLM_TEMPERATURE if temperature is None else temperature,
        "max_tokens": config.LLM_MAX_TOKENS if max_tokens is None else max_tokens,
    }

    try:
        async with httpx.AsyncClient(timeout=config.LLM_TIMEOUT_SECONDS) as client:
            response = await client.post(
                f"{config.LLM_BASE_URL}/chat/completions",
                headers=headers,
                json=payload,
            )
    except httpx.TimeoutException as e:
        logger.error("LLM timeout (%s): %s", payload["model"], e)
        raise ExternalServiceFailure() from e
    except httpx.HTTPError as e:
        logger.error("LLM transport error (%s): %s", payload["model"], e)
        raise ExternalServiceFailure() from e

    if response.status_code != 200:
        logger.error("LLM error (%s): %s - %s", payload["model"], response.status_code, response.text[:200])
        raise ExternalServiceFailure()

    try:
        content = response.json()["choices"][0]["message"]["content"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        logger.error("LLM returned an unexpected payload: %s", e)
        raise ExternalServiceFailure() from e

    if not content or not content.strip():
        logger.error("LLM returned an empty reply (%s)", payload["model"])
        raise ExternalServiceFailure()
    return content.strip()
