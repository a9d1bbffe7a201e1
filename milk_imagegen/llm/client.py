"""Provider-specific transport client for LLM requests.

Architectural role:
    Executes one HTTP request against the configured model provider and returns
    the completion text.

Model invocation flow:
    `service.generate_text` -> `send_request(payload, api_key)` -> provider branch
    (OpenAI-compatible / Anthropic) -> stripped completion text.

Retry behavior:
    No retry loop is implemented. Each HTTP call is attempted once with
    `REQUEST_TIMEOUT_SECONDS`.

Failure handling model:
    Errors are raised, not normalized. Unknown providers and missing keys raise
    `LLMConfigurationError`; HTTP failures raise `requests.HTTPError` through
    `raise_for_status()`; transport failures propagate from `requests`.

Security considerations:
    API keys are placed in headers only and never logged.
"""

import logging

import requests

from milk_imagegen.errors import LLMConfigurationError
from milk_imagegen.llm.provider_config import (
    ANTHROPIC_VERSION,
    PROVIDERS,
    REQUEST_TIMEOUT_SECONDS,
)

logger = logging.getLogger(__name__)


def _to_anthropic_payload(payload: dict) -> dict:
    """Remap an OpenAI-style chat payload to the Anthropic messages schema.

    The system message moves to the top-level `system` field; `max_tokens`
    defaults to 1024.
    """
    system_prompt = None
    messages = []

    for msg in payload.get("messages", []):
        role = msg.get("role")
        content = msg.get("content", "")
        if role == "system":
            if content and content.strip():
                system_prompt = content.strip()
        elif role in ("user", "assistant"):
            messages.append({"role": role, "content": content})

    anthropic_payload = {
        "model": payload["model"],
        "max_tokens": payload.get("max_tokens", 1024),
        "messages": messages,
    }
    if system_prompt:
        anthropic_payload["system"] = system_prompt
    if "temperature" in payload:
        anthropic_payload["temperature"] = payload["temperature"]

    return anthropic_payload


def send_request(payload: dict, provider: str, api_key: str | None) -> str:
    """Send one non-streaming completion request and return its text.

    Args:
        payload: OpenAI-style chat payload (`model`, `messages`, sampling fields).
        provider: Key into `PROVIDERS`.
        api_key: Resolved credential; may be `None` for keyless providers.

    Returns:
        Completion text with surrounding whitespace removed.

    Raises:
        LLMConfigurationError: Unknown provider or missing credential.
        requests.HTTPError: Non-2xx provider response.
    """
    config = PROVIDERS.get(provider)
    if not config:
        raise LLMConfigurationError(f"Unknown LLM provider: {provider}")

    if config["key_setting"] and not api_key:
        raise LLMConfigurationError(f"{config['key_setting']} is not configured")

    headers = {"Content-Type": "application/json"}

    if provider == "anthropic":
        headers["x-api-key"] = api_key
        headers["anthropic-version"] = ANTHROPIC_VERSION
        body = _to_anthropic_payload(payload)
    else:
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        body = payload

    logger.debug("Sending completion request to %s (model=%s)", provider, payload.get("model"))
    response = requests.post(
        config["url"],
        headers=headers,
        json=body,
        timeout=REQUEST_TIMEOUT_SECONDS,
    )
    response.raise_for_status()
    data = response.json()

    if provider == "anthropic":
        return data["content"][0]["text"].strip()
    return data["choices"][0]["message"]["content"].strip()
