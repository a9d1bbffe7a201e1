"""Context-to-payload adapter for LLM invocation.

Architectural role:
    Provides the text-generation entrypoint used by actions. Bridges a raw
    context string and a custom system prompt to transport (`llm.client`).

Model call flow:
    context -> model-class resolution -> payload construction ->
    `client.send_request(...)`.

Determinism:
    Payload construction is deterministic for fixed inputs and configuration.
    Generated output remains non-deterministic because inference runs remotely.
"""

from milk_imagegen.core.types import ModelClass
from milk_imagegen.llm import provider_config
from milk_imagegen.llm.client import send_request


def resolve_model_name(runtime, model_class: ModelClass) -> str:
    """Map a model class to a concrete model name.

    Runtime settings (`SMALL_MODEL`, `MEDIUM_MODEL`, `LARGE_MODEL`) override
    the import-time defaults in `provider_config.MODEL_NAMES`.
    """
    override = provider_config.resolve_setting(runtime, f"{model_class.name}_MODEL")
    return override or provider_config.MODEL_NAMES[model_class]


def generate_text(
    runtime,
    context: str,
    model_class: ModelClass = ModelClass.MEDIUM,
    custom_system_prompt: str | None = None,
) -> str:
    """Generate one completion for `context`.

    Args:
        runtime: Host runtime used for provider/credential lookup.
        context: User-side text forwarded as the single user message.
        model_class: Model-size bucket.
        custom_system_prompt: Optional system instruction.

    Returns:
        Completion text.

    Failure scenarios:
        Provider, credential and HTTP errors from `client.send_request` are not
        caught here.
    """
    provider = provider_config.resolve_setting(runtime, "PROVIDER") or provider_config.PROVIDER
    key_setting = provider_config.PROVIDERS.get(provider, {}).get("key_setting")
    api_key = provider_config.resolve_setting(runtime, key_setting) if key_setting else None

    messages = []
    if custom_system_prompt:
        messages.append({"role": "system", "content": custom_system_prompt})
    messages.append({"role": "user", "content": context})

    payload = {
        "model": resolve_model_name(runtime, model_class),
        "messages": messages,
        "temperature": 0.7,
    }

    return send_request(payload, provider, api_key)
