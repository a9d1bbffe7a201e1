"""Image service dispatcher used by the image-generation action.

Role in pipeline:
    - Receives prompt and fixed generation parameters from the action.
    - Resolves provider and credential through runtime settings.
    - Wraps the provider client's output into an `ImageGenerationResult`.

Error handling strategy:
    Provider and transport exceptions are logged and folded into
    `success=False` results. Callers only see a binary outcome plus an error
    string for diagnostics.

Determinism:
    Provider selection is deterministic for fixed settings. Output content is
    externally non-deterministic.
"""

import logging
from dataclasses import dataclass, field

import requests

from milk_imagegen.errors import ImageProviderError
from milk_imagegen.image.client import send_image_request
from milk_imagegen.llm import provider_config

logger = logging.getLogger(__name__)


@dataclass
class ImageGenerationResult:
    """Outcome of one image-generation call.

    Attributes:
        success: Whether the provider call completed.
        data: Image references (URLs or base64 data-URIs); may be empty even on success.
        error: Diagnostic text for failed calls.
    """

    success: bool
    data: list[str] = field(default_factory=list)
    error: str | None = None


def generate_image(
    runtime,
    prompt: str,
    model_id: str = "dall-e-3",
    width: int = 1024,
    height: int = 1024,
    count: int = 1,
) -> ImageGenerationResult:
    """Generate images via the configured provider adapter.

    Args:
        runtime: Host runtime used for provider/credential lookup.
        prompt: Text prompt for generation.
        model_id: Provider model identifier.
        width: Requested width.
        height: Requested height.
        count: Number of images requested.

    Returns:
        `ImageGenerationResult`; never raises for provider or HTTP failures.
    """
    provider = provider_config.resolve_setting(runtime, "IMAGE_PROVIDER") or provider_config.IMAGE_PROVIDER
    key_setting = provider_config.IMAGE_PROVIDERS.get(provider, {}).get("key_setting")
    api_key = provider_config.resolve_setting(runtime, key_setting) if key_setting else None

    try:
        images = send_image_request(provider, api_key, prompt, model_id, width, height, count)
    except (ImageProviderError, requests.RequestException) as exc:
        logger.exception("Image generation failed (provider=%s, model=%s)", provider, model_id)
        return ImageGenerationResult(success=False, error=str(exc))

    logger.info("Image provider %s returned %d image(s)", provider, len(images))
    return ImageGenerationResult(success=True, data=images)
