"""Image-provider HTTP client.

Processing flow:
    1. Resolve provider config from `milk_imagegen.llm.provider_config`.
    2. Build the provider-specific JSON payload.
    3. Submit it and normalize the response to a list of image references.

Output format:
    Every entry is either an HTTP(S) URL or a `data:image/png;base64,...`
    data-URI. Base64 content is wrapped, never decoded, here.

Error handling strategy:
    Misconfiguration and non-200 responses raise `ImageProviderError`;
    transport failures propagate from `requests`. The service layer converts
    both into a failed result.

Security considerations:
    Exception messages may include upstream provider response bodies.
"""

import requests

from milk_imagegen.errors import ImageProviderError
from milk_imagegen.llm.provider_config import IMAGE_PROVIDERS, REQUEST_TIMEOUT_SECONDS

DATA_URI_PREFIX = "data:image/png;base64,"


def send_image_request(
    provider: str,
    api_key: str | None,
    prompt: str,
    model_id: str,
    width: int,
    height: int,
    count: int = 1,
) -> list[str]:
    """Send an image-generation request to `provider`.

    Args:
        provider: Key into `IMAGE_PROVIDERS`.
        api_key: Resolved credential; may be `None` for keyless providers.
        prompt: Generation prompt.
        model_id: Provider model identifier (ignored by `local`).
        width: Requested width in pixels.
        height: Requested height in pixels.
        count: Number of images requested.

    Returns:
        Image references (URLs or base64 data-URIs) in provider order.

    Error handling:
        - Unknown provider -> `ImageProviderError`
        - Missing API key for a keyed provider -> `ImageProviderError`
        - Non-200 HTTP response -> `ImageProviderError`
    """
    provider_config = IMAGE_PROVIDERS.get(provider)
    if not provider_config:
        raise ImageProviderError(f"Unknown image provider: {provider}")

    headers = {"Content-Type": "application/json"}
    if provider_config["key_setting"]:
        if not api_key:
            raise ImageProviderError(f"{provider_config['key_setting']} is not configured")
        headers["Authorization"] = f"Bearer {api_key}"

    if provider == "local":
        payload = {
            "prompt": prompt,
            "width": width,
            "height": height,
            "batch_size": count,
        }
    else:
        payload = {
            "model": model_id,
            "prompt": prompt,
            "n": count,
            "size": f"{width}x{height}",
        }

    response = requests.post(
        provider_config["url"],
        json=payload,
        headers=headers,
        timeout=REQUEST_TIMEOUT_SECONDS,
    )

    if response.status_code != 200:
        raise ImageProviderError(
            f"Image request failed with status {response.status_code}: {response.text}"
        )

    data = response.json()

    if provider == "local":
        return [DATA_URI_PREFIX + image for image in data.get("images") or []]

    images = []
    for item in data.get("data") or []:
        if item.get("url"):
            images.append(item["url"])
        elif item.get("b64_json"):
            images.append(DATA_URI_PREFIX + item["b64_json"])
    return images
