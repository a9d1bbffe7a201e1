"""`MILK_IMAGE_GENERATION` action: message -> image prompt -> image -> attachment.

Control-flow model:
    1. Host calls `validate`; the action is only offered when
       `OPENAI_API_KEY` is configured.
    2. `handler` announces the start through the callback.
    3. An LLM call turns the raw message into a short visual prompt.
    4. The prompt is announced, then rendered by the image service with fixed
       parameters (`dall-e-3`, 1024x1024).
    5. The first image is forwarded (URL) or persisted (base64) and returned as
       one attachment.

Error handling strategy:
    - Prompt-generation errors are not caught and abort the handler.
    - Image-service failures, empty results and errors while saving the image
      yield one generic failure message and a `False` return.

Side effects:
    - Blocking provider calls run in worker threads via `asyncio.to_thread`.
    - Base64 results (and remote results when `IMAGE_SAVE_REMOTE` is set) are
      written under the image output directory.
"""

import asyncio
import binascii
import inspect
import logging
import time

import requests

from milk_imagegen.core.types import (
    Action,
    Attachment,
    Content,
    HandlerCallback,
    Memory,
    ModelClass,
    RuntimeProtocol,
    State,
)
from milk_imagegen.errors import ImageGenError
from milk_imagegen.image.service import generate_image
from milk_imagegen.image.storage import is_base64_image, save_base64_image, save_remote_image
from milk_imagegen.llm.provider_config import is_truthy, resolve_setting
from milk_imagegen.llm.service import generate_text

logger = logging.getLogger(__name__)

IMAGE_SYSTEM_PROMPT = (
    "You are an expert in writing prompts for AI art generation. Keep your prompts "
    "concise (25 words or less) and focused on visual elements. Do not include any "
    "narrative or dialogue. Example: \"A regal cat wearing a top hat, sipping milk "
    "from a crystal glass, elegant lighting, detailed fur texture.\""
)

IMAGE_MODEL_ID = "dall-e-3"
IMAGE_WIDTH = 1024
IMAGE_HEIGHT = 1024

STARTING_TEXT = "Starting to generate your image..."
SUCCESS_TEXT = "Here's your generated image"
FAILURE_TEXT = "Sorry, image generation failed"


async def _emit(callback: HandlerCallback, content: Content) -> None:
    result = callback(content)
    if inspect.isawaitable(result):
        await result


def _materialize(runtime: RuntimeProtocol, reference: str) -> str:
    """Return the attachment URL for one provider image reference.

    Base64 payloads are written to disk and replaced by their local path.
    Remote URLs are forwarded unless `IMAGE_SAVE_REMOTE` asks for a local copy.
    Files land in the `IMAGE_OUTPUT_DIR` setting when present.
    """
    filename = f"image_{int(time.time() * 1000)}"
    image_dir = resolve_setting(runtime, "IMAGE_OUTPUT_DIR")
    if is_base64_image(reference):
        return save_base64_image(reference, filename, image_dir)
    if reference.startswith(("http://", "https://")) and is_truthy(
        resolve_setting(runtime, "IMAGE_SAVE_REMOTE")
    ):
        return save_remote_image(reference, filename, image_dir)
    return reference


async def validate(runtime: RuntimeProtocol, message: Memory) -> bool:
    has_key = bool(runtime.get_setting("OPENAI_API_KEY"))
    logger.info("OpenAI API key configured: %s", has_key)
    return has_key


async def handler(
    runtime: RuntimeProtocol,
    message: Memory,
    state: State | None,
    options: dict | None,
    callback: HandlerCallback,
) -> bool:
    """Generate one image for `message` and report it through `callback`.

    Returns:
        `True` when an image attachment was delivered, `False` otherwise.
    """
    logger.info("Starting image generation for message %s", message.id)
    await _emit(callback, Content(text=STARTING_TEXT))

    image_prompt = await asyncio.to_thread(
        generate_text,
        runtime,
        message.content.text,
        ModelClass.MEDIUM,
        IMAGE_SYSTEM_PROMPT,
    )
    logger.info("Generated image prompt: %s", image_prompt)

    await _emit(callback, Content(text=f"Creating image with prompt: {image_prompt}"))

    images = await asyncio.to_thread(
        generate_image,
        runtime,
        image_prompt,
        IMAGE_MODEL_ID,
        IMAGE_WIDTH,
        IMAGE_HEIGHT,
    )
    logger.info("Image generation result: success=%s, images=%d", images.success, len(images.data))

    url = None
    if images.success and images.data:
        try:
            url = await asyncio.to_thread(_materialize, runtime, images.data[0])
        except (ImageGenError, binascii.Error, OSError, requests.RequestException):
            logger.exception("Saving generated image failed")

    if url:
        await _emit(
            callback,
            Content(
                text=SUCCESS_TEXT,
                attachments=[
                    Attachment(
                        url=url,
                        title="Generated image",
                        source="imageGeneration",
                        description=image_prompt,
                        text=image_prompt,
                        content_type="image/png",
                    )
                ],
            ),
        )
        return True

    await _emit(callback, Content(text=FAILURE_TEXT))
    return False


def _example(request: str, reply: str) -> list[dict]:
    return [
        {"user": "{{user1}}", "content": {"text": request}},
        {"user": "{{agentName}}", "content": {"text": reply, "action": "GENERATE_IMAGE"}},
    ]


milk_image_generation = Action(
    name="MILK_IMAGE_GENERATION",
    similes=[
        "IMAGE_GENERATION",
        "IMAGE_GEN",
        "CREATE_IMAGE",
        "MAKE_PICTURE",
        "GENERATE_IMAGE",
        "GENERATE_A",
        "DRAW",
        "DRAW_A",
        "MAKE_A",
    ],
    description="Generate an image to go along with the message.",
    suppress_initial_message=True,
    validate=validate,
    handler=handler,
    examples=[
        _example("Generate an image of a cat", "Here's an image of a cat"),
        _example("Generate an image of a dog", "Here's an image of a dog"),
        _example("Create an image of a cat with a hat", "Here's an image of a cat with a hat"),
        _example("Make an image of a dog with a hat", "Here's an image of a dog with a hat"),
        _example("Paint an image of a cat with a hat", "Here's an image of a cat with a hat"),
    ],
)
