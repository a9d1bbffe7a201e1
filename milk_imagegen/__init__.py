"""Milk image-generation plugin for chat-agent runtimes.

Architectural role:
    Ships one host-invoked action (`MILK_IMAGE_GENERATION`) that turns a user
    message into an image prompt via an LLM, renders it through an image
    provider and reports progress through the host's callback.

Package split:
    - `core`: message/action data contracts and a minimal host runtime.
    - `llm`: provider configuration and text-generation transport.
    - `image`: image-provider transport, dispatch and local persistence.
    - `actions`: the image-generation action itself.
    - `plugin`: plugin object exported to hosts.
    - `api`: terminal adapter.
"""

from milk_imagegen.plugin import milk_image_generation_plugin

__all__ = ["milk_image_generation_plugin"]
