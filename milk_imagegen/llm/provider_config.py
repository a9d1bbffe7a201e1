"""Provider/runtime configuration for the LLM and image layers.

Architectural role:
    Centralizes provider selection, model naming and credential lookup for
    `milk_imagegen.llm` and `milk_imagegen.image`.

Credential resolution:
    `resolve_setting` asks the host runtime first, then the process
    environment, then an optional key file (`config/<name>.key`) via `load_key`.

Determinism:
    Deterministic for a fixed process environment and key files. Defaults are
    resolved at import time after `load_dotenv()`; runtime settings are read on
    every call.

Failure behavior:
    Missing values are represented as `None`. Callers decide whether that is a
    validation failure or an error.
"""

import os
from dotenv import load_dotenv

from milk_imagegen.core.types import ModelClass

load_dotenv()

# Text-generation routing controls.
PROVIDER = os.getenv("PROVIDER", "openai")

MODEL_NAMES = {
    ModelClass.SMALL: os.getenv("SMALL_MODEL", "gpt-4o-mini"),
    ModelClass.MEDIUM: os.getenv("MEDIUM_MODEL", "gpt-4o"),
    ModelClass.LARGE: os.getenv("LARGE_MODEL", "gpt-4o"),
}

# OpenAI-compatible chat endpoints plus the credential setting each one needs.
PROVIDERS = {

    "openai": {
        "url": "https://api.openai.com/v1/chat/completions",
        "key_setting": "OPENAI_API_KEY",
    },

    "groq": {
        "url": "https://api.groq.com/openai/v1/chat/completions",
        "key_setting": "GROQ_API_KEY",
    },

    "together": {
        "url": "https://api.together.xyz/v1/chat/completions",
        "key_setting": "TOGETHER_API_KEY",
    },

    "openrouter": {
        "url": "https://openrouter.ai/api/v1/chat/completions",
        "key_setting": "OPENROUTER_API_KEY",
    },

    "local": {
        "url": "http://127.0.0.1:8080/v1/chat/completions",
        "key_setting": None,
    },

    "anthropic": {
        "url": "https://api.anthropic.com/v1/messages",
        "key_setting": "ANTHROPIC_API_KEY",
    },

}

ANTHROPIC_VERSION = "2023-06-01"
REQUEST_TIMEOUT_SECONDS = 120


# Image generation provider settings consumed by `milk_imagegen.image`.
IMAGE_PROVIDER = os.getenv("IMAGE_PROVIDER", "openai")

IMAGE_PROVIDERS = {

    "openai": {
        "url": "https://api.openai.com/v1/images/generations",
        "key_setting": "OPENAI_API_KEY",
    },

    "local": {
        "url": "http://127.0.0.1:7860/sdapi/v1/txt2img",
        "key_setting": None,
    },

}

PACKAGE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
IMAGE_DIR = os.getenv("IMAGE_OUTPUT_DIR", os.path.join(PACKAGE_DIR, "images", "lora"))


def load_key(path):
    """Load API key material from a key file.

    Args:
        path: Key file path or `None`.

    Returns:
        Stripped file contents, or `None` for a `None` path, a missing file or
        an empty file.
    """
    if not path or not os.path.exists(path):
        return None
    with open(path, "r") as f:
        return f.read().strip() or None


def resolve_setting(runtime, key):
    """Resolve one setting from runtime, environment, then key file.

    Args:
        runtime: Host runtime exposing `get_setting`, or `None`.
        key: Setting name, for example `OPENAI_API_KEY`.

    Returns:
        Setting value or `None` when unavailable.

    Edge cases:
        - Key files are only consulted for `*_API_KEY` settings; the file
          stem is the lower-cased provider prefix (`OPENAI_API_KEY` ->
          `config/openai.key`).
    """
    if runtime is not None:
        value = runtime.get_setting(key)
        if value:
            return value
    value = os.getenv(key)
    if value:
        return value
    if key.endswith("_API_KEY"):
        stem = key[: -len("_API_KEY")].lower()
        return load_key(os.path.join("config", f"{stem}.key"))
    return None


def is_truthy(value) -> bool:
    return str(value or "").strip().lower() in ("true", "1", "yes", "on")
