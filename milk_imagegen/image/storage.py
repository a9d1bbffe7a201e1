"""Local persistence for generated images.

Both helpers write `<image_dir>/<filename>.png`, creating the directory when
missing. `image_dir` defaults to `IMAGE_DIR`. Files are never deleted; an
existing file with the same name is overwritten without warning and no locking
is performed.
"""

import base64
import binascii
import logging
import os
import re

import requests

from milk_imagegen.errors import ImageFetchError
from milk_imagegen.llm.provider_config import IMAGE_DIR, REQUEST_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

_DATA_URI_RE = re.compile(r"^data:image/\w+;base64,")


def _image_path(filename: str, image_dir: str | None) -> str:
    image_dir = image_dir or IMAGE_DIR
    logger.info("Saving image to directory: %s", image_dir)
    os.makedirs(image_dir, exist_ok=True)
    return os.path.join(image_dir, f"{filename}.png")


def is_base64_image(reference: str) -> bool:
    """Return whether `reference` is a base64 payload.

    Data-URIs always qualify. Anything else must decode as strict base64, so
    URLs and file paths are rejected.
    """
    if _DATA_URI_RE.match(reference):
        return True
    if not reference:
        return False
    try:
        base64.b64decode(reference, validate=True)
    except (binascii.Error, ValueError):
        return False
    return True


def save_base64_image(base64_data: str, filename: str, image_dir: str | None = None) -> str:
    """Decode a base64 image (optionally data-URI prefixed) and write it as PNG.

    Returns:
        Path of the written file.

    Raises:
        binascii.Error: Malformed base64; no file is written.
    """
    image_bytes = base64.b64decode(_DATA_URI_RE.sub("", base64_data, count=1))
    path = _image_path(filename, image_dir)
    with open(path, "wb") as f:
        f.write(image_bytes)
    return path


def save_remote_image(image_url: str, filename: str, image_dir: str | None = None) -> str:
    """Download `image_url` and write the bytes as PNG.

    Returns:
        Path of the written file.

    Raises:
        ImageFetchError: Non-2xx response; no file is written.
    """
    response = requests.get(image_url, timeout=REQUEST_TIMEOUT_SECONDS)
    if not response.ok:
        raise ImageFetchError(f"Failed to fetch image: {response.reason}")

    path = _image_path(filename, image_dir)
    with open(path, "wb") as f:
        f.write(response.content)
    return path
