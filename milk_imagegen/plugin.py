"""Plugin object exported to host runtimes."""

import logging

from milk_imagegen.actions import milk_image_generation
from milk_imagegen.core.types import Plugin

logger = logging.getLogger(__name__)

logger.debug("Loading milk image generation plugin")

milk_image_generation_plugin = Plugin(
    name="milkImageGeneration",
    description="Generate images",
    actions=[milk_image_generation],
    evaluators=[],
    providers=[],
)
