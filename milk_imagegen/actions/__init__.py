"""Host-invoked actions shipped by this plugin."""

from milk_imagegen.actions.image_generation import milk_image_generation

__all__ = ["milk_image_generation"]
