"""Exception types raised by the plugin's provider and persistence layers."""


class ImageGenError(Exception):
    """Base class for plugin errors."""


class LLMConfigurationError(ImageGenError):
    """Text-generation provider is unknown or has no credential."""


class ImageProviderError(ImageGenError):
    """Image provider is misconfigured or answered with a non-200 status."""


class ImageFetchError(ImageGenError):
    """Remote image download answered with a non-success status."""
