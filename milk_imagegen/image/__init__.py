"""Image generation adapter package.

Scope:
    Provides the text-to-image provider client, a dispatch service returning a
    success-flagged result, and local persistence helpers for generated images.

Non-goals:
    - No image content validation or size limits.
    - No cleanup of previously saved files.
"""
