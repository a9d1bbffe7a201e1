"""LLM access package.

Architectural role:
    Provides provider configuration, request-payload construction, and transport
    adapters used by actions to invoke text-generation backends.

Module split:
    - `provider_config`: environment-driven provider, model and credential configuration.
    - `service`: context + system prompt to payload adapter.
    - `client`: provider-specific HTTP transport and response parsing.
"""
