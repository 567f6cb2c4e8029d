"""Completion provider implementations for bot_manager."""

from bot_manager.infra.llm.anthropic_provider import AnthropicCompletionProvider
from bot_manager.infra.llm.openai_provider import OpenAICompletionProvider

__all__ = ["OpenAICompletionProvider", "AnthropicCompletionProvider", "provider_class_for"]


def provider_class_for(
    provider: str,
) -> type[OpenAICompletionProvider] | type[AnthropicCompletionProvider]:
    """Resolve a provider name from settings to its implementation class."""
    if provider == "anthropic":
        return AnthropicCompletionProvider
    if provider == "openai":
        return OpenAICompletionProvider
    raise ValueError(f"Unknown completion provider: {provider}")
