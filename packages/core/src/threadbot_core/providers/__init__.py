from threadbot_core.providers.anthropic import AnthropicResponder
from threadbot_core.providers.base import BaseResponder
from threadbot_core.providers.openai import OpenAIResponder


def get_responder(config: dict) -> BaseResponder:
    model = config["model"]
    if model == "anthropic":
        return AnthropicResponder(api_key=config["anthropic_api_key"])
    if model == "openai":
        return OpenAIResponder(api_key=config["openai_api_key"])
    raise ValueError(f"Unknown model provider: {model!r}. Choose 'anthropic' or 'openai'.")


__all__ = ["AnthropicResponder", "BaseResponder", "OpenAIResponder", "get_responder"]
