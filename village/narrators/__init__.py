from village.narrators.base import Narrator


def make_narrator(model_id: str) -> Narrator:
    """Instantiate the correct Narrator subclass based on model_id prefix."""
    if model_id.startswith("claude"):
        from village.narrators.anthropic_narrator import AnthropicNarrator
        return AnthropicNarrator(model_id=model_id)
    elif model_id.startswith(("gpt", "o1", "o3")):
        from village.narrators.openai_narrator import OpenAINarrator
        return OpenAINarrator(model_id=model_id)
    else:
        raise ValueError(
            f"Unknown model prefix for '{model_id}'. "
            "Use a model starting with 'claude' or 'gpt'/'o1'/'o3'."
        )
