from .client import GeminiProvider, GenerationProvider, GroqProvider, create_generation_provider

__all__ = [
    "GenerationProvider",
    "GroqProvider",
    "GeminiProvider",
    "create_generation_provider",
]
