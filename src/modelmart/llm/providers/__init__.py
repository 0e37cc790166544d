from .gemini import GeminiProvider
from .openai import DEEPSEEK_BASE_URL, OpenAIProvider

__all__ = ["DEEPSEEK_BASE_URL", "GeminiProvider", "OpenAIProvider"]
