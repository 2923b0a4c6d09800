from services.llm.base import LLMProvider, LLMMessage, LLMConfig, LLMCallLog
from services.llm.factory import get_llm_provider, LLMFactory

__all__ = [
    "LLMProvider",
    "LLMMessage",
    "LLMConfig",
    "LLMCallLog",
    "get_llm_provider",
    "LLMFactory",
]
