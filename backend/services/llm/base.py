from abc import ABC, abstractmethod
from typing import Optional
from pydantic import BaseModel
from dataclasses import dataclass, field
from datetime import datetime, timezone


class LLMMessage(BaseModel):
    """A message in the LLM conversation."""
    role: str  # "system", "user", "assistant"
    content: str


class LLMConfig(BaseModel):
    """Configuration for LLM provider."""
    model: str
    temperature: float = 0.7
    max_tokens: int = 800
    timeout: int = 60


@dataclass
class LLMCallLog:
    """Log entry for a single LLM call."""
    call_type: str  # "resume", "ats", "cover_letter"
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    model: str = ""
    prompt_chars: int = 0
    response_chars: int = 0
    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0
    latency_ms: int = 0

    def to_dict(self) -> dict:
        return {
            "call_type": self.call_type,
            "timestamp": self.timestamp,
            "model": self.model,
            "prompt_chars": self.prompt_chars,
            "response_chars": self.response_chars,
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "total_tokens": self.total_tokens,
            "latency_ms": self.latency_ms,
        }


class LLMProvider(ABC):
    """Abstract base class for LLM providers.

    Implementations make exactly one API call per request. The completion
    backend is paid, so retries are left to the user.
    """

    def __init__(self, api_key: str, config: LLMConfig):
        self.api_key = api_key
        self.config = config

    async def generate(
        self,
        messages: list[LLMMessage],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        """Generate a text response from the LLM."""
        text, _ = await self.generate_with_usage(messages, temperature, max_tokens)
        return text

    @abstractmethod
    async def generate_with_usage(
        self,
        messages: list[LLMMessage],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> tuple[str, dict]:
        """Generate response and return usage info.

        Args:
            messages: List of conversation messages.
            temperature: Overrides the configured temperature for this call.
            max_tokens: Overrides the configured output limit for this call.

        Returns:
            Tuple of (response_text, usage_dict) where usage_dict contains:
            - input_tokens: int
            - output_tokens: int
            - total_tokens: int

        Raises:
            UpstreamServiceError: If the API call fails.
        """
        pass

    def _format_messages(self, messages: list[LLMMessage]) -> list[dict]:
        """Convert LLMMessage objects to provider-specific format."""
        return [{"role": m.role, "content": m.content} for m in messages]

    def _resolve(self, temperature: Optional[float], max_tokens: Optional[int]) -> tuple[float, int]:
        return (
            self.config.temperature if temperature is None else temperature,
            self.config.max_tokens if max_tokens is None else max_tokens,
        )
