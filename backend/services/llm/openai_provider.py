import logging
from typing import Optional

import openai

from exceptions import UpstreamServiceError
from services.llm.base import LLMProvider, LLMMessage, LLMConfig
from services.upstream import truncate


logger = logging.getLogger(__name__)


class OpenAIProvider(LLMProvider):
    """OpenAI LLM provider implementation."""

    def __init__(self, api_key: str, config: LLMConfig):
        super().__init__(api_key, config)
        self._client = None

    @property
    def client(self):
        """Lazy initialization of OpenAI client."""
        if self._client is None:
            from openai import AsyncOpenAI
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                timeout=self.config.timeout,
                max_retries=0,
            )
        return self._client

    async def generate_with_usage(
        self,
        messages: list[LLMMessage],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> tuple[str, dict]:
        """Generate response and return usage info."""
        temperature, max_tokens = self._resolve(temperature, max_tokens)
        try:
            response = await self.client.chat.completions.create(
                model=self.config.model,
                messages=self._format_messages(messages),
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.APIStatusError as e:
            logger.error(f"OpenAI returned {e.status_code}: {truncate(str(e.message))}")
            raise UpstreamServiceError("completion", e.status_code, truncate(str(e.message))) from e
        except openai.APIError as e:
            logger.error(f"OpenAI request failed: {type(e).__name__}: {truncate(str(e))}")
            raise UpstreamServiceError("completion", None, truncate(str(e))) from e

        text = response.choices[0].message.content if response.choices else ""
        usage = {
            "input_tokens": response.usage.prompt_tokens if response.usage else 0,
            "output_tokens": response.usage.completion_tokens if response.usage else 0,
            "total_tokens": response.usage.total_tokens if response.usage else 0,
        }
        return text or "", usage
