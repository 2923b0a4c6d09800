import logging
from typing import Optional

import anthropic

from exceptions import UpstreamServiceError
from services.llm.base import LLMProvider, LLMMessage, LLMConfig
from services.upstream import truncate


logger = logging.getLogger(__name__)


class ClaudeProvider(LLMProvider):
    """Anthropic Claude LLM provider implementation."""

    def __init__(self, api_key: str, config: LLMConfig):
        super().__init__(api_key, config)
        self._client = None

    @property
    def client(self):
        """Lazy initialization of Anthropic client."""
        if self._client is None:
            from anthropic import AsyncAnthropic
            self._client = AsyncAnthropic(
                api_key=self.api_key,
                timeout=self.config.timeout,
                max_retries=0,
            )
        return self._client

    def _format_messages_for_claude(self, messages: list[LLMMessage]) -> tuple[str, list[dict]]:
        """Format messages for Claude API (separate system prompt)."""
        system_prompt = ""
        conversation = []

        for msg in messages:
            if msg.role == "system":
                system_prompt += msg.content + "\n"
            else:
                # Claude uses "user" and "assistant" roles
                role = "user" if msg.role == "user" else "assistant"
                conversation.append({"role": role, "content": msg.content})

        return system_prompt.strip(), conversation

    async def generate_with_usage(
        self,
        messages: list[LLMMessage],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> tuple[str, dict]:
        """Generate response and return usage info."""
        temperature, max_tokens = self._resolve(temperature, max_tokens)
        system_prompt, conversation = self._format_messages_for_claude(messages)

        # Build kwargs - only include system if non-empty
        kwargs = {
            "model": self.config.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": conversation,
        }
        if system_prompt:
            kwargs["system"] = system_prompt

        try:
            response = await self.client.messages.create(**kwargs)
        except anthropic.APIStatusError as e:
            logger.error(f"Claude returned {e.status_code}: {truncate(str(e.message))}")
            raise UpstreamServiceError("completion", e.status_code, truncate(str(e.message))) from e
        except anthropic.APIError as e:
            logger.error(f"Claude request failed: {type(e).__name__}: {truncate(str(e))}")
            raise UpstreamServiceError("completion", None, truncate(str(e))) from e

        text = "".join(block.text for block in response.content if getattr(block, "type", "") == "text")
        usage = {
            "input_tokens": response.usage.input_tokens if response.usage else 0,
            "output_tokens": response.usage.output_tokens if response.usage else 0,
            "total_tokens": (response.usage.input_tokens + response.usage.output_tokens) if response.usage else 0,
        }
        return text, usage
