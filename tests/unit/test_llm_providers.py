"""Unit tests for the completion providers (HTTP faked with httpx.MockTransport)."""

import json

import httpx
import pytest
from openai import AsyncOpenAI

from exceptions import ConfigurationError, UpstreamServiceError
from services.llm.base import LLMConfig, LLMMessage
from services.llm.factory import LLMFactory
from services.llm.openai_provider import OpenAIProvider


COMPLETION = {
    "id": "chatcmpl-1",
    "object": "chat.completion",
    "created": 0,
    "model": "gpt-4o-mini",
    "choices": [
        {"index": 0, "message": {"role": "assistant", "content": '{"summary":"x"}'}, "finish_reason": "stop"}
    ],
    "usage": {"prompt_tokens": 11, "completion_tokens": 7, "total_tokens": 18},
}

MESSAGES = [LLMMessage(role="system", content="sys"), LLMMessage(role="user", content="hi")]


def provider_with(handler):
    requests = []

    def _handle(request):
        requests.append(request)
        return handler(request)

    provider = OpenAIProvider("sk-test", LLMConfig(model="gpt-4o-mini", temperature=0.7, max_tokens=800))
    provider._client = AsyncOpenAI(
        api_key="sk-test",
        max_retries=0,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(_handle)),
    )
    return provider, requests


@pytest.mark.unit
async def test_openai_returns_text_and_usage():
    provider, requests = provider_with(lambda r: httpx.Response(200, json=COMPLETION))

    text, usage = await provider.generate_with_usage(MESSAGES, temperature=0.15, max_tokens=1200)

    assert text == '{"summary":"x"}'
    assert usage == {"input_tokens": 11, "output_tokens": 7, "total_tokens": 18}
    body = json.loads(requests[0].content)
    assert body["temperature"] == 0.15
    assert body["max_tokens"] == 1200
    assert [m["role"] for m in body["messages"]] == ["system", "user"]


@pytest.mark.unit
async def test_openai_uses_configured_defaults():
    provider, requests = provider_with(lambda r: httpx.Response(200, json=COMPLETION))

    await provider.generate(MESSAGES)

    body = json.loads(requests[0].content)
    assert body["temperature"] == 0.7
    assert body["max_tokens"] == 800


@pytest.mark.unit
async def test_openai_error_is_not_retried():
    provider, requests = provider_with(lambda r: httpx.Response(500, json={"error": {"message": "overloaded"}}))

    with pytest.raises(UpstreamServiceError) as exc:
        await provider.generate(MESSAGES)

    assert exc.value.service == "completion"
    assert exc.value.upstream_status == 500
    assert len(requests) == 1


@pytest.mark.unit
def test_factory_requires_api_key():
    with pytest.raises(ConfigurationError):
        LLMFactory.create("openai", api_key="")


@pytest.mark.unit
def test_factory_rejects_unknown_provider():
    with pytest.raises(ValueError):
        LLMFactory.create("gemini", api_key="k")


@pytest.mark.unit
def test_factory_builds_provider():
    provider = LLMFactory.create("claude", api_key="k", config=LLMConfig(model="claude-test"))

    assert provider.config.model == "claude-test"
