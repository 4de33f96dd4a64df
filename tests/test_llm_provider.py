from __future__ import annotations

import asyncio

import pytest
from langchain_core.messages import AIMessage, HumanMessage
from langchain_openai import ChatOpenAI

from thracker.config import Settings
from thracker.errors import CompletionError, ConfigurationError
from thracker.llm_provider import MultiProviderLLM, get_llm, has_credentials, normalize_provider


class _Model:
    def __init__(self, name: str, fail: bool = False) -> None:
        self.name = name
        self.fail = fail
        self.calls = 0

    def invoke(self, messages):
        self.calls += 1
        if self.fail:
            raise RuntimeError(f"{self.name} down")
        return AIMessage(content=f"from {self.name}")

    async def ainvoke(self, messages):
        return self.invoke(messages)


def _missing_key():
    raise ConfigurationError("KEY is missing")


def test_normalize_provider() -> None:
    assert normalize_provider(None) == "auto"
    assert normalize_provider(" OpenAI ") == "openai"
    assert normalize_provider("mistral") == "mistral"
    assert normalize_provider("claude") == "auto"


def test_multi_provider_fails_over_on_invoke_error() -> None:
    first, second = _Model("first", fail=True), _Model("second")
    llm = MultiProviderLLM([lambda: first, lambda: second])
    resp = asyncio.run(llm.ainvoke([HumanMessage(content="hi")]))
    assert resp.content == "from second"
    assert first.calls == 1 and second.calls == 1


def test_multi_provider_skips_unbuildable_providers() -> None:
    second = _Model("second")
    llm = MultiProviderLLM([_missing_key, lambda: second])
    assert asyncio.run(llm.ainvoke([HumanMessage(content="hi")])).content == "from second"


def test_multi_provider_builds_lazily_once() -> None:
    built = []

    def builder():
        built.append(1)
        return _Model("only")

    llm = MultiProviderLLM([builder])
    asyncio.run(llm.ainvoke([]))
    asyncio.run(llm.ainvoke([]))
    assert built == [1]


def test_multi_provider_raises_when_all_fail() -> None:
    llm = MultiProviderLLM([_missing_key, lambda: _Model("second", fail=True)])
    with pytest.raises(CompletionError, match="All providers failed: build\\[0\\]: KEY is missing; invoke\\[1\\]: second down"):
        asyncio.run(llm.ainvoke([]))


def test_get_llm_auto_is_lazy_without_keys() -> None:
    assert isinstance(get_llm(Settings()), MultiProviderLLM)


def test_get_llm_explicit_provider_requires_key() -> None:
    with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
        get_llm(Settings(llm_provider="openai"))


def test_get_llm_openai() -> None:
    llm = get_llm(Settings(llm_provider="openai", openai_api_key="sk-test", openai_model="gpt-4o-mini"))
    assert isinstance(llm, ChatOpenAI)
    assert llm.model_name == "gpt-4o-mini"


def test_has_credentials() -> None:
    assert not has_credentials(Settings())
    assert has_credentials(Settings(mistral_api_key="m"))
    assert not has_credentials(Settings(llm_provider="gemini", mistral_api_key="m"))
    assert has_credentials(Settings(llm_provider="gemini", gemini_api_key="g"))
