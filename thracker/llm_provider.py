from __future__ import annotations
import logging
from typing import Any, Callable, List, Optional
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_mistralai import ChatMistralAI
from langchain_openai import ChatOpenAI
from .config import Settings
from .errors import CompletionError, ConfigurationError

logger = logging.getLogger(__name__)

PROVIDERS = {"auto", "openai", "gemini", "mistral"}


def normalize_provider(p: str | None) -> str:
    if not p:
        return "auto"
    p = p.strip().lower()
    if p in PROVIDERS:
        return p
    return "auto"


def build_openai(settings: Settings) -> ChatOpenAI:
    if not settings.openai_api_key:
        raise ConfigurationError("OPENAI_API_KEY is missing. Set it in .env or the environment.")
    return ChatOpenAI(
        model=settings.openai_model,
        temperature=settings.temperature,
        api_key=settings.openai_api_key,
    )


def build_gemini(settings: Settings) -> ChatGoogleGenerativeAI:
    if not settings.gemini_api_key:
        raise ConfigurationError("GEMINI_API_KEY (or GOOGLE_API_KEY) is missing. Set it in .env or the environment.")
    return ChatGoogleGenerativeAI(
        model=settings.gemini_model,
        temperature=settings.temperature,
        google_api_key=settings.gemini_api_key,
    )


def build_mistral(settings: Settings) -> ChatMistralAI:
    if not settings.mistral_api_key:
        raise ConfigurationError("MISTRAL_API_KEY is missing. Set it in .env or the environment.")
    return ChatMistralAI(
        model=settings.mistral_model,
        temperature=settings.temperature,
        api_key=settings.mistral_api_key,
    )


class MultiProviderLLM:
    """Try multiple provider builders in order. Build lazily and fail over on errors."""

    def __init__(self, builders: List[Callable[[], Any]]):
        self.builders = builders
        self._instances: List[Any | None] = [None] * len(builders)

    def _model(self, i: int, errors: List[str]) -> Any | None:
        if self._instances[i] is None:
            try:
                self._instances[i] = self.builders[i]()
            except Exception as e:
                errors.append(f"build[{i}]: {e}")
                return None
        return self._instances[i]

    async def ainvoke(self, messages: list[Any]) -> Any:
        errors: List[str] = []
        last_exc: Optional[Exception] = None
        for i in range(len(self.builders)):
            model = self._model(i, errors)
            if model is None:
                continue
            try:
                return await model.ainvoke(messages)
            except Exception as e:
                logger.warning("Provider %d failed, trying next: %s", i, e)
                errors.append(f"invoke[{i}]: {e}")
                last_exc = e
        raise CompletionError("All providers failed: " + "; ".join(errors)) from last_exc


def has_credentials(settings: Settings) -> bool:
    p = normalize_provider(settings.llm_provider)
    keys = {
        "openai": settings.openai_api_key,
        "gemini": settings.gemini_api_key,
        "mistral": settings.mistral_api_key,
    }
    if p == "auto":
        return any(keys.values())
    return bool(keys[p])


def get_llm(settings: Settings) -> Any:
    p = normalize_provider(settings.llm_provider)
    if p == "openai":
        return build_openai(settings)
    if p == "gemini":
        return build_gemini(settings)
    if p == "mistral":
        return build_mistral(settings)
    # auto
    return MultiProviderLLM([
        lambda: build_openai(settings),
        lambda: build_gemini(settings),
        lambda: build_mistral(settings),
    ])
