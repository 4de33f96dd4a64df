from __future__ import annotations
import os
from typing import Dict, Mapping, Optional
from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Process-wide configuration, read once at startup and passed down explicitly."""

    llm_provider: str = "auto"
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o"
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-2.0-flash"
    mistral_api_key: Optional[str] = None
    mistral_model: str = "mistral-large-latest"
    temperature: float = 0.7
    # None disables the per-stage timeout
    stage_timeout_s: Optional[float] = 120.0

    documents_dir: str = "data/documents"
    records_file: Optional[str] = None
    api_tokens: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env

        def get(name: str) -> Optional[str]:
            value = env.get(name)
            return value.strip() if value and value.strip() else None

        timeout = get("COPILOT_STAGE_TIMEOUT")
        stage_timeout_s: Optional[float] = 120.0
        if timeout is not None:
            stage_timeout_s = float(timeout) or None

        return cls(
            llm_provider=get("LLM_PROVIDER") or "auto",
            openai_api_key=get("OPENAI_API_KEY"),
            openai_model=get("OPENAI_MODEL") or "gpt-4o",
            # Prefer GEMINI_API_KEY, fallback to GOOGLE_API_KEY
            gemini_api_key=get("GEMINI_API_KEY") or get("GOOGLE_API_KEY"),
            gemini_model=get("GEMINI_MODEL") or "gemini-2.0-flash",
            mistral_api_key=get("MISTRAL_API_KEY"),
            mistral_model=get("MISTRAL_MODEL") or "mistral-large-latest",
            temperature=float(get("LLM_TEMPERATURE") or 0.7),
            stage_timeout_s=stage_timeout_s,
            documents_dir=get("THRACKER_DOCUMENTS_DIR") or "data/documents",
            records_file=get("THRACKER_RECORDS_FILE"),
            api_tokens=parse_api_tokens(get("THRACKER_API_TOKENS") or ""),
        )


def parse_api_tokens(raw: str) -> Dict[str, str]:
    """Parse ``token:user_id`` pairs separated by commas."""
    tokens: Dict[str, str] = {}
    for pair in raw.split(","):
        token, sep, user_id = pair.strip().partition(":")
        if not sep or not token.strip() or not user_id.strip():
            continue
        tokens[token.strip()] = user_id.strip()
    return tokens
