from __future__ import annotations
from typing import Any, Optional
from fastapi import FastAPI
from ..config import Settings
from ..llm_provider import get_llm
from ..services.auth import Authenticator, StaticTokenAuthenticator
from ..services.documents import DocumentStore, LocalDocumentStore
from ..services.records import InMemoryRecordStore, RecordStore
from .routes import router


def create_app(
    settings: Settings,
    *,
    llm: Any = None,
    records: Optional[RecordStore] = None,
    documents: Optional[DocumentStore] = None,
    authenticator: Optional[Authenticator] = None,
) -> FastAPI:
    """Build the copilot API. Collaborators not passed in are built from ``settings``."""
    if records is None:
        records = (
            InMemoryRecordStore.from_json_file(settings.records_file)
            if settings.records_file
            else InMemoryRecordStore()
        )

    app = FastAPI(title="Thracker Application Copilot")
    app.state.settings = settings
    # Provider construction is lazy under "auto", so a missing key only fails at call time
    app.state.llm = llm if llm is not None else get_llm(settings)
    app.state.records = records
    app.state.documents = documents if documents is not None else LocalDocumentStore(settings.documents_dir)
    app.state.authenticator = authenticator if authenticator is not None else StaticTokenAuthenticator(settings.api_tokens)
    app.include_router(router)
    return app
