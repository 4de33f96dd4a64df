from __future__ import annotations
import json
import logging
from typing import Optional
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from ..agents.networking_email import NetworkingEmailRequest, SenderProfile, draft_networking_email
from ..graph.workflow import run_application_copilot
from ..llm_provider import has_credentials
from ..services.auth import bearer_token
from ..services.documents import fetch_resume_text
from ..state import AgentSettings, JobDetails
from .schemas import CopilotRequest, CopilotResponse, HealthResponse, NetworkingEmailResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

UNEXPECTED_ERROR = "An unexpected error occurred processing your request."


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def _json_object(request: Request) -> Optional[dict]:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return body if isinstance(body, dict) else None


def _current_user(request: Request) -> Optional[str]:
    token = bearer_token(request.headers.get("Authorization"))
    return request.app.state.authenticator.authenticate(token)


@router.post("/copilot")
async def run_copilot(request: Request) -> JSONResponse:
    state = request.app.state
    try:
        body = await _json_object(request)
        if body is None:
            return _error(400, "Invalid request body")
        try:
            req = CopilotRequest.model_validate(body)
        except ValidationError:
            return _error(400, "Invalid request body")
        if not req.application_id:
            return _error(400, "Missing applicationId")

        user_id = _current_user(request)
        if not user_id:
            logger.warning("Copilot request without a valid session")
            return _error(401, "Authentication required")

        application = state.records.get_application(user_id, req.application_id)
        if application is None:
            logger.warning("Application %s not found for user %s", req.application_id, user_id)
            return _error(404, f"Application not found or access denied (ID: {req.application_id})")

        job_details = JobDetails(
            position=application.position,
            company=application.company.name if application.company else "Company",
            location=application.location or None,
            industry=(application.company.industry if application.company else None) or None,
        )
        job_description = application.description or "No description provided"

        resume_text = fetch_resume_text(state.documents, user_id)
        if resume_text is None:
            return _error(404, "No resume PDF found for user")

        result = await run_application_copilot(
            resume_text,
            req.base_cover_letter,
            job_description,
            job_details,
            req.agent_settings or AgentSettings(),
            llm=state.llm,
            stage_timeout_s=state.settings.stage_timeout_s,
        )
        response = CopilotResponse.from_result(result)
        return JSONResponse(response.model_dump(by_alias=True))
    except Exception:
        logger.exception("Error in copilot route")
        return _error(500, UNEXPECTED_ERROR)


@router.get("/copilot/health")
async def copilot_health(request: Request) -> JSONResponse:
    state = request.app.state
    llm_ok = has_credentials(state.settings)
    try:
        storage_ok = bool(state.documents.is_available())
    except Exception:
        logger.exception("Document store health check failed")
        storage_ok = False

    if not llm_ok:
        health = HealthResponse(status="error", message="Completion provider is not configured", llm=False, storage=storage_ok)
    elif not storage_ok:
        health = HealthResponse(status="error", message="Document storage is unavailable", llm=True, storage=False)
    else:
        health = HealthResponse(status="ok", message="All services are operational", llm=True, storage=True)
    return JSONResponse(health.model_dump(by_alias=True), status_code=200 if health.status == "ok" else 500)


@router.post("/generate-networking-email")
async def generate_networking_email(request: Request) -> JSONResponse:
    state = request.app.state
    try:
        user_id = _current_user(request)
        if not user_id:
            return _error(401, "Not authenticated")

        body = await _json_object(request)
        if body is None or not body.get("contactName"):
            return _error(400, "Missing contactName")
        try:
            req = NetworkingEmailRequest.model_validate(body)
        except ValidationError:
            return _error(400, "Invalid request body")

        sender = SenderProfile()
        profile = state.records.get_profile(user_id)
        if profile is not None:
            if profile.first_name:
                sender.name = f"{profile.first_name} {profile.last_name or ''}".strip()
            if profile.current_title:
                sender.title = profile.current_title

        draft = await draft_networking_email(req, sender, state.llm, state.settings.stage_timeout_s)
        return JSONResponse(NetworkingEmailResponse(email_draft=draft).model_dump(by_alias=True))
    except Exception:
        logger.exception("Error generating networking email")
        return _error(500, "Failed to generate email")
