from __future__ import annotations
from datetime import date, datetime
from typing import Any, List, Optional, Union
from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from .prompts import complete


RESUME_EXCERPT_CHARS = 500


class NetworkingEmailRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    contact_name: str
    contact_role: Optional[str] = None
    company_name: Optional[str] = None
    # Plain dates and full timestamps are both accepted; only the calendar day is used.
    last_interaction: Optional[Union[datetime, date]] = None
    is_alumni: bool = False
    resume_content: Optional[str] = None


class SenderProfile(BaseModel):
    name: str = "[Your Name]"
    title: str = "[Your Current Role/Status]"


def format_long_date(d: Union[datetime, date]) -> str:
    if isinstance(d, datetime):
        d = d.date()
    return f"{d.strftime('%B')} {d.day}, {d.year}"


def build_networking_email_messages(req: NetworkingEmailRequest, sender: SenderProfile) -> List[Any]:
    prompt = f"Generate a professional networking email from {sender.name} ({sender.title}) to {req.contact_name}"
    if req.contact_role:
        prompt += f", who is a {req.contact_role}"
    if req.company_name:
        prompt += f" at {req.company_name}"
    prompt += "."
    if req.is_alumni:
        prompt += f" Note that {req.contact_name} went to the same school as {sender.name}."
    if req.last_interaction:
        prompt += f" Their last interaction was on {format_long_date(req.last_interaction)}."
    prompt += " The email should be friendly yet professional, with a clear purpose (networking, informational interview, etc.)."
    prompt += " Include a subject line at the beginning of the email."
    if req.resume_content:
        prompt += (
            " Use the following resume information to personalize the email, but don't make it"
            f" sound like a job application: {req.resume_content[:RESUME_EXCERPT_CHARS]}..."
        )

    system = SystemMessage(content=(
        "You are an expert in professional communication and networking. Your task is to draft "
        "effective networking emails that are personalized, concise, and have a clear call to action."
    ))
    return [system, HumanMessage(content=prompt)]


async def draft_networking_email(
    req: NetworkingEmailRequest,
    sender: SenderProfile,
    llm: Any,
    timeout_s: Optional[float] = None,
) -> str:
    """Return the plain-text email draft. Provider failures propagate as CopilotError."""
    messages = build_networking_email_messages(req, sender)
    return await complete(llm, messages, "networking_email", timeout_s)
