from __future__ import annotations
import json
from pathlib import Path
from typing import Dict, List, Optional, Protocol
from pydantic import BaseModel, Field


class CompanyRecord(BaseModel):
    name: str
    industry: Optional[str] = None


class ApplicationRecord(BaseModel):
    id: str
    user_id: str
    position: str
    description: Optional[str] = None
    location: Optional[str] = None
    company: Optional[CompanyRecord] = None


class UserProfile(BaseModel):
    user_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    current_title: Optional[str] = None


class RecordStore(Protocol):
    def get_application(self, user_id: str, application_id: str) -> Optional[ApplicationRecord]: ...

    def get_profile(self, user_id: str) -> Optional[UserProfile]: ...


class InMemoryRecordStore:
    """Applications and profiles held in dicts, loadable from a JSON fixture file."""

    def __init__(
        self,
        applications: Optional[List[ApplicationRecord]] = None,
        profiles: Optional[List[UserProfile]] = None,
    ):
        self.applications: Dict[str, ApplicationRecord] = {a.id: a for a in applications or []}
        self.profiles: Dict[str, UserProfile] = {p.user_id: p for p in profiles or []}

    @classmethod
    def from_json_file(cls, path: str | Path) -> "InMemoryRecordStore":
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls(
            applications=[ApplicationRecord.model_validate(a) for a in data.get("applications", [])],
            profiles=[UserProfile.model_validate(p) for p in data.get("profiles", [])],
        )

    def get_application(self, user_id: str, application_id: str) -> Optional[ApplicationRecord]:
        app = self.applications.get(application_id)
        # Records owned by another user are reported as missing
        if app is None or app.user_id != user_id:
            return None
        return app

    def get_profile(self, user_id: str) -> Optional[UserProfile]:
        return self.profiles.get(user_id)
