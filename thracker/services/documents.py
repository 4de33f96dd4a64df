from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Protocol
from ..utils import pdf_to_text

logger = logging.getLogger(__name__)

RESUME_PREFIX = "resume_"


class DocumentStore(Protocol):
    def list_files(self, user_id: str) -> List[str]: ...

    def download(self, user_id: str, name: str) -> bytes: ...

    def is_available(self) -> bool: ...


class LocalDocumentStore:
    """Per-user documents kept on disk as ``<root>/<user_id>/<name>``."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def _user_dir(self, user_id: str) -> Path:
        # user ids come from the authenticator, never from the request body
        d = (self.root / user_id).resolve()
        if self.root.resolve() not in d.parents:
            raise ValueError(f"Invalid user id: {user_id!r}")
        return d

    def list_files(self, user_id: str) -> List[str]:
        d = self._user_dir(user_id)
        if not d.is_dir():
            return []
        return sorted(p.name for p in d.iterdir() if p.is_file())

    def download(self, user_id: str, name: str) -> bytes:
        path = self._user_dir(user_id) / Path(name).name
        return path.read_bytes()

    def is_available(self) -> bool:
        return self.root.is_dir()


class InMemoryDocumentStore:
    def __init__(self, files: Optional[dict[str, dict[str, bytes]]] = None):
        self.files = files if files is not None else {}

    def list_files(self, user_id: str) -> List[str]:
        return sorted(self.files.get(user_id, {}))

    def download(self, user_id: str, name: str) -> bytes:
        try:
            return self.files[user_id][name]
        except KeyError:
            raise FileNotFoundError(f"{user_id}/{name}") from None

    def is_available(self) -> bool:
        return True


def _timestamp(name: str) -> int:
    parts = name.split("_")
    if len(parts) < 2:
        return 0
    stamp = parts[1].split(".")[0]
    return int(stamp) if stamp.isdigit() else 0


def latest_resume_name(names: Iterable[str]) -> Optional[str]:
    """Pick the newest ``resume_<timestamp>.pdf``; unparseable timestamps sort as 0."""
    resumes = [n for n in names if n.startswith(RESUME_PREFIX) and n.endswith(".pdf")]
    if not resumes:
        return None
    return max(resumes, key=_timestamp)


def fetch_resume_text(store: DocumentStore, user_id: str) -> Optional[str]:
    """Text of the user's latest resume PDF, or None when they have not uploaded one."""
    name = latest_resume_name(store.list_files(user_id))
    if name is None:
        return None
    logger.info("Using resume %s for user %s", name, user_id)
    return pdf_to_text(store.download(user_id, name)) or ""
