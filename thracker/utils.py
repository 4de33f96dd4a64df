from __future__ import annotations
import io
from pathlib import Path
from typing import BinaryIO, Optional, Union
from pypdf import PdfReader


def read_text_file(path: str) -> str:
    p = Path(path)
    return p.read_text(encoding="utf-8")


def pdf_to_text(source: Union[str, bytes, BinaryIO]) -> Optional[str]:
    if isinstance(source, bytes):
        source = io.BytesIO(source)
    reader = PdfReader(source)
    pages = [page.extract_text() or "" for page in reader.pages]
    text = "\n\n".join(pages).strip()
    return text or None


def load_text(path: str) -> str:
    """Load a resume, job description or letter from .txt, .md or .pdf."""
    path_lower = path.lower()
    if path_lower.endswith(".txt") or path_lower.endswith(".md"):
        return read_text_file(path)
    if path_lower.endswith(".pdf"):
        txt = pdf_to_text(path)
        if txt:
            return txt
        raise RuntimeError(f"Could not extract text from PDF: {path}")
    raise ValueError("Unsupported file format. Use .txt, .md or .pdf")
