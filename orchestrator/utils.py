from __future__ import annotations
from typing import Optional
from pathlib import Path
from pypdf import PdfReader
from pypdf.errors import PdfReadError


def read_text_file(path: str) -> str:
    p = Path(path)
    return p.read_text(encoding="utf-8")


def pdf_to_text(path: str) -> Optional[str]:
    try:
        reader = PdfReader(path)
    except PdfReadError:
        return None
    pages = [page.extract_text() or "" for page in reader.pages]
    return "\n".join(pages).strip()


def load_document(path: str) -> str:
    """Read a resume or job description from .txt, .md or .pdf."""
    path_lower = path.lower()
    if path_lower.endswith(".txt") or path_lower.endswith(".md"):
        return read_text_file(path)
    if path_lower.endswith(".pdf"):
        txt = pdf_to_text(path)
        if txt:
            return txt
        raise RuntimeError(f"Could not extract text from {path}. Make sure the PDF is not encrypted or image-only.")
    raise ValueError("Unsupported file type. Use .txt, .md or .pdf")
