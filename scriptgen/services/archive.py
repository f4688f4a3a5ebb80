# scriptgen/services/archive.py
from __future__ import annotations

import io
import re
import zipfile
from typing import Dict, List, Optional

from scriptgen.models.scaffold import GeneratedFile

DEFAULT_SOURCE = "ai-project"
FALLBACK_NAME = "ai-generated-project"

def project_name(first_user_message: Optional[str]) -> str:
    """Slug the first user prompt into an archive name."""
    text = (first_user_message or DEFAULT_SOURCE).strip().lower()
    text = re.sub(r"\s+", "-", text)
    text = re.sub(r"[^a-z0-9-]", "", text)
    return text or FALLBACK_NAME

def archive_filename(first_user_message: Optional[str]) -> str:
    return f"{project_name(first_user_message)}.zip"

def build_zip(files: List[GeneratedFile]) -> bytes:
    # a repeated name keeps its last content, in first-seen order
    entries: Dict[str, str] = {}
    for f in files:
        entries[f.name] = f.content

    mem = io.BytesIO()
    with zipfile.ZipFile(mem, mode="w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, content in entries.items():
            zf.writestr(name, content.encode("utf-8"))
    return mem.getvalue()
