# scriptgen/services/coerce.py
from __future__ import annotations

from typing import Any, Dict, List

from scriptgen.models.scaffold import GeneratedFile

def coerce_to_files(items: List[Dict[str, Any]]) -> List[GeneratedFile]:
    return [
        GeneratedFile(
            name=f.get("name"),
            content=f.get("content", ""),
        )
        for f in items
    ]
