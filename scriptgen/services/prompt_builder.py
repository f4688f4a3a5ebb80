# scriptgen/services/prompt_builder.py
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

from scriptgen.core.prompt import (
    FOLLOW_UP_TEMPLATE,
    INITIAL_REQUEST_TEMPLATE,
    REQUEST_PREAMBLE,
)
from scriptgen.models.scaffold import GeneratedFile, ImageAttachment, ProjectOptions

def construct_full_prompt(prompt: str, options: ProjectOptions, is_first_request: bool) -> str:
    """Wrap the user's text with the initial setup or the follow-up header."""
    if not is_first_request:
        return FOLLOW_UP_TEMPLATE.format(prompt=prompt)

    module_system_line = ""
    if options.uses_module_system:
        module_system_line = f"- Module System: {options.module_system}"

    return INITIAL_REQUEST_TEMPLATE.format(
        language=options.language,
        platform=options.platform,
        module_system_line=module_system_line,
        database=options.database,
        prompt=prompt,
    )

def build_contents(
    prompt: str,
    existing_files: List[GeneratedFile],
    image: Optional[ImageAttachment] = None,
) -> List[Dict[str, Any]]:
    payload = {
        "prompt": prompt,
        "existingFiles": [f.model_dump() for f in existing_files],
    }
    parts: List[Dict[str, Any]] = [
        {"text": f"{REQUEST_PREAMBLE}\n\n{json.dumps(payload, ensure_ascii=False)}"}
    ]

    if image is not None:
        parts.append(
            {
                "inlineData": {
                    "mimeType": image.mime_type,
                    "data": image.data,
                }
            }
        )

    return parts
