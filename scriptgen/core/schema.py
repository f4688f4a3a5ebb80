# scriptgen/core/schema.py
from __future__ import annotations

from typing import Any, Dict

# OpenAPI subset accepted by Gemini's generationConfig.responseSchema
RESPONSE_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "files": {
            "type": "ARRAY",
            "description": (
                "The complete and updated array of all file objects for the project. "
                "If modifying, return all files, not just the changed ones."
            ),
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": {
                        "type": "STRING",
                        "description": (
                            "The full file path, including any subdirectories "
                            "(e.g., 'src/index.js', 'package.json')."
                        ),
                    },
                    "content": {
                        "type": "STRING",
                        "description": "The complete code or text content of the file.",
                    },
                },
                "required": ["name", "content"],
            },
        },
    },
    "required": ["files"],
}
