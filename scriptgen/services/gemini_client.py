# scriptgen/services/gemini_client.py
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import requests as http_requests

from scriptgen.core.config import Settings
from scriptgen.core.errors import ScaffoldGenerationError
from scriptgen.core.prompt import SYSTEM_INSTRUCTION
from scriptgen.core.schema import RESPONSE_SCHEMA
from scriptgen.models.scaffold import GeneratedFile, ImageAttachment
from scriptgen.services.coerce import coerce_to_files
from scriptgen.services.prompt_builder import build_contents
from scriptgen.services.validation import validate_model_response

logger = logging.getLogger(__name__)

EMPTY_RESPONSE_MESSAGE = "API returned an empty response. Please try rephrasing your request."
INVALID_FORMAT_MESSAGE = (
    "The API returned an invalid format. "
    "This might be due to a complex or unsupported request."
)

def extract_text(data: Dict[str, Any]) -> str:
    """Join the text parts of the first candidate."""
    candidates = data.get("candidates") or []
    if not candidates:
        return ""
    parts = ((candidates[0] or {}).get("content") or {}).get("parts") or []
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict)).strip()

class GeminiClient:
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings.from_env()
        self.base_url = self.settings.gemini_base_url.rstrip("/")
        self.url = f"{self.base_url}/v1beta/models/{self.settings.gemini_model}:generateContent"

    def build_payload(
        self,
        prompt: str,
        existing_files: List[GeneratedFile],
        image: Optional[ImageAttachment] = None,
    ) -> Dict[str, Any]:
        return {
            "systemInstruction": {"parts": [{"text": SYSTEM_INSTRUCTION}]},
            "contents": [{"role": "user", "parts": build_contents(prompt, existing_files, image)}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": RESPONSE_SCHEMA,
                "temperature": self.settings.gemini_temperature,
            },
        }

    def generate_files(
        self,
        prompt: str,
        existing_files: List[GeneratedFile],
        image: Optional[ImageAttachment] = None,
    ) -> List[GeneratedFile]:
        if not self.settings.gemini_api_key:
            raise ScaffoldGenerationError(
                "No API key configured. Set GEMINI_API_KEY or GOOGLE_API_KEY."
            )

        payload = self.build_payload(prompt, existing_files, image)
        logger.info(
            "Requesting scaffold from %s (existing_files=%d, image=%s)",
            self.settings.gemini_model,
            len(existing_files),
            image is not None,
        )
        try:
            resp = http_requests.post(
                self.url,
                json=payload,
                headers={"x-goog-api-key": self.settings.gemini_api_key},
                timeout=self.settings.gemini_timeout,
            )
            resp.raise_for_status()
            data = resp.json()
        except (http_requests.RequestException, ValueError) as ex:
            logger.error("Generation request failed: %s", ex)
            raise ScaffoldGenerationError(
                f"The generation service request failed: {type(ex).__name__}"
            ) from ex

        json_string = extract_text(data)
        if not json_string:
            raise ScaffoldGenerationError(EMPTY_RESPONSE_MESSAGE)

        try:
            obj = json.loads(json_string)
            validate_model_response(obj)
        except ValueError as ex:
            logger.error("Failed to parse JSON response: %s (%s)", json_string, ex)
            raise ScaffoldGenerationError(INVALID_FORMAT_MESSAGE) from ex

        files = coerce_to_files(obj["files"])
        logger.info("Received %d files", len(files))
        return files
