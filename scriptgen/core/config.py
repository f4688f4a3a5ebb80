# scriptgen/core/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
DEFAULT_MODEL = "gemini-2.5-flash"

@dataclass(frozen=True)
class Settings:
    gemini_api_key: Optional[str]
    gemini_base_url: str
    gemini_model: str
    gemini_timeout: float
    gemini_temperature: float
    log_level: str
    host: str
    port: int

    @staticmethod
    def from_env() -> "Settings":
        api_key = (
            os.getenv("GEMINI_API_KEY")
            or os.getenv("GOOGLE_API_KEY")
            or os.getenv("API_KEY")
        )
        base = os.getenv("GEMINI_BASE_URL", DEFAULT_BASE_URL).rstrip("/")
        model = os.getenv("GEMINI_MODEL", DEFAULT_MODEL)
        timeout = float(os.getenv("GEMINI_TIMEOUT", "180"))
        temperature = float(os.getenv("GEMINI_TEMPERATURE", "0.3"))
        return Settings(
            gemini_api_key=api_key.strip() if api_key else None,
            gemini_base_url=base,
            gemini_model=model,
            gemini_timeout=timeout,
            gemini_temperature=temperature,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
        )
