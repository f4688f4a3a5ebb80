# scriptgen/main.py
from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI

from scriptgen.core.config import Settings
from scriptgen.routes.scaffold import router as scaffold_router
from scriptgen.services.gemini_client import GeminiClient
from scriptgen.services.session import SessionStore

logger = logging.getLogger(__name__)

def create_app(settings: Settings | None = None, client: GeminiClient | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level)

    app = FastAPI(title="Script Generate", version="0.1.0")
    app.state.settings = settings
    app.state.client = client or GeminiClient(settings)
    app.state.store = SessionStore(app.state.client)
    app.include_router(scaffold_router)

    if not settings.gemini_api_key:
        logger.warning("No Gemini API key configured; generation requests will fail")
    logger.info("Using model %s at %s", settings.gemini_model, settings.gemini_base_url)
    return app

app = create_app()

def run() -> None:
    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
