# scriptgen/services/session.py
from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass
from typing import Dict, List, Optional

from scriptgen.core.errors import ScaffoldGenerationError, SessionBusyError
from scriptgen.models.scaffold import (
    ChatTurn,
    GeneratedFile,
    ImageAttachment,
    ProjectOptions,
)
from scriptgen.services.gemini_client import GeminiClient
from scriptgen.services.prompt_builder import construct_full_prompt

logger = logging.getLogger(__name__)

FILES_READY_MESSAGE = "Project files are ready or have been updated."
IMAGE_PLACEHOLDER = "User uploaded an image."

@dataclass
class TurnOutcome:
    reply: str
    files: List[GeneratedFile]
    error: Optional[str] = None

class ScaffoldSession:
    """One conversation and the file set it has produced so far.

    Each successful turn snapshots the full file set. The next prompt
    resubmits the most recent snapshot, so the model always edits the
    latest project.
    """

    def __init__(self, client: GeminiClient, session_id: Optional[str] = None):
        self.client = client
        self.session_id = session_id or uuid.uuid4().hex
        self.history: List[ChatTurn] = []
        self.is_first_request = True
        self.is_loading = False
        self.error: Optional[str] = None
        self._lock = threading.Lock()

    def latest_files(self) -> Optional[List[GeneratedFile]]:
        for turn in reversed(self.history):
            if turn.role == "assistant" and turn.files is not None:
                return turn.files
        return None

    def first_user_message(self) -> Optional[str]:
        for turn in self.history:
            if turn.role == "user":
                return turn.content
        return None

    def _begin(self) -> None:
        with self._lock:
            if self.is_loading:
                raise SessionBusyError(f"Session {self.session_id} already has a request in flight")
            self.is_loading = True

    def _end(self) -> None:
        with self._lock:
            self.is_loading = False

    def submit(
        self,
        prompt: str,
        options: Optional[ProjectOptions] = None,
        image: Optional[ImageAttachment] = None,
    ) -> TurnOutcome:
        if not prompt or not prompt.strip():
            raise ValueError("Prompt must not be empty")

        self._begin()
        self.error = None
        try:
            full_prompt = construct_full_prompt(
                prompt, options or ProjectOptions(), self.is_first_request
            )
            current_files = list(self.latest_files() or [])

            user_files = None
            if image is not None:
                user_files = [GeneratedFile(name=image.filename, content=IMAGE_PLACEHOLDER)]
            self.history.append(ChatTurn(role="user", content=prompt, files=user_files))

            logger.info(
                "Session %s: turn %d (first=%s, files=%d)",
                self.session_id,
                len(self.history),
                self.is_first_request,
                len(current_files),
            )
            try:
                files = self.client.generate_files(full_prompt, current_files, image)
            except ScaffoldGenerationError as ex:
                message = str(ex) or "An unknown error occurred."
                logger.warning("Session %s: generation failed: %s", self.session_id, message)
                self.history.append(ChatTurn(role="system", content=f"Error: {message}"))
                self.error = message
                return TurnOutcome(
                    reply=f"Error: {message}",
                    files=list(self.latest_files() or []),
                    error=message,
                )

            self.history.append(ChatTurn(role="assistant", content=FILES_READY_MESSAGE, files=files))
            self.is_first_request = False
            return TurnOutcome(reply=FILES_READY_MESSAGE, files=files)
        finally:
            self._end()

class SessionStore:
    def __init__(self, client: GeminiClient):
        self.client = client
        self._sessions: Dict[str, ScaffoldSession] = {}
        self._lock = threading.Lock()

    def create(self) -> ScaffoldSession:
        session = ScaffoldSession(self.client)
        with self._lock:
            self._sessions[session.session_id] = session
        logger.info("Created session %s", session.session_id)
        return session

    def get(self, session_id: str) -> ScaffoldSession:
        with self._lock:
            return self._sessions[session_id]

    def delete(self, session_id: str) -> None:
        with self._lock:
            del self._sessions[session_id]
        logger.info("Deleted session %s", session_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
