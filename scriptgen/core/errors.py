# scriptgen/core/errors.py
from __future__ import annotations

class ScaffoldGenerationError(RuntimeError):
    """Generation failed; ``str(exc)`` is safe to show to the user."""

class SessionBusyError(RuntimeError):
    """A request is already in flight for this session."""
