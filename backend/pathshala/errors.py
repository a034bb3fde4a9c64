"""Exception hierarchy shared by the Gemini client, the flows and the routers."""
from __future__ import annotations

from typing import Any, Dict, List, Optional


class GeminiError(RuntimeError):
    """A single call to the generative model failed (transport, status or shape)."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MissingMediaError(GeminiError):
    """The model answered but returned no image/audio part."""


class FlowError(Exception):
    """Base class for failures surfaced by a flow invocation."""


class FlowInputError(FlowError):
    """Caller input does not match the flow's input shape. Never retried."""

    def __init__(self, flow: str, errors: List[Dict[str, Any]]) -> None:
        super().__init__(f"{flow}: invalid input ({len(errors)} error(s))")
        self.flow = flow
        self.errors = errors


class FlowOutputError(FlowError):
    """Model output was absent or did not match the flow's output shape."""


class FlowFailedError(FlowError):
    """Attempt budget exhausted; the last attempt's error is chained as __cause__."""

    def __init__(self, flow: str, attempts: int, last_error: BaseException) -> None:
        super().__init__(f"{flow} failed after {attempts} attempt(s): {last_error}")
        self.flow = flow
        self.attempts = attempts
        self.last_error = last_error


class AudioEncodingError(FlowError):
    """PCM could not be wrapped into a WAV container."""
