import base64
from typing import Any, List

import pytest

from pathshala.flows import base


def _next(queue: List[Any], kind: str) -> Any:
    if not queue:
        raise AssertionError(f"unexpected {kind} call")
    item = queue.pop(0)
    if isinstance(item, BaseException):
        raise item
    return item


class FakeGemini:
    """Stands in for GeminiClient; each queue holds return values or exceptions to raise."""

    def __init__(self, json=None, images=None, speech=None):
        self.json_queue = list(json or [])
        self.image_queue = list(images or [])
        self.speech_queue = list(speech or [])
        self.json_calls: List[Any] = []
        self.image_calls: List[str] = []
        self.speech_calls: List[str] = []

    async def generate_json(self, prompt, *, model=None):
        self.json_calls.append(prompt)
        return _next(self.json_queue, "generate_json")

    async def generate_image(self, prompt, *, model=None):
        self.image_calls.append(prompt)
        return _next(self.image_queue, "generate_image")

    async def generate_speech(self, text, *, voice=None, model=None):
        self.speech_calls.append(text)
        return _next(self.speech_queue, "generate_speech")

    @property
    def total_calls(self) -> int:
        return len(self.json_calls) + len(self.image_calls) + len(self.speech_calls)


@pytest.fixture
def sleeps(monkeypatch):
    """Record backoff delays (seconds) instead of sleeping."""
    recorded: List[float] = []

    async def fake_sleep(seconds: float) -> None:
        recorded.append(seconds)

    monkeypatch.setattr(base, "_sleep", fake_sleep)
    return recorded


PNG_URI = "data:image/png;base64," + base64.b64encode(b"\x89PNG\r\n\x1a\n fake").decode()
WEBM_URI = "data:audio/webm;codecs=opus;base64," + base64.b64encode(b"\x1aE\xdf\xa3 fake audio").decode()


@pytest.fixture
def gemini():
    """Factory for FakeGemini instances."""
    return FakeGemini


@pytest.fixture
def png_uri():
    return PNG_URI


@pytest.fixture
def webm_uri():
    return WEBM_URI
