import asyncio
import base64
import json

import httpx
import pytest

from pathshala import gemini_client as gc
from pathshala.errors import GeminiError, MissingMediaError


def text_response(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def make_client(handler):
    return gc.GeminiClient(api_key="test-key", model="gemini-test", transport=httpx.MockTransport(handler))


def call(handler, method, *args, **kwargs):
    async def go():
        client = make_client(handler)
        try:
            return await getattr(client, method)(*args, **kwargs)
        finally:
            await client.aclose()

    return asyncio.run(go())


def test_generate_json_requests_json_and_parses_fenced_output():
    seen = []

    def handler(request: httpx.Request):
        seen.append(request)
        return httpx.Response(200, json=text_response('```json\n{"question": "What is 2+2?"}\n```'))

    result = call(handler, "generate_json", "make a question")

    assert result == {"question": "What is 2+2?"}
    request = seen[0]
    assert request.url.params["key"] == "test-key"
    assert "models/gemini-test:generateContent" in request.url.path
    body = json.loads(request.content)
    assert body["generationConfig"]["responseMimeType"] == "application/json"
    assert body["contents"][0]["parts"] == [{"text": "make a question"}]


def test_http_error_becomes_gemini_error():
    def handler(request):
        return httpx.Response(503, text="overloaded")

    with pytest.raises(GeminiError) as excinfo:
        call(handler, "generate", "hi")
    assert excinfo.value.status_code == 503


def test_network_error_becomes_gemini_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(GeminiError):
        call(handler, "generate", "hi")


@pytest.mark.parametrize(
    "payload",
    [{}, {"candidates": []}, {"promptFeedback": {"blockReason": "SAFETY"}}, text_response("")],
)
def test_empty_or_blocked_response(payload):
    def handler(request):
        return httpx.Response(200, json=payload)

    with pytest.raises(GeminiError):
        call(handler, "generate", "hi")


def test_non_json_text_is_gemini_error():
    def handler(request):
        return httpx.Response(200, json=text_response("Sorry, I cannot help with that."))

    with pytest.raises(GeminiError):
        call(handler, "generate_json", "hi")


def test_generate_speech_returns_raw_pcm():
    pcm = b"\x00\x01\x02\x03"
    seen = []

    def handler(request):
        seen.append(json.loads(request.content))
        part = {"inlineData": {"mimeType": "audio/L16;codec=pcm;rate=24000", "data": base64.b64encode(pcm).decode()}}
        return httpx.Response(200, json={"candidates": [{"content": {"parts": [part]}}]})

    assert call(handler, "generate_speech", "read this", voice="Kore") == pcm
    config = seen[0]["generationConfig"]
    assert config["responseModalities"] == ["AUDIO"]
    assert config["speechConfig"]["voiceConfig"]["prebuiltVoiceConfig"]["voiceName"] == "Kore"


def test_generate_image_returns_data_uri():
    def handler(request):
        parts = [
            {"text": "Here is your drawing"},
            {"inlineData": {"mimeType": "image/png", "data": base64.b64encode(b"png").decode()}},
        ]
        return httpx.Response(200, json={"candidates": [{"content": {"parts": parts}}]})

    assert call(handler, "generate_image", "a leaf") == "data:image/png;base64," + base64.b64encode(b"png").decode()


def test_generate_image_without_media():
    def handler(request):
        return httpx.Response(200, json=text_response("I can only describe it."))

    with pytest.raises(MissingMediaError):
        call(handler, "generate_image", "a leaf")


def test_missing_api_key(monkeypatch):
    monkeypatch.setattr(gc.settings, "gemini_api_key", None)
    with pytest.raises(ValueError):
        gc.GeminiClient()


def test_vertex_uses_header_auth(monkeypatch):
    monkeypatch.setattr(gc.settings, "gemini_provider", "vertex")
    monkeypatch.setattr(gc.settings, "vertex_project", "demo")
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=text_response("ok"))

    assert call(handler, "generate", "hi") == "ok"
    assert seen[0].headers["x-goog-api-key"] == "test-key"
    assert "key" not in seen[0].url.params
    assert seen[0].url.host == "us-central1-aiplatform.googleapis.com"


@pytest.mark.parametrize(
    "text",
    ['{"a": 1}', 'Sure!\n```json\n{"a": 1}\n```', 'prefix {"a": 1} suffix', '```\n{"a": 1}\n```'],
)
def test_extract_json_object(text):
    assert gc.extract_json_object(text) == {"a": 1}


def test_extract_json_object_rejects_arrays():
    with pytest.raises(GeminiError):
        gc.extract_json_object("[1, 2, 3]")
