from __future__ import annotations
import base64
import binascii
import json
import re
import httpx
from typing import Any, Dict, List, Optional, Union
from .errors import GeminiError, MissingMediaError
from .media import to_data_uri
from .settings import settings

Parts = List[Dict[str, Any]]


def extract_json_object(text: str) -> Dict[str, Any]:
	"""Parse a JSON object out of raw, ```json fenced, or embedded model text."""
	candidates = [text]
	code_block = re.search(r"```(?:json)?\s*([\s\S]*?)\s*```", text)
	if code_block:
		candidates.append(code_block.group(1))
	first = text.find("{")
	last = text.rfind("}")
	if first != -1 and last > first:
		candidates.append(text[first : last + 1])
	for candidate in candidates:
		try:
			data = json.loads(candidate)
		except ValueError:
			continue
		if isinstance(data, dict):
			return data
	raise GeminiError("Model did not return a JSON object")


class GeminiClient:
	def __init__(
		self,
		api_key: Optional[str] = None,
		*,
		model: Optional[str] = None,
		timeout: Optional[float] = None,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		self.api_key = api_key or settings.gemini_api_key
		if not self.api_key:
			raise ValueError("GEMINI_API_KEY is not configured")
		self.model = model or settings.gemini_model
		self.provider = settings.gemini_provider
		# Google AI Studio takes the key as a query param, Vertex as a header
		self._auth_in_query = self.provider != "vertex"
		self._client = httpx.AsyncClient(timeout=timeout or settings.gemini_timeout_seconds, transport=transport)

	def endpoint(self, model: str) -> str:
		if self.provider == "vertex":
			region = settings.vertex_region
			project = settings.vertex_project or "placeholder-project"
			return f"https://{region}-aiplatform.googleapis.com/v1/projects/{project}/locations/{region}/publishers/google/models/{model}:generateContent"
		return f"https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

	async def generate(self, prompt: str, *, model: Optional[str] = None) -> str:
		return await self.generate_multimodal([{"text": prompt}], model=model)

	async def generate_multimodal(
		self,
		parts: Parts,
		*,
		role: str = "user",
		model: Optional[str] = None,
		generation_config: Optional[Dict[str, Any]] = None,
	) -> str:
		payload: Dict[str, Any] = {"contents": [{"role": role, "parts": parts}]}
		if generation_config:
			payload["generationConfig"] = generation_config
		data = await self._post_payload(payload, model=model or self.model)
		texts = [p["text"] for p in self._candidate_parts(data) if isinstance(p.get("text"), str)]
		text = "".join(texts).strip()
		if not text:
			raise GeminiError("Gemini returned an empty text response")
		return text

	async def generate_json(self, prompt: Union[str, Parts], *, model: Optional[str] = None) -> Dict[str, Any]:
		parts = [{"text": prompt}] if isinstance(prompt, str) else prompt
		text = await self.generate_multimodal(
			parts,
			model=model,
			generation_config={"responseMimeType": "application/json"},
		)
		return extract_json_object(text)

	async def generate_image(self, prompt: str, *, model: Optional[str] = None) -> str:
		payload: Dict[str, Any] = {
			"contents": [{"role": "user", "parts": [{"text": prompt}]}],
			"generationConfig": {"responseModalities": ["TEXT", "IMAGE"]},
		}
		data = await self._post_payload(payload, model=model or settings.gemini_image_model)
		mime, raw = self._first_inline(data, "image/")
		return to_data_uri(mime, raw)

	async def generate_speech(self, text: str, *, voice: Optional[str] = None, model: Optional[str] = None) -> bytes:
		"""Synthesize ``text``; returns headerless PCM (mono, 24 kHz, 16-bit)."""
		payload: Dict[str, Any] = {
			"contents": [{"role": "user", "parts": [{"text": text}]}],
			"generationConfig": {
				"responseModalities": ["AUDIO"],
				"speechConfig": {
					"voiceConfig": {"prebuiltVoiceConfig": {"voiceName": voice or settings.gemini_tts_voice}},
				},
			},
		}
		data = await self._post_payload(payload, model=model or settings.gemini_tts_model)
		_, pcm = self._first_inline(data, "audio/")
		return pcm

	async def _post_payload(self, payload: Dict[str, Any], *, model: str) -> Dict[str, Any]:
		params: Dict[str, Any] = {}
		headers: Dict[str, str] = {}
		if self._auth_in_query:
			params["key"] = self.api_key
		else:
			headers["x-goog-api-key"] = self.api_key
		try:
			r = await self._client.post(self.endpoint(model), params=params, headers=headers, json=payload)
			r.raise_for_status()
		except httpx.HTTPStatusError as http_err:
			status = http_err.response.status_code
			raise GeminiError(f"Gemini HTTP {status}: {http_err.response.text[:300]}", status_code=status) from http_err
		except httpx.RequestError as net_err:
			raise GeminiError(f"Gemini request failed: {net_err}") from net_err
		try:
			data = r.json()
		except ValueError as err:
			raise GeminiError(f"Unexpected Gemini response: {r.text[:300]}") from err
		if not isinstance(data, dict):
			raise GeminiError(f"Unexpected Gemini response: {r.text[:300]}")
		return data

	@staticmethod
	def _candidate_parts(data: Dict[str, Any]) -> Parts:
		try:
			parts = data["candidates"][0]["content"]["parts"]
		except (KeyError, IndexError, TypeError):
			reason = (data.get("promptFeedback") or {}).get("blockReason")
			detail = f" (blocked: {reason})" if reason else ""
			raise GeminiError(f"Gemini response has no content{detail}")
		return [p for p in parts if isinstance(p, dict)]

	@classmethod
	def _first_inline(cls, data: Dict[str, Any], mime_prefix: str) -> tuple[str, bytes]:
		for part in cls._candidate_parts(data):
			inline = part.get("inlineData") or part.get("inline_data")
			if not isinstance(inline, dict):
				continue
			mime = str(inline.get("mimeType") or inline.get("mime_type") or "")
			if not mime.startswith(mime_prefix):
				continue
			try:
				return mime, base64.b64decode(inline.get("data") or "", validate=True)
			except (binascii.Error, ValueError) as err:
				raise GeminiError(f"Gemini returned undecodable {mime} data") from err
		raise MissingMediaError(f"No {mime_prefix}* media returned by Gemini")

	async def aclose(self) -> None:
		await self._client.aclose()
