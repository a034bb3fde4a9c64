from __future__ import annotations
import logging
from typing import Any, AsyncIterator, Awaitable, Callable, TypeVar

from fastapi import HTTPException

from .errors import AudioEncodingError, FlowFailedError, FlowInputError
from .gemini_client import GeminiClient

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def get_gemini_client() -> AsyncIterator[GeminiClient]:
	try:
		client = GeminiClient()
	except ValueError as e:
		raise HTTPException(status_code=503, detail=str(e))
	try:
		yield client
	finally:
		await client.aclose()


async def run_flow(flow_fn: Callable[[Any, Any], Awaitable[T]], client: Any, payload: Any) -> T:
	"""Invoke a flow and translate its failures into HTTP errors for the UI."""
	try:
		return await flow_fn(client, payload)
	except FlowInputError as e:
		raise HTTPException(status_code=422, detail=e.errors)
	except FlowFailedError as e:
		raise HTTPException(status_code=502, detail=f"{e.flow} is unavailable, please try again ({e.attempts} attempts)")
	except AudioEncodingError as e:
		logger.exception("Audio encoding failed")
		raise HTTPException(status_code=500, detail=str(e))
