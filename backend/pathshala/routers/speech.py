from fastapi import APIRouter, Depends

from ..deps import get_gemini_client, run_flow
from ..gemini_client import GeminiClient
from ..flows import speech

router = APIRouter(prefix="/speech", tags=["speech"])


@router.post("/transcribe", response_model=speech.SpeechToTextResponse)
async def transcribe(req: speech.SpeechToTextRequest, client: GeminiClient = Depends(get_gemini_client)):
	return await run_flow(speech.speech_to_text, client, req)


@router.post("/read-aloud", response_model=speech.ReadAloudResponse)
async def read_aloud(req: speech.ReadAloudRequest, client: GeminiClient = Depends(get_gemini_client)):
	# Result is a data:audio/wav URI the browser can play directly
	return await run_flow(speech.read_aloud, client, req)
