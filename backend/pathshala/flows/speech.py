from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel, Field, field_validator

from ..audio import TTS_CHANNELS, TTS_SAMPLE_RATE, TTS_SAMPLE_WIDTH, wav_data_uri
from ..gemini_client import GeminiClient
from ..media import MAX_AUDIO_BYTES, check_media_uri, inline_part
from .base import flow


class SpeechToTextRequest(BaseModel):
    audio_data_uri: str

    @field_validator("audio_data_uri")
    @classmethod
    def _check_audio(cls, value: str) -> str:
        return check_media_uri(value, kind="audio", max_bytes=MAX_AUDIO_BYTES)


class SpeechToTextResponse(BaseModel):
    transcription: str


@flow("speech_to_text", input_model=SpeechToTextRequest, output_model=SpeechToTextResponse)
async def speech_to_text(client: GeminiClient, data: SpeechToTextRequest) -> Dict[str, Any]:
    return await client.generate_json(
        [
            {"text": "Transcribe the following audio recording to text. Return ONLY a JSON object with key transcription."},
            inline_part(data.audio_data_uri),
        ]
    )


class ReadAloudRequest(BaseModel):
    text: str = Field(min_length=1)


class ReadAloudResponse(BaseModel):
    audio_url: str = Field(pattern=r"^data:audio/wav;base64,")


@flow("read_aloud", input_model=ReadAloudRequest, output_model=ReadAloudResponse)
async def read_aloud(client: GeminiClient, data: ReadAloudRequest) -> Dict[str, Any]:
    pcm = await client.generate_speech(data.text)
    # AudioEncodingError is not retryable and surfaces as-is
    return {"audio_url": wav_data_uri(pcm, TTS_CHANNELS, TTS_SAMPLE_RATE, TTS_SAMPLE_WIDTH)}
