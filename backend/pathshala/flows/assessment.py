from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field, field_validator

from ..gemini_client import GeminiClient
from ..media import MAX_AUDIO_BYTES, check_media_uri, inline_part
from .base import flow


# ---- Self-assessment: question generation ----

class AssignmentRequest(BaseModel):
    topic: str = Field(min_length=3)
    grade_level: str = Field(min_length=1)


class AssignmentResponse(BaseModel):
    question: str = Field(min_length=1)


def _assignment_prompt(data: AssignmentRequest) -> str:
    return (
        "You are a teacher creating a short self-assessment question for a student.\n"
        "Write ONE clear question about the topic, suitable for the grade level, that invites "
        "a written answer of a few sentences.\n\n"
        f"Topic: {data.topic}\n"
        f"Grade Level: {data.grade_level}\n\n"
        "Return ONLY a JSON object with exactly one key: question (string)."
    )


@flow("assignment_generator", input_model=AssignmentRequest, output_model=AssignmentResponse)
async def generate_assignment(client: GeminiClient, data: AssignmentRequest) -> Dict[str, Any]:
    return await client.generate_json(_assignment_prompt(data))


# ---- Self-assessment: answer evaluation ----

Score = Literal["Excellent", "Good", "Average", "Poor", "Bad"]

SCORE_EMOJI: Dict[str, str] = {
    "Excellent": "🏆",
    "Good": "😄",
    "Average": "🙂",
    "Poor": "😐",
    "Bad": "😞",
}


class EvaluationRequest(BaseModel):
    question: str = Field(min_length=1)
    answer: str = Field(min_length=10)


class EvaluationResponse(BaseModel):
    score: Score
    emoji: str = Field(min_length=1)
    feedback: str


def _evaluation_prompt(data: EvaluationRequest) -> str:
    scale = ", ".join(f"{score} ({emoji})" for score, emoji in SCORE_EMOJI.items())
    return (
        "You are a helpful teacher evaluating a student's self-assessment answer.\n"
        "1. Judge the correctness and clarity of the answer against the question.\n"
        f"2. Pick exactly one score from: {scale}.\n"
        "3. Use the emoji listed next to the chosen score.\n"
        "4. Write constructive feedback with concrete suggestions to improve.\n\n"
        f'Question: "{data.question}"\n'
        f'Student\'s Answer: "{data.answer}"\n\n'
        "Return ONLY a JSON object with keys: score, emoji, feedback."
    )


@flow("assignment_evaluator", input_model=EvaluationRequest, output_model=EvaluationResponse)
async def evaluate_assignment(client: GeminiClient, data: EvaluationRequest) -> Dict[str, Any]:
    return await client.generate_json(_evaluation_prompt(data))


# ---- Knowledge base ----

class KnowledgeRequest(BaseModel):
    question: str = Field(min_length=10)
    language: str = Field(min_length=2)


class KnowledgeResponse(BaseModel):
    explanation: str = Field(min_length=1)
    analogy: str


def _knowledge_prompt(data: KnowledgeRequest) -> str:
    return (
        "You are a helpful teacher explaining complex topics to students in their local language.\n"
        "Answer the question simply and accurately in the requested language, then give an "
        "easy-to-understand analogy in the same language.\n\n"
        f"Question: {data.question}\n"
        f"Language: {data.language}\n\n"
        "Return ONLY a JSON object with keys: explanation, analogy."
    )


@flow("knowledge_base", input_model=KnowledgeRequest, output_model=KnowledgeResponse)
async def answer_question(client: GeminiClient, data: KnowledgeRequest) -> Dict[str, Any]:
    return await client.generate_json(_knowledge_prompt(data))


# ---- Reading assessment ----

class ReadingAssessmentRequest(BaseModel):
    reference_text: str = Field(min_length=20)
    audio_data_uri: str
    language: str = Field(min_length=2)

    @field_validator("audio_data_uri")
    @classmethod
    def _check_audio(cls, value: str) -> str:
        return check_media_uri(value, kind="audio", max_bytes=MAX_AUDIO_BYTES)


class ReadingAssessmentResponse(BaseModel):
    transcribed_text: str
    accuracy: float = Field(ge=0, le=100)
    fluency: str
    mispronounced_words: List[str]
    feedback: str


def _reading_prompt(data: ReadingAssessmentRequest) -> str:
    return (
        "You are an expert reading coach. The attached audio is a student reading the reference text aloud.\n"
        "1. Transcribe the audio.\n"
        "2. Compare the transcription with the reference text.\n"
        "3. Compute reading accuracy as a percentage between 0 and 100 (e.g. 95.5).\n"
        "4. Describe fluency: pacing, intonation, rhythm (e.g. 'Good pace', 'Choppy', 'Monotone').\n"
        "5. List words that were likely mispronounced.\n"
        "6. Give constructive feedback.\n"
        "Write the assessment in the language of the reference text.\n\n"
        f"Language: {data.language}\n"
        f'Reference Text:\n"{data.reference_text}"\n\n'
        "Return ONLY a JSON object with keys: transcribed_text (string), accuracy (number), fluency (string), "
        "mispronounced_words (array of strings), feedback (string)."
    )


@flow("reading_assessment", input_model=ReadingAssessmentRequest, output_model=ReadingAssessmentResponse)
async def assess_reading(client: GeminiClient, data: ReadingAssessmentRequest) -> Dict[str, Any]:
    return await client.generate_json([{"text": _reading_prompt(data)}, inline_part(data.audio_data_uri)])
