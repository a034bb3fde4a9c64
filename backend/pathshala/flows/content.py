"""
Content-generation flows: local-language explanations, stories, visual aids,
differentiated worksheets, classroom games and weekly lesson plans.

Explanations and stories are two-step pipelines. The text is the primary
result and goes through the retrying ``@flow`` wrapper; the illustration is an
optional second call made once through ``best_effort``. When it fails the
response still carries the text, with ``image_url`` unset and a ``warning``.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..gemini_client import GeminiClient
from ..media import MAX_IMAGE_BYTES, check_media_uri, inline_part
from .base import best_effort, flow, validate_input


# ============================================================================
# Local-language explanation
# ============================================================================

class LocalContentRequest(BaseModel):
    concept: str = Field(min_length=5)
    language: str = Field(min_length=2)


class LocalContentText(BaseModel):
    explanation: str = Field(min_length=1)


class LocalContentResponse(LocalContentText):
    image_url: Optional[str] = None
    warning: Optional[str] = None


def _local_content_prompt(data: LocalContentRequest) -> str:
    return (
        "You are a helpful teacher. Write a short, simple essay that explains the concept below to a student.\n"
        "Write the essay in the requested language.\n\n"
        f"Concept: {data.concept}\n"
        f"Language: {data.language}\n\n"
        "Return ONLY a JSON object with exactly one key: explanation (string)."
    )


def _concept_illustration_prompt(concept: str) -> str:
    return (
        f'A vibrant, colorful and simple educational illustration for a child, explaining the concept of "{concept}". '
        "The style should be clear and easy to understand."
    )


@flow("local_content", input_model=LocalContentRequest, output_model=LocalContentText)
async def _local_content_text(client: GeminiClient, data: LocalContentRequest) -> Dict[str, Any]:
    return await client.generate_json(_local_content_prompt(data))


async def generate_local_content(client: GeminiClient, payload: Any) -> LocalContentResponse:
    data = validate_input("local_content", LocalContentRequest, payload)
    text = await _local_content_text(client, data)
    image = await best_effort(
        "illustration",
        lambda: client.generate_image(_concept_illustration_prompt(data.concept)),
    )
    return LocalContentResponse(explanation=text.explanation, image_url=image.value, warning=image.warning)


# ============================================================================
# Story
# ============================================================================

class StoryRequest(BaseModel):
    topic: str = Field(min_length=3)
    grade_level: str = Field(min_length=1)
    language: str = Field(min_length=2)


class StoryText(BaseModel):
    title: str = Field(min_length=1)
    story: str = Field(min_length=1)


class StoryResponse(StoryText):
    image_url: Optional[str] = None
    warning: Optional[str] = None


def _story_prompt(data: StoryRequest) -> str:
    return (
        "You are a creative storyteller for children in India.\n"
        "Write a short, engaging, culturally relevant story:\n"
        "- it must be educational and tied to the topic, or carry a clear moral;\n"
        "- it must suit the grade level;\n"
        "- names, places and language should feel authentic to a diverse, multilingual Indian setting;\n"
        "- write it in the requested language.\n\n"
        f"Topic: {data.topic}\n"
        f"Grade Level: {data.grade_level}\n"
        f"Language: {data.language}\n\n"
        "Return ONLY a JSON object with keys: title (string), story (string)."
    )


def _story_illustration_prompt(topic: str) -> str:
    return (
        f'A vibrant, colorful and simple educational illustration for a child, for a story about "{topic}". '
        "The style should be clear, friendly and culturally relevant for India."
    )


@flow("story", input_model=StoryRequest, output_model=StoryText)
async def _story_text(client: GeminiClient, data: StoryRequest) -> Dict[str, Any]:
    return await client.generate_json(_story_prompt(data))


async def generate_story(client: GeminiClient, payload: Any) -> StoryResponse:
    data = validate_input("story", StoryRequest, payload)
    text = await _story_text(client, data)
    image = await best_effort(
        "illustration",
        lambda: client.generate_image(_story_illustration_prompt(data.topic)),
    )
    return StoryResponse(title=text.title, story=text.story, image_url=image.value, warning=image.warning)


# ============================================================================
# Visual aid
# ============================================================================

class VisualAidRequest(BaseModel):
    description: str = Field(min_length=10)


class VisualAid(BaseModel):
    url: str = Field(pattern=r"^data:image/")


class VisualAidResponse(BaseModel):
    visual_aid: VisualAid


def _visual_aid_prompt(data: VisualAidRequest) -> str:
    return (
        "Draw a simple visual aid a teacher could reproduce on a blackboard: clean line drawing or chart, "
        "high contrast, minimal text labels.\n\n"
        f"Description: {data.description}"
    )


@flow("visual_aid", input_model=VisualAidRequest, output_model=VisualAidResponse)
async def generate_visual_aid(client: GeminiClient, data: VisualAidRequest) -> Dict[str, Any]:
    # The image is the whole result here, so a missing one is retried like any bad response
    url = await client.generate_image(_visual_aid_prompt(data))
    return {"visual_aid": {"url": url}}


# ============================================================================
# Differentiated worksheets
# ============================================================================

class WorksheetRequest(BaseModel):
    textbook_page_image: str
    grade_levels: str = Field(min_length=1)

    @field_validator("textbook_page_image")
    @classmethod
    def _check_image(cls, value: str) -> str:
        return check_media_uri(value, kind="image", max_bytes=MAX_IMAGE_BYTES)


class Worksheet(BaseModel):
    grade_level: str
    worksheet_content: str
    answer_key: str


class WorksheetResponse(BaseModel):
    worksheets: List[Worksheet] = Field(min_length=1)


def _worksheet_prompt(data: WorksheetRequest) -> str:
    return (
        "You are an expert educator who creates differentiated materials for multi-grade classrooms.\n"
        "The attached image is a photo of a textbook page. For EACH grade level listed below, write a worksheet "
        "covering the key concepts of the page at that grade's level, plus a matching answer key.\n\n"
        f"Grade Levels: {data.grade_levels}\n\n"
        "Return ONLY a JSON object with key worksheets: an array with one object per grade level, "
        "each with fields grade_level, worksheet_content, answer_key (all strings)."
    )


@flow("differentiated_worksheet", input_model=WorksheetRequest, output_model=WorksheetResponse)
async def generate_differentiated_worksheet(client: GeminiClient, data: WorksheetRequest) -> Dict[str, Any]:
    return await client.generate_json([{"text": _worksheet_prompt(data)}, inline_part(data.textbook_page_image)])


# ============================================================================
# Game
# ============================================================================

class GameRequest(BaseModel):
    topic: str = Field(min_length=3)
    grade_level: str = Field(min_length=1)
    language: str = Field(min_length=2)


class GameResponse(BaseModel):
    name: str
    description: str
    rules: str
    materials: str


def _game_prompt(data: GameRequest) -> str:
    return (
        "You are a game designer who makes fun, low-resource educational games for children in India.\n"
        "Design one game that teaches the topic, suits the grade level, has simple rules, and needs only "
        "materials found in a low-resource classroom or outdoors (chalk, stones, sticks, paper).\n"
        "Write everything in the requested language.\n\n"
        f"Topic: {data.topic}\n"
        f"Grade Level: {data.grade_level}\n"
        f"Language: {data.language}\n\n"
        "Return ONLY a JSON object with keys: name, description, rules (step-by-step), materials (all strings)."
    )


@flow("game", input_model=GameRequest, output_model=GameResponse)
async def generate_game(client: GeminiClient, data: GameRequest) -> Dict[str, Any]:
    return await client.generate_json(_game_prompt(data))


# ============================================================================
# Lesson plan
# ============================================================================

class LessonPlanRequest(BaseModel):
    subject: str = Field(min_length=3)
    grade_level: str = Field(min_length=1)
    topic: str = Field(min_length=5)
    language: str = Field(min_length=2)


class LessonDay(BaseModel):
    day: str
    topic: str
    activity: str
    materials: str


class LessonPlanResponse(BaseModel):
    plan: List[LessonDay] = Field(min_length=1)


def _lesson_plan_prompt(data: LessonPlanRequest) -> str:
    return (
        "You are a curriculum developer writing a 5-day lesson plan for a teacher in a low-resource school in India.\n"
        "Every day needs a focused objective, a simple engaging activity, and materials that are easy to find "
        "(blackboard, chalk, nature items, scrap paper). Write it in the requested language.\n\n"
        f"Subject: {data.subject}\n"
        f"Grade Level: {data.grade_level}\n"
        f"Weekly Topic: {data.topic}\n"
        f"Language: {data.language}\n\n"
        "Return ONLY a JSON object with key plan: an array of 5 objects with fields day, topic, activity, materials."
    )


@flow("lesson_plan", input_model=LessonPlanRequest, output_model=LessonPlanResponse)
async def generate_lesson_plan(client: GeminiClient, data: LessonPlanRequest) -> Dict[str, Any]:
    return await client.generate_json(_lesson_plan_prompt(data))
