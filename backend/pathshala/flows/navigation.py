from __future__ import annotations

from typing import Any, Dict, Literal

from pydantic import BaseModel, Field

from ..gemini_client import GeminiClient
from .base import flow

# Feature key -> (label, what it does). Keys match the UI tab identifiers.
FEATURES: Dict[str, tuple[str, str]] = {
    "local-content": ("Content Generator", "Generate stories in a local language to explain concepts."),
    "differentiated-content": ("Worksheet Generator", "Create worksheets for different grade levels from a textbook page."),
    "visual-aid": ("Visual Aid", "Design simple line drawings or charts for a blackboard."),
    "reading-assessment": ("Reading Assessment", "Assess a student's reading from an audio recording."),
    "game-generator": ("Game Generator", "Create fun, low-resource educational games."),
    "lesson-planner": ("Lesson Planner", "Generate a 5-day lesson plan for a topic."),
    "self-assessment": ("Self Assessment", "Create a practice question and get AI feedback on the answer."),
}

NavigationTarget = Literal[
    "local-content",
    "differentiated-content",
    "visual-aid",
    "reading-assessment",
    "game-generator",
    "lesson-planner",
    "self-assessment",
    "unknown",
]


class NavigationRequest(BaseModel):
    query: str = Field(min_length=5)


class NavigationResponse(BaseModel):
    suggestion: str
    target: NavigationTarget


def _navigation_prompt(data: NavigationRequest) -> str:
    catalog = "\n".join(f"- '{label}' (key: '{key}'): {summary}" for key, (label, summary) in FEATURES.items())
    return (
        "You are the navigation assistant of the Pathshala AI application. Work out which feature "
        "the user needs and guide them to it.\n\n"
        f"Available features:\n{catalog}\n\n"
        "Give a short, friendly suggestion and set target to the key of the best matching feature. "
        "If the request is unclear or matches nothing, set target to 'unknown' and ask for clarification.\n\n"
        f'User Query: "{data.query}"\n\n'
        "Return ONLY a JSON object with keys: suggestion, target."
    )


@flow("navigation_assistant", input_model=NavigationRequest, output_model=NavigationResponse)
async def navigate(client: GeminiClient, data: NavigationRequest) -> Dict[str, Any]:
    return await client.generate_json(_navigation_prompt(data))
