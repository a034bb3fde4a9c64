from fastapi import APIRouter, Depends

from ..deps import get_gemini_client, run_flow
from ..gemini_client import GeminiClient
from ..flows import content

router = APIRouter(prefix="/content", tags=["content"])


@router.post("/local", response_model=content.LocalContentResponse)
async def local_content(req: content.LocalContentRequest, client: GeminiClient = Depends(get_gemini_client)):
	return await run_flow(content.generate_local_content, client, req)


@router.post("/story", response_model=content.StoryResponse)
async def story(req: content.StoryRequest, client: GeminiClient = Depends(get_gemini_client)):
	return await run_flow(content.generate_story, client, req)


@router.post("/visual-aid", response_model=content.VisualAidResponse)
async def visual_aid(req: content.VisualAidRequest, client: GeminiClient = Depends(get_gemini_client)):
	return await run_flow(content.generate_visual_aid, client, req)


@router.post("/worksheets", response_model=content.WorksheetResponse)
async def worksheets(req: content.WorksheetRequest, client: GeminiClient = Depends(get_gemini_client)):
	return await run_flow(content.generate_differentiated_worksheet, client, req)


@router.post("/game", response_model=content.GameResponse)
async def game(req: content.GameRequest, client: GeminiClient = Depends(get_gemini_client)):
	return await run_flow(content.generate_game, client, req)


@router.post("/lesson-plan", response_model=content.LessonPlanResponse)
async def lesson_plan(req: content.LessonPlanRequest, client: GeminiClient = Depends(get_gemini_client)):
	return await run_flow(content.generate_lesson_plan, client, req)
