from fastapi import APIRouter, Depends

from ..deps import get_gemini_client, run_flow
from ..gemini_client import GeminiClient
from ..flows import assessment

router = APIRouter(prefix="/assessment", tags=["assessment"])


@router.post("/assignment", response_model=assessment.AssignmentResponse)
async def assignment(req: assessment.AssignmentRequest, client: GeminiClient = Depends(get_gemini_client)):
	return await run_flow(assessment.generate_assignment, client, req)


@router.post("/assignment/evaluate", response_model=assessment.EvaluationResponse)
async def evaluate(req: assessment.EvaluationRequest, client: GeminiClient = Depends(get_gemini_client)):
	return await run_flow(assessment.evaluate_assignment, client, req)


@router.post("/reading", response_model=assessment.ReadingAssessmentResponse)
async def reading(req: assessment.ReadingAssessmentRequest, client: GeminiClient = Depends(get_gemini_client)):
	return await run_flow(assessment.assess_reading, client, req)


@router.post("/knowledge", response_model=assessment.KnowledgeResponse)
async def knowledge(req: assessment.KnowledgeRequest, client: GeminiClient = Depends(get_gemini_client)):
	return await run_flow(assessment.answer_question, client, req)
