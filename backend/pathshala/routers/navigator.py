from fastapi import APIRouter, Depends

from ..deps import get_gemini_client, run_flow
from ..gemini_client import GeminiClient
from ..flows import navigation

router = APIRouter(prefix="/navigator", tags=["navigator"])


@router.post("", response_model=navigation.NavigationResponse)
async def navigate(req: navigation.NavigationRequest, client: GeminiClient = Depends(get_gemini_client)):
	return await run_flow(navigation.navigate, client, req)
