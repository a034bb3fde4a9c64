import logging

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from .settings import settings
from .routers import health, content, assessment, speech, navigator

logging.basicConfig(
	level=getattr(logging, settings.log_level.upper(), logging.INFO),
	format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Pathshala Teaching Assistant API")
app.include_router(health.router)
app.include_router(content.router)
app.include_router(assessment.router)
app.include_router(speech.router)
app.include_router(navigator.router)

@app.get("/", include_in_schema=False)
async def redirect_root_to_docs():
	return RedirectResponse(url="/docs")

@app.get("/info")
def root():
	return {"status": "ok", "gemini_configured": bool(settings.gemini_api_key)}
