from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
	# Provider can be "vertex" (Vertex AI Express) or "ai_studio" (Generative Language API)
	gemini_provider: str = Field(default="ai_studio", validation_alias="GEMINI_PROVIDER")
	# Text and multimodal flows
	gemini_model: str = Field(default="gemini-2.0-flash", validation_alias="GEMINI_MODEL")
	# Illustrations for visual aids, stories and local content
	gemini_image_model: str = Field(default="gemini-2.0-flash-preview-image-generation", validation_alias="GEMINI_IMAGE_MODEL")
	# Read-aloud; the TTS model streams mono 24 kHz 16-bit PCM
	gemini_tts_model: str = Field(default="gemini-2.5-flash-preview-tts", validation_alias="GEMINI_TTS_MODEL")
	gemini_tts_voice: str = Field(default="Achernar", validation_alias="GEMINI_TTS_VOICE")
	gemini_timeout_seconds: float = Field(default=30, validation_alias="GEMINI_TIMEOUT_SECONDS")
	# Vertex configuration
	vertex_region: str = Field(default="us-central1", validation_alias="GEMINI_VERTEX_REGION")
	vertex_project: str | None = Field(default=None, validation_alias="GEMINI_VERTEX_PROJECT")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
