from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	# Generation providers
	GROQ_API_KEY: str | None = None
	GOOGLE_GENERATIVE_AI_API_KEY: str | None = None

	# Search providers
	LANGSEARCH_API_KEY: str | None = None
	BRAVE_API_KEY: str | None = None
	GOOGLE_SEARCH_API_KEY: str | None = None
	GOOGLE_SEARCH_CSE_ID: str | None = None

	# Bibliographic providers
	OPENALEX_MAILTO: str | None = None
	OPENALEX_API_KEY: str | None = None
	CROSSREF_MAILTO: str | None = None

	# App Settings
	APP_NAME: str = 'Research Assistant'
	LOG_LEVEL: str = 'INFO'
	LOG_FILE: Path | None = None

	# Models
	GROQ_MODEL: str = 'llama-3.1-8b-instant'
	GEMINI_MODEL: str = 'gemini-1.5-flash'
	RERANK_MODEL: str = 'langsearch-reranker-v1'

	# Search behaviour
	HTTP_TIMEOUT_SECONDS: float = 15.0
	ENRICHMENT_TIMEOUT_SECONDS: float = 5.0
	ENRICH_RESULTS: bool = True
	SEARCH_CANDIDATE_POOL: int = 15
	RESEARCH_NUM_SOURCES: int = 10
	ACADEMIC_RESULTS_PER_PROVIDER: int = 3
	SEARCH_FRESHNESS: str = 'month'
	FAN_OUT_WORKERS: int = 4

	# Retry policy
	RETRY_MAX_ATTEMPTS: int = 3

	model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')


settings = Settings()
