from contextlib import asynccontextmanager

import requests
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from research_assistant.api.routes.health import health_router
from research_assistant.api.routes.research import research_router
from research_assistant.api.routes.status import status_router
from research_assistant.api.routes.works import works_router
from research_assistant.config.settings import Settings, settings
from research_assistant.core.availability import AvailabilityRegistry
from research_assistant.core.errors import ConfigurationError, InvalidRequestError, ProviderError
from research_assistant.core.orchestrator import ResearchPipeline
from research_assistant.core.retry import RetryPolicy
from research_assistant.utils.logger import logger, setup_logger


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(InvalidRequestError)
	async def invalid_request(request: Request, exc: InvalidRequestError):
		return JSONResponse(status_code=400, content={'error': str(exc)})

	@app.exception_handler(ConfigurationError)
	async def configuration_error(request: Request, exc: ConfigurationError):
		logger.error(f'Research API error: {exc}')
		return JSONResponse(status_code=500, content={'error': f'Research failed: {exc}'})

	@app.exception_handler(ProviderError)
	async def provider_error(request: Request, exc: ProviderError):
		logger.error(f'{exc.provider} route error: {exc}')
		return JSONResponse(status_code=502, content={'error': str(exc)})


def create_app(
	config: Settings | None = None,
	session: requests.Session | None = None,
	retry_policy: RetryPolicy | None = None,
) -> FastAPI:
	config = config or settings
	setup_logger(config)
	logger.info(f'Starting {config.APP_NAME} FastAPI application...')

	@asynccontextmanager
	async def lifespan(app: FastAPI):
		logger.info('FastAPI app startup complete.')
		yield
		logger.info('FastAPI app shutdown complete.')

	app = FastAPI(
		title=config.APP_NAME,
		version='0.1.0',
		description='Multi-provider research evidence aggregation',
		lifespan=lifespan,
	)

	availability = AvailabilityRegistry.from_settings(config)
	pipeline = ResearchPipeline.from_settings(config, availability, session, retry_policy)
	app.state.settings = config
	app.state.availability = availability
	app.state.pipeline = pipeline
	app.state.academic = pipeline.academic

	register_exception_handlers(app)
	app.include_router(health_router, prefix='/api')
	app.include_router(status_router, prefix='/api')
	app.include_router(research_router, prefix='/api')
	app.include_router(works_router, prefix='/api')

	return app


app = create_app()
