from fastapi import APIRouter

from research_assistant.utils.logger import logger

health_router = APIRouter()


@health_router.get('/health')
def health_check():
	logger.debug('Health check requested')
	return {'status': 'ok'}
