from fastapi import APIRouter, Request

from research_assistant.core.errors import InvalidRequestError
from research_assistant.models import ResearchRequest

research_router = APIRouter()


@research_router.post('/research')
def research(body: ResearchRequest, request: Request):
	if not body.query.strip():
		raise InvalidRequestError('Missing query')
	return request.app.state.pipeline.run(body)
