from fastapi import APIRouter, Request

status_router = APIRouter()


@status_router.get('/status')
def api_status(request: Request) -> dict[str, bool]:
	return request.app.state.availability.status()
