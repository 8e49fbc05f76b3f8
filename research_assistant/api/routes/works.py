from fastapi import APIRouter, Query, Request

from research_assistant.core.errors import InvalidRequestError
from research_assistant.models import ProviderId
from research_assistant.modules.search_provider.base import DEFAULT_PAGE_SIZE, clamp_page_size, leading_int

works_router = APIRouter()


def parse_page_size(*values: str | None, maximum: int) -> int:
	"""First non-empty value parsed like ``parseInt``; junk or zero means the default."""
	raw = next((value for value in values if value), None)
	if raw is None:
		return DEFAULT_PAGE_SIZE

	return clamp_page_size(leading_int(raw) or DEFAULT_PAGE_SIZE, maximum)


def require_query(q: str | None, query: str | None) -> str:
	value = q or query or ''
	if not value.strip():
		raise InvalidRequestError('Missing query parameter q')
	return value


def _provider(request: Request, provider_id: ProviderId):
	return request.app.state.academic.provider(provider_id)


@works_router.get('/openalex/works')
def openalex_works(
	request: Request,
	q: str | None = None,
	query: str | None = None,
	cursor: str | None = None,
	per_page: str | None = Query(None, alias='perPage'),
	per_page_dashed: str | None = Query(None, alias='per-page'),
	filter: str | None = None,
):
	text = require_query(q, query)
	size = parse_page_size(per_page, per_page_dashed, maximum=200)
	page = _provider(request, ProviderId.OPENALEX).search(text, cursor=cursor or None, per_page=size, filter=filter)
	return page.to_dict()


@works_router.get('/openalex/aboutness')
def openalex_aboutness(
	request: Request, title: str | None = None, abstract: str | None = None, fulltext: str | None = None
):
	if not (title or abstract or fulltext):
		raise InvalidRequestError('Provide at least one of: title, abstract, fulltext')
	return _provider(request, ProviderId.OPENALEX).aboutness(title=title, abstract=abstract, fulltext=fulltext)


@works_router.get('/crossref/works')
def crossref_works(
	request: Request,
	q: str | None = None,
	query: str | None = None,
	cursor: str | None = None,
	rows: str | None = None,
	per_page: str | None = Query(None, alias='perPage'),
	filter: str | None = None,
):
	text = require_query(q, query)
	size = parse_page_size(rows, per_page, maximum=200)
	page = _provider(request, ProviderId.CROSSREF).search(text, cursor=cursor or None, per_page=size, filter=filter)
	return page.to_dict()


@works_router.get('/arxiv/works')
def arxiv_works(
	request: Request,
	q: str | None = None,
	query: str | None = None,
	start: str | None = None,
	cursor: str | None = None,
	max_results: str | None = Query(None, alias='maxResults'),
	per_page: str | None = Query(None, alias='perPage'),
	sort_by: str | None = Query(None, alias='sortBy'),
	sort_order: str | None = Query(None, alias='sortOrder'),
):
	text = require_query(q, query)
	size = parse_page_size(max_results, per_page, maximum=200)
	page = _provider(request, ProviderId.ARXIV).search(
		text, cursor=start or cursor or None, per_page=size, sort_by=sort_by, sort_order=sort_order
	)
	return page.to_dict()


@works_router.get('/europepmc/works')
def europepmc_works(
	request: Request,
	q: str | None = None,
	query: str | None = None,
	cursor: str | None = None,
	page_size: str | None = Query(None, alias='pageSize'),
	per_page: str | None = Query(None, alias='perPage'),
):
	text = require_query(q, query)
	size = parse_page_size(page_size, per_page, maximum=100)
	page = _provider(request, ProviderId.EUROPEPMC).search(text, cursor=cursor or None, per_page=size)
	return page.to_dict()
