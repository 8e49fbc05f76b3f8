from typing import Any

import requests

from .base import PaperProvider
from .http import build_user_agent, get_json
from .normalizers import normalize_crossref_response
from research_assistant.models import PagedPapers
from research_assistant.utils.logger import logger

FIRST_PAGE_CURSOR = '*'


class CrossrefProvider(PaperProvider):
	name = 'crossref'
	base_url = 'https://api.crossref.org'
	max_page_size = 200

	def __init__(self, mailto: str | None = None, session: requests.Session | None = None, timeout: float = 15.0):
		super().__init__(session, timeout)
		self.mailto = mailto

	def search(
		self, query: str, cursor: str | None = None, per_page: int | None = None, filter: str | None = None, **options: Any
	) -> PagedPapers:
		params: dict[str, Any] = {
			'query': query,
			'rows': self.page_size(per_page),
			'cursor': cursor or FIRST_PAGE_CURSOR,
		}
		if filter:
			params['filter'] = filter
		if self.mailto:
			params['mailto'] = self.mailto

		logger.info(f"Searching Crossref for: '{query}' (rows {params['rows']})")
		data = get_json(
			self.session,
			self.name,
			f'{self.base_url}/works',
			self.timeout,
			params=params,
			headers={'Accept': 'application/json', 'User-Agent': build_user_agent(self.mailto)},
		)
		page = self.normalize(normalize_crossref_response, data)
		logger.info(f'Crossref returned {len(page.papers)} works')
		return page
