from typing import Any

import requests

from .base import PaperProvider
from .http import build_user_agent, get_json
from .normalizers import normalize_openalex_response
from research_assistant.models import PagedPapers
from research_assistant.utils.logger import logger


class OpenAlexProvider(PaperProvider):
	name = 'openalex'
	base_url = 'https://api.openalex.org'
	max_page_size = 200

	def __init__(
		self,
		mailto: str | None = None,
		api_key: str | None = None,
		session: requests.Session | None = None,
		timeout: float = 15.0,
	):
		super().__init__(session, timeout)
		self.mailto = mailto
		self.api_key = api_key

	def _headers(self) -> dict[str, str]:
		return {'Accept': 'application/json', 'User-Agent': build_user_agent(self.mailto)}

	def _identity_params(self) -> dict[str, str]:
		params = {}
		if self.mailto:
			params['mailto'] = self.mailto
		if self.api_key:
			params['api_key'] = self.api_key
		return params

	def search(
		self, query: str, cursor: str | None = None, per_page: int | None = None, filter: str | None = None, **options: Any
	) -> PagedPapers:
		params: dict[str, Any] = {
			'search': query,
			'per-page': self.page_size(per_page),
			'sort': 'relevance_score:desc',
		}
		if filter:
			params['filter'] = filter
		if cursor:
			params['cursor'] = cursor
		params.update(self._identity_params())

		logger.info(f"Searching OpenAlex for: '{query}' (per-page {params['per-page']})")
		data = get_json(
			self.session, self.name, f'{self.base_url}/works', self.timeout, params=params, headers=self._headers()
		)
		page = self.normalize(normalize_openalex_response, data)
		logger.info(f'OpenAlex returned {len(page.papers)} works')
		return page

	def aboutness(self, title: str | None = None, abstract: str | None = None, fulltext: str | None = None) -> Any:
		params = self._identity_params()
		for key, value in (('title', title), ('abstract', abstract), ('fulltext', fulltext)):
			if value:
				params[key] = value

		return get_json(
			self.session, self.name, f'{self.base_url}/text', self.timeout, params=params, headers=self._headers()
		)
