from typing import Any

import requests

from .base import WebSearchProvider
from .http import post_json
from research_assistant.core.errors import MalformedResponseError
from research_assistant.models import SearchResult, clamp_score
from research_assistant.utils.logger import logger
from research_assistant.utils.text import truncate

BASE_URL = 'https://api.langsearch.com/v1'


def check_api_code(provider: str, data: Any) -> None:
	if not isinstance(data, dict):
		raise MalformedResponseError(provider, f'expected a JSON object, got {type(data).__name__}')
	if data.get('code') and data['code'] != 200:
		raise MalformedResponseError(provider, data.get('msg') or f'API returned code {data["code"]}')


class LangSearchProvider(WebSearchProvider):
	"""Hybrid (keyword + semantic) web search."""

	name = 'langsearch'

	def __init__(
		self,
		api_key: str,
		freshness: str = 'noLimit',
		session: requests.Session | None = None,
		timeout: float = 15.0,
	):
		super().__init__(session, timeout)
		self.api_key = api_key
		self.freshness = freshness

	def _headers(self) -> dict[str, str]:
		return {'Authorization': f'Bearer {self.api_key}', 'Content-Type': 'application/json'}

	def search(self, query: str, count: int = 10) -> list[SearchResult]:
		data = post_json(
			self.session,
			self.name,
			f'{BASE_URL}/web-search',
			self.timeout,
			headers=self._headers(),
			json={'query': query, 'count': count, 'freshness': self.freshness, 'summary': True},
		)
		check_api_code(self.name, data)

		items = ((data.get('data') or {}).get('webPages') or {}).get('value') or data.get('results') or []
		results = []
		for index, item in enumerate(items):
			url = item.get('url') or ''
			snippet = item.get('snippet') or truncate(item.get('content') or '')
			results.append(
				SearchResult(
					title=item.get('name') or item.get('title') or 'Untitled',
					url=url,
					snippet=snippet,
					score=clamp_score(1 - index * 0.05),
					published_date=item.get('datePublished') or item.get('published_date'),
				)
			)

		logger.info(f'LangSearch returned {len(results)} results')
		return results
