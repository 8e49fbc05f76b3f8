import requests

from .base import WebSearchProvider
from .http import get_json
from research_assistant.core.errors import MalformedResponseError
from research_assistant.models import SearchResult, clamp_score
from research_assistant.utils.logger import logger


class BraveSearchProvider(WebSearchProvider):
	name = 'brave'
	api_url = 'https://api.search.brave.com/res/v1/web/search'

	def __init__(self, api_key: str, session: requests.Session | None = None, timeout: float = 15.0):
		super().__init__(session, timeout)
		self.api_key = api_key

	def search(self, query: str, count: int = 10) -> list[SearchResult]:
		data = get_json(
			self.session,
			self.name,
			self.api_url,
			self.timeout,
			params={'q': query, 'count': count, 'country': 'US', 'search_lang': 'en', 'ui_lang': 'en-US'},
			headers={
				'X-Subscription-Token': self.api_key,
				'Accept': 'application/json',
				'Accept-Encoding': 'gzip',
			},
		)
		if not isinstance(data, dict):
			raise MalformedResponseError(self.name, 'expected a JSON object')

		results = []
		for index, item in enumerate((data.get('web') or {}).get('results') or []):
			if not item.get('url'):
				continue
			results.append(
				SearchResult(
					title=item.get('title') or 'Untitled',
					url=item['url'],
					snippet=item.get('description') or '',
					score=clamp_score(0.8 - index * 0.05),
					published_date=item.get('page_age') or item.get('age'),
				)
			)

		logger.info(f'Brave Search returned {len(results)} results')
		return results
