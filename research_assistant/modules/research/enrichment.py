from collections.abc import Sequence
from dataclasses import replace

import requests
from bs4 import BeautifulSoup

from research_assistant.core.concurrency import fan_out
from research_assistant.models import SearchResult, clamp_score
from research_assistant.utils.logger import logger
from research_assistant.utils.text import collapse_whitespace, truncate

BROWSER_USER_AGENT = (
	'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) '
	'Chrome/91.0.4472.124 Safari/537.36'
)
ENRICHMENT_BOOST = 0.1


class ContentEnricher:
	"""Replaces title/snippet with text scraped from the result page.

	Best effort only: a failed fetch or a page without a body leaves the
	result exactly as it was.
	"""

	def __init__(self, session: requests.Session | None = None, timeout: float = 5.0, max_workers: int = 4):
		self.session = session or requests.Session()
		self.timeout = timeout
		self.max_workers = max_workers

	def enrich(self, results: Sequence[SearchResult]) -> list[SearchResult]:
		enriched = fan_out(
			{index: (lambda r=result: self.enrich_one(r)) for index, result in enumerate(results)},
			max_workers=self.max_workers,
		)
		return [enriched.get(index, result) for index, result in enumerate(results)]

	def enrich_one(self, result: SearchResult) -> SearchResult:
		if not result.url.startswith(('http://', 'https://')):
			return result

		try:
			response = self.session.get(result.url, headers={'User-Agent': BROWSER_USER_AGENT}, timeout=self.timeout)
			response.raise_for_status()
		except requests.RequestException as e:
			logger.debug(f'Enrichment skipped for {result.url}: {e}')
			return result

		soup = BeautifulSoup(response.text, 'html.parser')
		if soup.body is None:
			return result

		for tag in soup.body(['script', 'style']):
			tag.decompose()
		content = collapse_whitespace(soup.body.get_text(' '))
		title = collapse_whitespace(soup.title.get_text()) if soup.title else ''

		return replace(
			result,
			title=title or result.title,
			snippet=truncate(content) or result.snippet,
			score=clamp_score(result.score + ENRICHMENT_BOOST),
		)
