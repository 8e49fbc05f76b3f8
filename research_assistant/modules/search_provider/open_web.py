"""Unkeyed public sources used when no keyed web search produced anything."""

from urllib.parse import quote

import requests

from .arxiv import ArxivProvider
from .base import WebSearchProvider
from .http import get_json
from research_assistant.core.errors import MalformedResponseError
from research_assistant.models import SearchResult, clamp_score
from research_assistant.utils.logger import logger


class DuckDuckGoProvider(WebSearchProvider):
	name = 'duckduckgo'
	api_url = 'https://api.duckduckgo.com/'

	def search(self, query: str, count: int = 3) -> list[SearchResult]:
		data = get_json(
			self.session,
			self.name,
			self.api_url,
			self.timeout,
			params={'q': query, 'format': 'json', 'no_html': 1, 'skip_disambig': 1},
		)
		if not isinstance(data, dict):
			raise MalformedResponseError(self.name, 'expected a JSON object')

		results = []
		if data.get('AbstractText'):
			results.append(
				SearchResult(
					title=data.get('Heading') or query,
					url=data.get('AbstractURL') or f'https://duckduckgo.com/?q={quote(query)}',
					snippet=data['AbstractText'],
					score=0.9,
					author=data.get('AbstractSource') or 'DuckDuckGo',
				)
			)

		topics = [t for t in data.get('RelatedTopics') or [] if t.get('FirstURL') and t.get('Text')]
		for index, topic in enumerate(topics[:count]):
			results.append(
				SearchResult(
					title=topic['Text'].split(' - ')[0] or query,
					url=topic['FirstURL'],
					snippet=topic['Text'],
					score=clamp_score(0.8 - index * 0.1),
					author='DuckDuckGo',
				)
			)

		return results


class WikipediaProvider(WebSearchProvider):
	name = 'wikipedia'
	api_url = 'https://en.wikipedia.org/api/rest_v1/page/summary/'

	def search(self, query: str, count: int = 1) -> list[SearchResult]:
		data = get_json(self.session, self.name, self.api_url + quote(query, safe=''), self.timeout)
		if not isinstance(data, dict):
			raise MalformedResponseError(self.name, 'expected a JSON object')

		page_url = ((data.get('content_urls') or {}).get('desktop') or {}).get('page')
		return [
			SearchResult(
				title=data.get('title') or query,
				url=page_url or f'https://en.wikipedia.org/wiki/{quote(query)}',
				snippet=data.get('extract') or f'Wikipedia article about {query}',
				score=0.95,
				author='Wikipedia',
			)
		]


class ArxivOpenSearchProvider(WebSearchProvider):
	"""Preprints from arXiv, reshaped into web search results."""

	name = 'arxiv'

	def __init__(self, session: requests.Session | None = None, timeout: float = 15.0):
		super().__init__(session, timeout)
		self.arxiv = ArxivProvider(session=self.session, timeout=timeout)

	def search(self, query: str, count: int = 3) -> list[SearchResult]:
		page = self.arxiv.search(f'all:{query}', per_page=count, sort_by='relevance', sort_order='descending')
		return [
			SearchResult(
				title=paper.title,
				url=paper.url or '',
				snippet=paper.abstract or '',
				score=clamp_score(0.9 - index * 0.1),
				published_date=paper.published_at,
				author=', '.join(paper.authors) or 'arXiv Authors',
			)
			for index, paper in enumerate(page.papers[:count])
		]


class PubMedProvider(WebSearchProvider):
	name = 'pubmed'
	base_url = 'https://eutils.ncbi.nlm.nih.gov/entrez/eutils'

	def search(self, query: str, count: int = 3) -> list[SearchResult]:
		found = get_json(
			self.session,
			self.name,
			f'{self.base_url}/esearch.fcgi',
			self.timeout,
			params={'db': 'pubmed', 'term': query, 'retmode': 'json', 'retmax': count},
		)
		ids = ((found or {}).get('esearchresult') or {}).get('idlist') or []
		if not ids:
			return []

		summary = get_json(
			self.session,
			self.name,
			f'{self.base_url}/esummary.fcgi',
			self.timeout,
			params={'db': 'pubmed', 'id': ','.join(ids[:count]), 'retmode': 'json'},
		)
		articles = (summary or {}).get('result') or {}

		results = []
		for pmid in ids[:count]:
			article = articles.get(pmid)
			if not article:
				continue
			authors = ', '.join(a.get('name', '') for a in article.get('authors') or [] if a.get('name'))
			results.append(
				SearchResult(
					title=article.get('title') or f'PubMed Article {pmid}',
					url=f'https://pubmed.ncbi.nlm.nih.gov/{pmid}/',
					snippet=article.get('abstract') or f'Research article about {query}',
					score=0.85,
					published_date=article.get('pubdate'),
					author=authors or 'PubMed Authors',
				)
			)

		logger.debug(f'PubMed returned {len(results)} articles')
		return results


def default_open_sources(session: requests.Session | None = None, timeout: float = 15.0) -> list[WebSearchProvider]:
	return [
		DuckDuckGoProvider(session, timeout),
		WikipediaProvider(session, timeout),
		ArxivOpenSearchProvider(session, timeout),
		PubMedProvider(session, timeout),
	]
