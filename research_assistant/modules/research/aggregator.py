from collections.abc import Sequence

import requests

from .deduplication import ResultDeduplicator
from .enrichment import ContentEnricher
from .fallback import synthetic_results
from .reranker import LangSearchReranker
from research_assistant.config.settings import Settings
from research_assistant.core.availability import AvailabilityRegistry, Capability
from research_assistant.core.concurrency import fan_out
from research_assistant.models import SearchResult
from research_assistant.modules.search_provider import (
	BraveSearchProvider,
	LangSearchProvider,
	WebSearchProvider,
	default_open_sources,
)
from research_assistant.utils.logger import logger


class SearchAggregator:
	"""Tiered free-text web search that always returns something.

	hybrid search → keyed backup for the shortfall → concurrent open-web
	sources → dedup → rerank → synthetic placeholders → enrichment.
	"""

	MIN_KEYED_RESULTS = 5

	def __init__(
		self,
		hybrid: WebSearchProvider | None = None,
		backup: WebSearchProvider | None = None,
		open_sources: Sequence[WebSearchProvider] = (),
		reranker: LangSearchReranker | None = None,
		enricher: ContentEnricher | None = None,
		deduplicator: ResultDeduplicator | None = None,
		candidate_pool: int = 15,
		max_workers: int = 4,
	):
		self.hybrid = hybrid
		self.backup = backup
		self.open_sources = list(open_sources)
		self.reranker = reranker
		self.enricher = enricher
		self.deduplicator = deduplicator or ResultDeduplicator()
		self.candidate_pool = candidate_pool
		self.max_workers = max_workers

	@classmethod
	def from_settings(
		cls, config: Settings, availability: AvailabilityRegistry, session: requests.Session | None = None
	) -> 'SearchAggregator':
		session = session or requests.Session()
		timeout = config.HTTP_TIMEOUT_SECONDS

		hybrid = reranker = backup = None
		if availability.is_available(Capability.LANGSEARCH):
			hybrid = LangSearchProvider(config.LANGSEARCH_API_KEY, config.SEARCH_FRESHNESS, session, timeout)
			reranker = LangSearchReranker(config.LANGSEARCH_API_KEY, config.RERANK_MODEL, session, timeout)
		else:
			logger.warning('LangSearch API key not configured')

		if availability.is_available(Capability.BRAVE):
			backup = BraveSearchProvider(config.BRAVE_API_KEY, session, timeout)
		else:
			logger.warning('Brave API key not configured')

		enricher = None
		if config.ENRICH_RESULTS:
			enricher = ContentEnricher(session, config.ENRICHMENT_TIMEOUT_SECONDS, config.FAN_OUT_WORKERS)

		return cls(
			hybrid=hybrid,
			backup=backup,
			open_sources=default_open_sources(session, timeout),
			reranker=reranker,
			enricher=enricher,
			candidate_pool=config.SEARCH_CANDIDATE_POOL,
			max_workers=config.FAN_OUT_WORKERS,
		)

	def search(self, query: str, num_results: int = 10) -> list[SearchResult]:
		num_results = max(1, num_results)
		pool = max(num_results, self.candidate_pool)
		results: list[SearchResult] = []

		if self.hybrid:
			results.extend(self._search_provider(self.hybrid, query, pool))

		if self.backup and len(results) < self.MIN_KEYED_RESULTS:
			results.extend(self._search_provider(self.backup, query, pool - len(results)))

		if not results:
			results = self._search_open_sources(query)

		results = self.deduplicator.deduplicate(results)

		if results and self.reranker:
			results = self._rerank(query, results, num_results)

		if not results:
			logger.warning(f"No provider returned results for '{query}', using synthetic sources")
			return synthetic_results(query)[:num_results]

		results = results[:num_results]
		if self.enricher:
			results = self.enricher.enrich(results)

		return results

	def _search_provider(self, provider: WebSearchProvider, query: str, count: int) -> list[SearchResult]:
		try:
			results = provider.search(query, count)
		except Exception as e:
			logger.warning(f'{provider.name} search failed: {e}')
			return []

		logger.info(f'{provider.name} returned {len(results)} results')
		return results

	def _search_open_sources(self, query: str) -> list[SearchResult]:
		logger.info(f'Querying {len(self.open_sources)} open sources for: {query}')
		batches = fan_out(
			{source.name: (lambda s=source: s.search(query)) for source in self.open_sources},
			max_workers=self.max_workers,
		)

		merged = [result for batch in batches.values() for result in batch]
		logger.info(f'Open sources returned {len(merged)} results from {len(batches)} sources')
		return merged

	def _rerank(self, query: str, results: list[SearchResult], top_n: int) -> list[SearchResult]:
		try:
			return self.reranker.rerank(query, results, top_n)
		except Exception as e:
			logger.warning(f'Reranking failed, using original results: {e}')
			return results[:top_n]
