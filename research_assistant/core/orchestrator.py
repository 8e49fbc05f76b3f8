from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

import requests

from research_assistant.config.settings import Settings
from research_assistant.core.availability import AvailabilityRegistry
from research_assistant.core.retry import RetryPolicy
from research_assistant.llm import GenerationProvider, create_generation_provider
from research_assistant.models import ResearchRequest, SearchResult
from research_assistant.modules.generation import (
	determine_source_type,
	extract_insights,
	extract_year,
	fallback_citations,
	fallback_related_topics,
	fallback_summary,
	generate_citations,
	generate_related_topics,
	insights_from_summary,
	summarize,
)
from research_assistant.modules.research import (
	AcademicSearch,
	ResultDeduplicator,
	SearchAggregator,
	pages_to_search_results,
	parse_provider_ids,
	synthetic_results,
)
from research_assistant.utils.logger import logger

ProviderFactory = Callable[[AvailabilityRegistry, Settings], GenerationProvider]


class ResearchPipeline:
	"""search → academic lookups → summary → citations → insights → related topics.

	Every stage runs under the retry policy and degrades to its offline
	fallback, so ``run`` only raises when no generation provider is configured.
	"""

	def __init__(
		self,
		config: Settings,
		availability: AvailabilityRegistry,
		aggregator: SearchAggregator,
		academic: AcademicSearch,
		retry_policy: RetryPolicy | None = None,
		provider_factory: ProviderFactory = create_generation_provider,
	):
		self.config = config
		self.availability = availability
		self.aggregator = aggregator
		self.academic = academic
		self.retry_policy = retry_policy or RetryPolicy(config.RETRY_MAX_ATTEMPTS)
		self.provider_factory = provider_factory
		self.deduplicator = ResultDeduplicator()
		self._provider: GenerationProvider | None = None

	@classmethod
	def from_settings(
		cls,
		config: Settings,
		availability: AvailabilityRegistry,
		session: requests.Session | None = None,
		retry_policy: RetryPolicy | None = None,
	) -> 'ResearchPipeline':
		session = session or requests.Session()
		return cls(
			config,
			availability,
			SearchAggregator.from_settings(config, availability, session),
			AcademicSearch.from_settings(config, session),
			retry_policy=retry_policy,
		)

	@property
	def provider(self) -> GenerationProvider:
		if self._provider is None:
			self._provider = self.provider_factory(self.availability, self.config)
		return self._provider

	def run(self, request: ResearchRequest) -> dict[str, Any]:
		used_ai = self.availability.require_generation_provider()
		provider = self.provider
		query = request.query.strip()
		policy = self.retry_policy
		logger.info(f"Research requested: '{query}' ({request.citationStyle}, {request.tone})")

		sources = policy.run(
			'search',
			lambda: self.aggregator.search(query, self.config.RESEARCH_NUM_SOURCES),
			lambda: synthetic_results(query),
		)
		sources = self._with_academic_sources(query, sources, request.databases)

		summary = policy.run(
			'summary',
			lambda: summarize(provider, query, sources, request.tone),
			lambda: fallback_summary(query, sources),
		)
		citations = policy.run(
			'citations',
			lambda: generate_citations(provider, sources, request.citationStyle),
			lambda: fallback_citations(sources, request.citationStyle),
		)
		insights = policy.run(
			'insights',
			lambda: extract_insights(provider, summary),
			lambda: insights_from_summary(summary),
		)
		topics = policy.run(
			'related topics',
			lambda: generate_related_topics(provider, query, summary),
			lambda: fallback_related_topics(query),
		)

		search_provider = self.availability.preferred_search_provider()
		logger.info(f'Research complete: {len(sources)} sources, {len(citations)} citations')
		return {
			'summary': summary,
			'sources': [self._source_dict(source) for source in sources],
			'citations': [citation.to_dict() for citation in citations],
			'keyInsights': insights,
			'relatedTopics': topics,
			'metadata': {
				'generatedAt': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
				'citationStyle': request.citationStyle,
				'tone': request.tone,
				'sourceCount': len(sources),
				'usedAI': used_ai.value,
				'usedSearch': search_provider.value if search_provider else 'fallback',
			},
		}

	def _with_academic_sources(
		self, query: str, sources: list[SearchResult], databases: list[str]
	) -> list[SearchResult]:
		provider_ids = parse_provider_ids(databases)
		if not provider_ids:
			return sources

		pages = self.academic.search_many(query, provider_ids, self.config.ACADEMIC_RESULTS_PER_PROVIDER)
		academic = pages_to_search_results(pages)
		logger.info(f'Adding {len(academic)} academic sources')
		return self.deduplicator.deduplicate([*sources, *academic])

	@staticmethod
	def _source_dict(source: SearchResult) -> dict[str, Any]:
		return {
			'title': source.title,
			'url': source.url,
			'snippet': source.snippet,
			'relevance': source.score,
			'type': determine_source_type(source.domain),
			'year': extract_year(source.published_date),
			'authors': [source.author] if source.author else ['Unknown'],
		}
