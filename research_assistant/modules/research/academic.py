from collections.abc import Iterable, Mapping

import requests

from research_assistant.config.settings import Settings
from research_assistant.core.concurrency import fan_out
from research_assistant.models import PagedPapers, Paper, ProviderId, SearchResult, clamp_score
from research_assistant.modules.search_provider import (
	ArxivProvider,
	CrossrefProvider,
	EuropePmcProvider,
	OpenAlexProvider,
	PaperProvider,
)
from research_assistant.utils.logger import logger
from research_assistant.utils.text import truncate


class AcademicSearch:
	"""Registry of the bibliographic providers plus parallel lookups across them."""

	def __init__(self, providers: Mapping[ProviderId, PaperProvider], max_workers: int = 4):
		self.providers = dict(providers)
		self.max_workers = max_workers

	@classmethod
	def from_settings(cls, config: Settings, session: requests.Session | None = None) -> 'AcademicSearch':
		session = session or requests.Session()
		timeout = config.HTTP_TIMEOUT_SECONDS
		return cls(
			{
				ProviderId.OPENALEX: OpenAlexProvider(config.OPENALEX_MAILTO, config.OPENALEX_API_KEY, session, timeout),
				ProviderId.CROSSREF: CrossrefProvider(config.CROSSREF_MAILTO, session, timeout),
				ProviderId.ARXIV: ArxivProvider(session, timeout),
				ProviderId.EUROPEPMC: EuropePmcProvider(session, timeout),
			},
			max_workers=config.FAN_OUT_WORKERS,
		)

	def provider(self, provider_id: ProviderId) -> PaperProvider:
		return self.providers[provider_id]

	def search_many(
		self, query: str, provider_ids: Iterable[ProviderId], per_page: int = 3
	) -> dict[ProviderId, PagedPapers]:
		"""First page from each requested provider; failing providers are left out."""
		tasks = {
			provider_id: (lambda p=self.providers[provider_id]: p.search(query, per_page=per_page))
			for provider_id in provider_ids
			if provider_id in self.providers
		}
		pages = fan_out(tasks, max_workers=self.max_workers)
		logger.info(f'Academic lookups succeeded for {[p.value for p in pages]} of {[p.value for p in tasks]}')
		return pages


def parse_provider_ids(names: Iterable[str]) -> list[ProviderId]:
	known = {provider.value: provider for provider in ProviderId}
	selected = []
	for name in names:
		provider = known.get(name.strip().lower())
		if provider and provider not in selected:
			selected.append(provider)
	return selected


def paper_to_search_result(paper: Paper, rank: int = 0) -> SearchResult | None:
	url = paper.url or paper.pdf_url or (f'https://doi.org/{paper.doi}' if paper.doi else None)
	if not url:
		return None

	return SearchResult(
		title=paper.title,
		url=url,
		snippet=truncate(paper.abstract or ''),
		score=clamp_score(0.75 - rank * 0.05),
		published_date=paper.published_at or (str(paper.year) if paper.year else None),
		author=', '.join(paper.authors) or None,
	)


def pages_to_search_results(pages: Mapping[ProviderId, PagedPapers]) -> list[SearchResult]:
	results = []
	for page in pages.values():
		for rank, paper in enumerate(page.papers):
			result = paper_to_search_result(paper, rank)
			if result:
				results.append(result)
	return results
