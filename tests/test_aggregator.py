from unittest.mock import Mock

import pytest
import requests

from conftest import make_response
from research_assistant.core.availability import AvailabilityRegistry, Capability
from research_assistant.core.errors import ProviderTransportError
from research_assistant.models import SearchResult
from research_assistant.modules.research import (
	ContentEnricher,
	LangSearchReranker,
	ResultDeduplicator,
	SearchAggregator,
)
from research_assistant.modules.search_provider import WebSearchProvider


def result(title: str, url: str | None = None, score: float = 0.5) -> SearchResult:
	return SearchResult(title=title, url=url or f'https://example.com/{title}', snippet=f'About {title}', score=score)


def web_provider(name: str, results=None, error: Exception | None = None) -> Mock:
	provider = Mock(spec=WebSearchProvider)
	provider.name = name
	if error:
		provider.search.side_effect = error
	else:
		provider.search.return_value = results or []
	return provider


def test_everything_failing_returns_three_synthetic_results():
	failure = ProviderTransportError('x', 'down')
	aggregator = SearchAggregator(
		hybrid=web_provider('langsearch', error=failure),
		backup=web_provider('brave', error=failure),
		open_sources=[web_provider(name, error=failure) for name in ('duckduckgo', 'wikipedia', 'arxiv', 'pubmed')],
	)

	results = aggregator.search('graphene batteries', 10)

	assert len(results) == 3
	assert all('graphene batteries' in r.title for r in results)
	assert [r.score for r in results] == [0.95, 0.92, 0.88]
	assert [r.domain for r in results] == ['scholar.google.com', 'pubmed.ncbi.nlm.nih.gov', 'arxiv.org']


def test_backup_fills_shortfall():
	hybrid = web_provider('langsearch', [result('a'), result('b')])
	backup = web_provider('brave', [result('c')])
	aggregator = SearchAggregator(hybrid=hybrid, backup=backup, candidate_pool=15)

	results = aggregator.search('query', 10)

	backup.search.assert_called_once_with('query', 13)
	assert [r.title for r in results] == ['a', 'b', 'c']


def test_backup_skipped_when_hybrid_has_enough():
	hybrid = web_provider('langsearch', [result(str(i)) for i in range(6)])
	backup = web_provider('brave', [result('unused')])

	SearchAggregator(hybrid=hybrid, backup=backup).search('query', 10)

	backup.search.assert_not_called()


def test_open_sources_isolated_and_ordered():
	sources = [
		web_provider('duckduckgo', [result('ddg')]),
		web_provider('wikipedia', error=requests.Timeout('slow')),
		web_provider('arxiv', [result('preprint')]),
		web_provider('pubmed', [result('pm')]),
	]
	aggregator = SearchAggregator(open_sources=sources)

	results = aggregator.search('query', 10)

	assert [r.title for r in results] == ['ddg', 'preprint', 'pm']


def test_open_sources_not_queried_when_keyed_results_exist():
	fallback_source = web_provider('wikipedia', [result('wiki')])
	aggregator = SearchAggregator(hybrid=web_provider('langsearch', [result('a')]), open_sources=[fallback_source])

	aggregator.search('query', 10)

	fallback_source.search.assert_not_called()


def test_duplicates_removed_and_truncated():
	hybrid = web_provider('langsearch', [result('a'), result('a'), result('b'), result('c')])

	results = SearchAggregator(hybrid=hybrid).search('query', 2)

	assert [r.title for r in results] == ['a', 'b']


def test_rerank_failure_keeps_original_order():
	reranker = Mock()
	reranker.rerank.side_effect = RuntimeError('unexpected')
	hybrid = web_provider('langsearch', [result('a'), result('b'), result('c')])

	results = SearchAggregator(hybrid=hybrid, reranker=reranker).search('query', 2)

	assert [r.title for r in results] == ['a', 'b']


def test_empty_rerank_reply_keeps_real_results(session):
	session.request.return_value = make_response({'code': 200, 'results': []})
	hybrid = web_provider('langsearch', [result(f'Real {i}') for i in range(3)])
	aggregator = SearchAggregator(hybrid=hybrid, reranker=LangSearchReranker('key', session=session))

	results = aggregator.search('graphene', 10)

	assert [r.title for r in results] == ['Real 0', 'Real 1', 'Real 2']


def test_synthetic_results_are_not_enriched():
	enricher = Mock()

	SearchAggregator(enricher=enricher).search('query', 10)

	enricher.enrich.assert_not_called()


def test_from_settings_wires_keyed_providers(make_settings):
	config = make_settings(LANGSEARCH_API_KEY='ls-key', BRAVE_API_KEY='brave-key')
	availability = AvailabilityRegistry(frozenset({Capability.LANGSEARCH, Capability.BRAVE}))

	aggregator = SearchAggregator.from_settings(config, availability, Mock())

	assert aggregator.hybrid.name == 'langsearch'
	assert aggregator.backup.name == 'brave'
	assert aggregator.reranker is not None
	assert aggregator.enricher is None
	assert [source.name for source in aggregator.open_sources] == ['duckduckgo', 'wikipedia', 'arxiv', 'pubmed']


def test_from_settings_without_keys(make_settings):
	aggregator = SearchAggregator.from_settings(make_settings(), AvailabilityRegistry(frozenset()), Mock())

	assert aggregator.hybrid is None
	assert aggregator.backup is None
	assert aggregator.reranker is None


class TestDeduplicator:
	def test_first_occurrence_wins(self):
		first = result('a', score=0.9)
		later = result('a', score=0.1)

		assert ResultDeduplicator().deduplicate([first, result('b'), later]) == [first, result('b')]

	def test_idempotent(self):
		dedup = ResultDeduplicator()
		items = [result('a'), result('b'), result('a'), result('c', 'https://example.com/a')]

		once = dedup.deduplicate(items)

		assert dedup.deduplicate(once) == once
		assert len(once) == 3

	def test_exact_match_only(self):
		items = [result('a', 'https://example.com/a'), result('a', 'https://example.com/a/')]

		assert len(ResultDeduplicator().deduplicate(items)) == 2


class TestEnricher:
	PAGE = (
		'<html><head><title> Real   Title </title><style>body {}</style></head>'
		'<body><script>var x = 1;</script><p>Main   content here.</p></body></html>'
	)

	def test_enriches_title_snippet_and_score(self, session):
		session.get.return_value = make_response(text=self.PAGE)

		enriched = ContentEnricher(session).enrich_one(result('a', score=0.95))

		assert enriched.title == 'Real Title'
		assert enriched.snippet == 'Main content here.'
		assert enriched.score == 1.0
		assert session.get.call_args.kwargs['timeout'] == 5.0

	def test_failed_fetch_leaves_result_unchanged(self, session):
		original = result('a')
		session.get.side_effect = requests.ConnectionError('refused')

		assert ContentEnricher(session).enrich_one(original) is original

	def test_page_without_body_unchanged(self, session):
		original = result('a')
		session.get.return_value = make_response(text='')

		assert ContentEnricher(session).enrich_one(original) is original

	def test_one_failure_does_not_affect_others(self, session):
		def fetch(url, **kwargs):
			if url.endswith('/bad'):
				raise requests.Timeout('slow')
			return make_response(text='<html><body>Good page</body></html>')

		session.get.side_effect = fetch
		items = [result('good'), result('bad'), result('also-good', 'https://example.com/good2')]

		enriched = ContentEnricher(session).enrich(items)

		assert [r.snippet for r in enriched] == ['Good page', 'About bad', 'Good page']
		assert enriched[1] is items[1]

	def test_long_content_is_truncated(self, session):
		session.get.return_value = make_response(text=f'<html><body>{"x" * 300}</body></html>')

		enriched = ContentEnricher(session).enrich_one(result('a'))

		assert enriched.snippet == 'x' * 200 + '...'


@pytest.mark.parametrize('score', [0.0, 0.5, 1.0])
def test_enrichment_keeps_scores_in_range(session, score):
	session.get.return_value = make_response(text='<html><body>text</body></html>')

	enriched = ContentEnricher(session).enrich_one(result('a', score=score))

	assert 0.0 <= enriched.score <= 1.0
