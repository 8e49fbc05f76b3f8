import json
from unittest.mock import Mock

import pytest

from research_assistant.core.errors import MalformedResponseError
from research_assistant.models import SearchResult
from research_assistant.modules.generation import (
	determine_source_type,
	extract_insights,
	extract_json_array,
	extract_year,
	fallback_citations,
	fallback_related_topics,
	fallback_summary,
	generate_citations,
	generate_related_topics,
	insights_from_summary,
	summarize,
)


@pytest.fixture
def sources():
	return [
		SearchResult(
			title='Graphene anodes',
			url='https://arxiv.org/abs/2401.00001',
			snippet='Graphene improves capacity.',
			score=0.9,
			published_date='2023-06-01T00:00:00Z',
			author='Ada Lovelace',
		),
		SearchResult(title='Battery news', url='https://www.reuters.com/battery', snippet='News.', score=0.7),
	]


def provider_returning(text: str) -> Mock:
	provider = Mock()
	provider.name = 'groq'
	provider.generate.return_value = text
	return provider


class TestExtractJsonArray:
	def test_prose_wrapped(self):
		text = 'Sure! Here are the insights:\n```json\n["one", "two"]\n```\nHope this helps [really].'

		assert extract_json_array(text) == ['one', 'two']

	def test_brackets_inside_strings(self):
		text = 'Result: ["a [bracketed] note", "escaped \\" quote ]"] trailing'

		assert extract_json_array(text) == ['a [bracketed] note', 'escaped " quote ]']

	def test_skips_non_json_brackets(self):
		assert extract_json_array('See [1] and then [{"id": "x"}]') == [1]

	def test_nested_arrays(self):
		assert extract_json_array('[[1, 2], [3]]') == [[1, 2], [3]]

	def test_no_array(self):
		with pytest.raises(MalformedResponseError):
			extract_json_array('I could not produce citations.')

	def test_unbalanced(self):
		with pytest.raises(MalformedResponseError):
			extract_json_array('["never closed"')


class TestStages:
	def test_summary(self, sources):
		provider = provider_returning('  A detailed summary.  ')

		assert summarize(provider, 'graphene', sources, 'academic') == 'A detailed summary.'
		system, prompt = provider.generate.call_args.args
		assert 'academic tone' in system
		assert 'URL: https://arxiv.org/abs/2401.00001' in prompt

	def test_citation_defaults(self, sources):
		completion = json.dumps([{'citation': 'Lovelace (2023). Graphene anodes.'}, 'junk', {'in_text': '[2]'}])

		citations = generate_citations(provider_returning(completion), sources, 'apa')

		first, second = citations
		assert first.id == 'cite-1'
		assert first.formatted == 'Lovelace (2023). Graphene anodes.'
		assert first.inText == '(1)'
		assert first.type == 'academic'
		assert first.year == '2023'
		assert first.authors == ['Ada Lovelace']
		assert second.id == 'cite-3'
		assert second.inText == '[2]'
		assert second.formatted == ''
		assert second.authors == ['Unknown']

	def test_citation_fields_from_model_kept(self, sources):
		completion = json.dumps(
			[{'id': 'c1', 'formatted': 'F', 'inText': 'I', 'type': 'web', 'year': 2020, 'authors': ['X', 'Y']}]
		)

		[citation] = generate_citations(provider_returning(completion), sources, 'mla')

		assert citation.to_dict() == {
			'id': 'c1',
			'formatted': 'F',
			'inText': 'I',
			'type': 'web',
			'year': '2020',
			'authors': ['X', 'Y'],
		}

	def test_citations_without_objects_fail(self, sources):
		with pytest.raises(MalformedResponseError):
			generate_citations(provider_returning('["a", "b"]'), sources, 'apa')

	def test_insights_filtered_by_length(self):
		completion = '["short", "  A much longer insight.  ", 7, "Another useful finding"]'

		insights = extract_insights(provider_returning(completion), 'summary')

		assert insights == ['A much longer insight.', 'Another useful finding']

	def test_topics_filtered_by_length(self):
		topics = generate_related_topics(provider_returning('["AI", "Solid-state electrolytes"]'), 'q', 's')

		assert topics == ['Solid-state electrolytes']

	def test_empty_topics_fail(self):
		with pytest.raises(MalformedResponseError):
			generate_related_topics(provider_returning('["AI", "ML"]'), 'q', 's')


class TestFallbacks:
	@pytest.mark.parametrize(
		'domain, expected',
		[
			('arxiv.org', 'academic'),
			('cs.stanford.edu', 'academic'),
			('www.nih.gov', 'institutional'),
			('en.wikipedia.org', 'institutional'),
			('www.bbc.co.uk', 'news'),
			('example.com', 'web'),
		],
	)
	def test_source_type(self, domain, expected):
		assert determine_source_type(domain) == expected

	def test_extract_year(self):
		assert extract_year('2019-04-01T00:00:00Z') == '2019'
		assert extract_year('Mar 2018') == '2018'
		assert extract_year('not a date').isdigit()
		assert extract_year(None).isdigit()

	def test_summary_lists_sources(self, sources):
		summary = fallback_summary('graphene', sources)

		assert summary.startswith('# Research Summary: graphene')
		assert '- **[1]** Graphene anodes: Graphene improves capacity.' in summary
		assert '[2] Battery news - https://www.reuters.com/battery' in summary

	@pytest.mark.parametrize(
		'style, formatted, in_text',
		[
			(
				'apa',
				'Ada Lovelace (2023). Graphene anodes. Retrieved from https://arxiv.org/abs/2401.00001',
				'(Ada, 2023)',
			),
			('mla', 'Ada Lovelace. "Graphene anodes." arxiv.org, 2023. Web. <https://arxiv.org/abs/2401.00001>.', '(Ada)'),
			(
				'ieee',
				'[1] Ada Lovelace, "Graphene anodes," arxiv.org, 2023. [Online]. Available: https://arxiv.org/abs/2401.00001',
				'[1]',
			),
			('chicago', 'Ada Lovelace (2023). Graphene anodes. https://arxiv.org/abs/2401.00001', '(Ada, 2023)'),
		],
	)
	def test_citation_styles(self, sources, style, formatted, in_text):
		citation = fallback_citations(sources, style)[0]

		assert citation.formatted == formatted
		assert citation.inText == in_text
		assert citation.id == 'cite-1'

	def test_citations_for_unknown_author(self, sources):
		citation = fallback_citations(sources, 'apa')[1]

		assert citation.authors == ['Unknown']
		assert citation.type == 'news'

	def test_insights_from_summary(self):
		summary = 'Short. This sentence is definitely long enough! Another qualifying sentence here? ok'

		assert insights_from_summary(summary) == [
			'This sentence is definitely long enough',
			'Another qualifying sentence here',
		]

	def test_insights_capped_at_six(self):
		summary = '. '.join(f'Sentence number {i} has plenty of words' for i in range(10))

		assert len(insights_from_summary(summary)) == 6

	def test_related_topics(self):
		topics = fallback_related_topics('graphene')

		assert len(topics) == 8
		assert all('graphene' in topic for topic in topics)
