from collections.abc import Sequence
from typing import Any

from .fallbacks import determine_source_type, extract_year
from .parsing import extract_json_array
from research_assistant.core.errors import MalformedResponseError
from research_assistant.llm import GenerationProvider
from research_assistant.models import Citation, SearchResult
from research_assistant.utils.logger import logger

MIN_INSIGHT_LENGTH = 10
MIN_TOPIC_LENGTH = 5

JSON_ONLY = 'Do not include any markdown formatting, code blocks, or explanatory text.'


def _sources_block(sources: Sequence[SearchResult]) -> str:
	return '\n\n'.join(
		f'{i}. {source.title}\n   URL: {source.url}\n   Summary: {source.snippet}' for i, source in enumerate(sources, 1)
	)


def summarize(provider: GenerationProvider, query: str, sources: Sequence[SearchResult], tone: str) -> str:
	system = (
		f'You are a research assistant. Create a comprehensive summary of the research findings in a {tone} tone. '
		'Focus on key insights, methodologies, and implications.'
	)
	prompt = (
		f'Research Query: "{query}"\n\nSources:\n{_sources_block(sources)}\n\n'
		f'Create a detailed research summary in a {tone} tone.'
	)

	summary = provider.generate(system, prompt).strip()
	if not summary:
		raise MalformedResponseError(provider.name, 'Empty summary')
	return summary


def _string_list(value: Any) -> list[str] | None:
	if isinstance(value, list) and value and all(isinstance(item, str) for item in value):
		return value
	return None


def normalize_citation(raw: dict[str, Any], index: int, sources: Sequence[SearchResult]) -> Citation:
	"""Fill in whatever the model left out, using the source at the same position."""
	source = sources[index] if index < len(sources) else None
	position = index + 1

	return Citation(
		id=str(raw.get('id') or f'cite-{position}'),
		formatted=str(raw.get('formatted') or raw.get('citation') or ''),
		inText=str(raw.get('inText') or raw.get('in_text') or f'({position})'),
		type=str(raw.get('type') or determine_source_type(source.domain if source else '')),
		year=str(raw.get('year') or extract_year(source.published_date if source else None)),
		authors=_string_list(raw.get('authors')) or [(source.author if source else None) or 'Unknown'],
	)


def generate_citations(provider: GenerationProvider, sources: Sequence[SearchResult], style: str) -> list[Citation]:
	system = (
		f'You are a citation expert. Generate citations in {style} format. Return ONLY a valid JSON array of '
		'citation objects. Each object must have: id (string), formatted (string), inText (string), type (string), '
		f'year (string), authors (array of strings). {JSON_ONLY}'
	)
	sources_text = '\n'.join(f'{i}. {source.title} ({source.url})' for i, source in enumerate(sources, 1))
	prompt = f'Sources:\n{sources_text}\n\nGenerate citations in {style} format. Return as JSON array only.'

	items = extract_json_array(provider.generate(system, prompt), provider.name)
	citations = [
		normalize_citation(item, index, sources) for index, item in enumerate(items) if isinstance(item, dict)
	]

	dropped = len(items) - len(citations)
	if dropped:
		logger.warning(f'Dropped {dropped} non-object citation entries')
	if not citations:
		raise MalformedResponseError(provider.name, 'No usable citations in completion')
	return citations


def _filter_strings(items: list[Any], min_length: int) -> list[str]:
	return [item.strip() for item in items if isinstance(item, str) and len(item.strip()) > min_length]


def extract_insights(provider: GenerationProvider, summary: str) -> list[str]:
	system = (
		'You are a research analyst. Extract 5-7 key insights from the research summary. Return ONLY a valid JSON '
		f'array of strings. Each insight should be a clear, actionable statement. {JSON_ONLY}'
	)
	prompt = (
		f'Research Summary: {summary}\n\nExtract the most important insights as a JSON array of strings. '
		'Focus on key findings, trends, implications, and actionable points.'
	)

	insights = _filter_strings(extract_json_array(provider.generate(system, prompt), provider.name), MIN_INSIGHT_LENGTH)
	if not insights:
		raise MalformedResponseError(provider.name, 'No insights in completion')
	return insights


def generate_related_topics(provider: GenerationProvider, query: str, summary: str) -> list[str]:
	system = (
		'You are a research expert. Generate 6-8 related research topics based on the query and summary. Return '
		f'ONLY a valid JSON array of strings. Each topic should be a specific, researchable area. {JSON_ONLY}'
	)
	prompt = (
		f'Query: {query}\nSummary: {summary}\n\nGenerate related research topics as a JSON array of strings. '
		'Focus on specific, actionable research areas that build upon or complement the main topic.'
	)

	topics = _filter_strings(extract_json_array(provider.generate(system, prompt), provider.name), MIN_TOPIC_LENGTH)
	if not topics:
		raise MalformedResponseError(provider.name, 'No related topics in completion')
	return topics
