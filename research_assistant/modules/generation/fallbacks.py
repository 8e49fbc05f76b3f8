"""Deterministic offline producers used once every generation attempt has failed."""

import re
from collections.abc import Sequence
from datetime import datetime, timezone

from research_assistant.models import Citation, SearchResult

YEAR_PATTERN = re.compile(r'\b(\d{4})\b')
SENTENCE_SPLIT = re.compile(r'[.!?]+')


def current_year() -> str:
	return str(datetime.now(timezone.utc).year)


def determine_source_type(domain: str) -> str:
	if any(marker in domain for marker in ('edu', 'arxiv', 'scholar')):
		return 'academic'
	if 'gov' in domain or 'org' in domain:
		return 'institutional'
	if any(marker in domain for marker in ('news', 'reuters', 'bbc')):
		return 'news'
	return 'web'


def extract_year(published_date: str | None) -> str:
	if not published_date:
		return current_year()

	try:
		return str(datetime.fromisoformat(published_date.replace('Z', '+00:00')).year)
	except ValueError:
		pass

	match = YEAR_PATTERN.search(published_date)
	return match.group(1) if match else current_year()


def fallback_summary(query: str, sources: Sequence[SearchResult]) -> str:
	findings = '\n'.join(f'- **[{i}]** {source.title}: {source.snippet}' for i, source in enumerate(sources, 1))
	references = '\n'.join(f'[{i}] {source.title} - {source.url}' for i, source in enumerate(sources, 1))

	return (
		f'# Research Summary: {query}\n\n'
		f'Based on the available sources, here is a comprehensive overview of {query}:\n\n'
		'## Introduction\n'
		f'{query} is an important topic that has gained significant attention in recent research and applications.\n\n'
		'## Key Findings\n'
		f'{findings}\n\n'
		'## Conclusion\n'
		f'The research on {query} continues to evolve, with new developments and applications emerging regularly. '
		'Further investigation is recommended to stay current with the latest findings.\n\n'
		'## Sources\n'
		f'{references}'
	)


def format_citation(source: SearchResult, index: int, style: str) -> tuple[str, str]:
	"""Return ``(formatted, in_text)`` for the 1-based ``index``-th source."""
	year = extract_year(source.published_date)
	author = source.author or 'Unknown'
	surname = author.split(' ')[0]

	style = style.lower()
	if style == 'apa':
		return f'{author} ({year}). {source.title}. Retrieved from {source.url}', f'({surname}, {year})'
	elif style == 'mla':
		return f'{author}. "{source.title}." {source.domain}, {year}. Web. <{source.url}>.', f'({surname})'
	elif style == 'ieee':
		return (
			f'[{index}] {author}, "{source.title}," {source.domain}, {year}. [Online]. Available: {source.url}',
			f'[{index}]',
		)
	return f'{author} ({year}). {source.title}. {source.url}', f'({surname}, {year})'


def fallback_citations(sources: Sequence[SearchResult], style: str) -> list[Citation]:
	citations = []
	for index, source in enumerate(sources, 1):
		formatted, in_text = format_citation(source, index, style)
		citations.append(
			Citation(
				id=f'cite-{index}',
				formatted=formatted,
				inText=in_text,
				type=determine_source_type(source.domain),
				year=extract_year(source.published_date),
				authors=[source.author or 'Unknown'],
			)
		)
	return citations


def insights_from_summary(summary: str) -> list[str]:
	sentences = [s.strip() for s in SENTENCE_SPLIT.split(summary) if len(s.strip()) > 20]
	return sentences[:6]


def fallback_related_topics(query: str) -> list[str]:
	return [
		f'Advanced {query} techniques',
		f'Emerging trends in {query}',
		f'Applications of {query}',
		f'Future directions in {query}',
		f'Methodologies for {query}',
		f'Comparative studies on {query}',
		f'Theoretical foundations of {query}',
		f'Case studies in {query}',
	]
