"""Pure converters from raw provider payloads to ``PagedPapers``.

Nothing here performs I/O. Every function is deterministic: the same payload
always yields the same ``Paper.id``. Ids are DOI based whenever a DOI is known
(lower-cased, so providers that disagree on DOI casing still agree on the id)
and provider-prefixed otherwise.
"""

import re
from typing import Any

from research_assistant.models import PagedPapers, Paper, PaperConcept, ProviderId
from research_assistant.utils.text import collapse_whitespace, strip_markup

_DOI_URL_PREFIX = re.compile(r'^https?://(dx\.)?doi\.org/', re.IGNORECASE)
_PDF_HINT = re.compile(r'pdf', re.IGNORECASE)


def doi_id(doi: str) -> str:
	return f'https://doi.org/{doi.lower()}'


def reconstruct_abstract(index: dict[str, list[int]] | None) -> str | None:
	"""Rebuild text from an inverted ``{word: [positions]}`` index."""
	if not index:
		return None

	positions = [(position, word) for word, word_positions in index.items() for position in word_positions]
	positions.sort(key=lambda pair: pair[0])
	return ' '.join(word for _position, word in positions)


def _first(value: Any) -> Any:
	if isinstance(value, list):
		return value[0] if value else None
	return value


def _as_int(value: Any) -> int | None:
	try:
		return int(value) if value is not None and value != '' else None
	except (TypeError, ValueError):
		return None


# OpenAlex


def normalize_openalex_work(work: dict[str, Any]) -> Paper:
	doi = _DOI_URL_PREFIX.sub('', work['doi']) if work.get('doi') else None

	authors = [
		authorship['author']['display_name']
		for authorship in work.get('authorships') or []
		if (authorship.get('author') or {}).get('display_name')
	]

	primary = work.get('primary_location') or {}
	open_access = work.get('open_access') or {}

	venue = (
		(work.get('host_venue') or {}).get('display_name')
		or (primary.get('source') or {}).get('display_name')
		or (primary.get('venue') or {}).get('display_name')
	)
	landing = primary.get('landing_page_url') or open_access.get('oa_url') or (f'https://doi.org/{doi}' if doi else None)
	pdf_url = primary.get('pdf_url') or open_access.get('oa_url')

	concepts = None
	if isinstance(work.get('concepts'), list):
		concepts = [
			PaperConcept(name=concept.get('display_name') or '', id=concept.get('id'), score=concept.get('score'))
			for concept in work['concepts']
		]

	year = work.get('publication_year')
	if not year and work.get('from_publication_date'):
		year = _as_int(str(work['from_publication_date'])[:4])

	referenced = work.get('referenced_works_count')
	if referenced is None and isinstance(work.get('referenced_works'), list):
		referenced = len(work['referenced_works'])

	title = work.get('display_name') or work.get('title') or 'Untitled'

	if doi:
		paper_id = doi_id(doi)
	elif work.get('id'):
		paper_id = f'openalex:{str(work["id"]).rstrip("/").rsplit("/", 1)[-1]}'
	else:
		paper_id = f'openalex:{title}'

	return Paper(
		id=paper_id,
		doi=doi,
		title=title,
		abstract=work.get('abstract') or reconstruct_abstract(work.get('abstract_inverted_index')),
		authors=authors,
		year=year,
		published_at=work.get('publication_date') or work.get('from_publication_date'),
		venue=venue,
		url=landing,
		pdf_url=pdf_url,
		source=ProviderId.OPENALEX,
		open_access=open_access.get('is_oa'),
		citations_count=work.get('cited_by_count'),
		referenced_by_count=referenced,
		concepts=concepts,
	)


def normalize_openalex_response(data: dict[str, Any]) -> PagedPapers:
	results = data.get('results') if isinstance(data.get('results'), list) else []
	meta = data.get('meta') or {}
	return PagedPapers(
		papers=[normalize_openalex_work(work) for work in results],
		next_cursor=meta.get('next_cursor'),
		total_count=meta.get('count'),
	)


# Crossref


def normalize_crossref_item(item: dict[str, Any]) -> Paper:
	doi = item.get('DOI') or None

	authors = []
	for author in item.get('author') or []:
		name = ' '.join(part for part in (author.get('given'), author.get('family')) if part).strip()
		if name:
			authors.append(name)

	title = _first(item.get('title')) or 'Untitled'
	abstract = strip_markup(item['abstract']) if isinstance(item.get('abstract'), str) else None

	date_parts = (item.get('issued') or {}).get('date-parts')
	year = _as_int(_first(date_parts[0])) if date_parts and date_parts[0] else None

	url = item.get('URL') or (f'https://doi.org/{doi}' if doi else None)

	if doi:
		paper_id = doi_id(doi)
	else:
		paper_id = f'crossref:{url or title}'

	return Paper(
		id=paper_id,
		doi=doi,
		title=title,
		abstract=abstract or None,
		authors=authors,
		year=year,
		published_at=_first((item.get('created') or {}).get('date-time')),
		venue=_first(item.get('container-title')),
		url=url,
		source=ProviderId.CROSSREF,
		open_access=True if isinstance(item.get('license'), list) and item['license'] else None,
		citations_count=item.get('is-referenced-by-count'),
	)


def normalize_crossref_response(data: dict[str, Any]) -> PagedPapers:
	message = data.get('message') or {}
	items = message.get('items') if isinstance(message.get('items'), list) else []
	return PagedPapers(
		papers=[normalize_crossref_item(item) for item in items],
		next_cursor=message.get('next-cursor') or None,
		total_count=message.get('total-results') or None,
	)


# arXiv (the client hands over entries already extracted from the Atom feed)


def normalize_arxiv_entry(entry: dict[str, Any]) -> Paper:
	entry_id = entry.get('id') or ''
	doi = entry.get('doi') or None
	title = collapse_whitespace(entry.get('title') or '') or 'Untitled'

	if doi:
		paper_id = doi_id(doi)
	elif '/abs/' in entry_id:
		paper_id = f'arxiv:{entry_id.split("/abs/", 1)[1]}'
	else:
		paper_id = f'arxiv:{entry_id or title}'

	published = entry.get('published')

	return Paper(
		id=paper_id,
		doi=doi,
		title=title,
		abstract=entry.get('summary') or None,
		authors=list(entry.get('authors') or []),
		year=_as_int(published[:4]) if published else None,
		published_at=published,
		venue='arXiv',
		url=entry_id or None,
		pdf_url=entry.get('pdf_url'),
		source=ProviderId.ARXIV,
		open_access=True,
	)


def normalize_arxiv_response(
	entries: list[dict[str, Any]], total: int | None, start: int, per_page: int
) -> PagedPapers:
	next_cursor = None
	if total is not None and start + len(entries) < total:
		next_cursor = str(start + per_page)

	return PagedPapers(
		papers=[normalize_arxiv_entry(entry) for entry in entries],
		next_cursor=next_cursor,
		total_count=total,
	)


# Europe PMC


def _europepmc_pdf_url(item: dict[str, Any]) -> str | None:
	candidates = (item.get('fullTextUrlList') or {}).get('fullTextUrl')
	if not isinstance(candidates, list):
		return None

	for candidate in candidates:
		hint = candidate.get('documentStyle') or candidate.get('availability') or candidate.get('url') or ''
		if _PDF_HINT.search(hint):
			return candidate.get('url')
	return None


def normalize_europepmc_item(item: dict[str, Any]) -> Paper:
	doi = item.get('doi') or None
	authors = [name.strip() for name in str(item.get('authorString') or '').split(',') if name.strip()]

	if item.get('id') and item.get('source'):
		landing = f'https://europepmc.org/abstract/{item["source"]}/{item["id"]}'
	else:
		landing = item.get('pageInfo') or None

	if doi:
		paper_id = doi_id(doi)
	elif item.get('id'):
		paper_id = f'europepmc:{item["id"]}'
	else:
		paper_id = f'europepmc:{item.get("title") or "unknown"}'

	open_access = {'Y': True, 'N': False}.get(item.get('isOpenAccess'))

	return Paper(
		id=paper_id,
		doi=doi,
		title=item.get('title') or 'Untitled',
		abstract=item.get('abstractText') or None,
		authors=authors,
		year=_as_int(item.get('pubYear')),
		published_at=item.get('firstPublicationDate'),
		venue=item.get('journalTitle') or item.get('bookOrReportDetails'),
		url=landing,
		pdf_url=_europepmc_pdf_url(item),
		source=ProviderId.EUROPEPMC,
		open_access=open_access,
		citations_count=item.get('citedByCount'),
	)


def normalize_europepmc_response(data: dict[str, Any]) -> PagedPapers:
	result_list = data.get('resultList') or {}
	items = result_list.get('result') if isinstance(result_list.get('result'), list) else []
	return PagedPapers(
		papers=[normalize_europepmc_item(item) for item in items],
		next_cursor=data.get('nextCursorMark') or None,
		total_count=data.get('hitCount') or None,
	)
