import re
import xml.etree.ElementTree as ET
from typing import Any

from .base import PaperProvider, leading_int
from .http import send
from .normalizers import normalize_arxiv_response
from research_assistant.core.errors import MalformedResponseError
from research_assistant.models import PagedPapers
from research_assistant.utils.logger import logger
from research_assistant.utils.text import collapse_whitespace

NAMESPACES = {
	'atom': 'http://www.w3.org/2005/Atom',
	'opensearch': 'http://a9.com/-/spec/opensearch/1.1/',
	'arxiv': 'http://arxiv.org/schemas/atom',
}

_PDF_HREF = re.compile(r'(\.pdf($|\?))|(arxiv\.org/pdf/)', re.IGNORECASE)


def _text(element: ET.Element, path: str) -> str | None:
	found = element.find(path, NAMESPACES)
	if found is None or found.text is None:
		return None
	return found.text.strip()


def parse_atom_feed(xml: str) -> tuple[list[dict[str, Any]], int | None]:
	"""Extract the total count and per-entry fields from an arXiv Atom feed."""
	try:
		root = ET.fromstring(xml)
	except ET.ParseError as e:
		raise MalformedResponseError('arxiv', f'unparseable Atom feed: {e}') from e

	total_text = _text(root, 'opensearch:totalResults')
	total = int(total_text) if total_text and total_text.isdigit() else None

	entries = []
	for entry in root.findall('atom:entry', NAMESPACES):
		pdf_url = None
		for link in entry.findall('atom:link', NAMESPACES):
			href = link.get('href') or ''
			if _PDF_HREF.search(href):
				pdf_url = href
				break

		entries.append(
			{
				'id': _text(entry, 'atom:id') or '',
				'title': collapse_whitespace(_text(entry, 'atom:title') or ''),
				'summary': collapse_whitespace(_text(entry, 'atom:summary') or ''),
				'published': _text(entry, 'atom:published'),
				'authors': [
					collapse_whitespace(name.text)
					for name in entry.findall('atom:author/atom:name', NAMESPACES)
					if name.text
				],
				'pdf_url': pdf_url,
				'doi': _text(entry, 'arxiv:doi'),
			}
		)

	return entries, total


class ArxivProvider(PaperProvider):
	"""arXiv export API. The cursor is the numeric ``start`` offset rendered as a string."""

	name = 'arxiv'
	base_url = 'https://export.arxiv.org/api/query'
	max_page_size = 200

	def search(
		self,
		query: str,
		cursor: str | None = None,
		per_page: int | None = None,
		sort_by: str | None = None,
		sort_order: str | None = None,
		**options: Any,
	) -> PagedPapers:
		start = max(0, leading_int(cursor) or 0)
		max_results = self.page_size(per_page)

		params: dict[str, Any] = {'search_query': query, 'start': start, 'max_results': max_results}
		if sort_by:
			params['sortBy'] = sort_by
		if sort_order:
			params['sortOrder'] = sort_order

		logger.info(f"Searching arXiv for: '{query}' (start {start}, max {max_results})")
		response = send(self.session, self.name, 'GET', self.base_url, self.timeout, params=params)
		entries, total = parse_atom_feed(response.text)
		logger.info(f'Found {len(entries)} papers on arXiv (total {total})')
		return self.normalize(normalize_arxiv_response, entries, total, start, max_results)
