from typing import Any

from .base import PaperProvider
from .http import get_json
from .normalizers import normalize_europepmc_response
from research_assistant.models import PagedPapers
from research_assistant.utils.logger import logger

FIRST_PAGE_CURSOR = '*'


class EuropePmcProvider(PaperProvider):
	name = 'europepmc'
	base_url = 'https://www.ebi.ac.uk/europepmc/webservices/rest/search'
	max_page_size = 100

	def search(
		self,
		query: str,
		cursor: str | None = None,
		per_page: int | None = None,
		result_type: str = 'core',
		**options: Any,
	) -> PagedPapers:
		params = {
			'query': query,
			'format': 'json',
			'pageSize': self.page_size(per_page),
			'resultType': result_type,
			'cursorMark': cursor or FIRST_PAGE_CURSOR,
		}

		logger.info(f"Searching Europe PMC for: '{query}' (pageSize {params['pageSize']})")
		data = get_json(self.session, self.name, self.base_url, self.timeout, params=params)
		page = self.normalize(normalize_europepmc_response, data)
		logger.info(f'Europe PMC returned {len(page.papers)} records')
		return page
