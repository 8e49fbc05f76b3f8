import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

import requests

from research_assistant.core.errors import MalformedResponseError
from research_assistant.models import PagedPapers, SearchResult

DEFAULT_PAGE_SIZE = 25

_LEADING_INT = re.compile(r'\s*([+-]?\d+)')


def leading_int(value: str | None) -> int | None:
	"""Integer prefix of ``value`` (``'5abc'`` -> 5), like JavaScript's ``parseInt``."""
	match = _LEADING_INT.match(value or '')
	return int(match.group(1)) if match else None


def clamp_page_size(value: int | None, maximum: int, default: int = DEFAULT_PAGE_SIZE) -> int:
	if value is None:
		return default
	return max(1, min(value, maximum))


class HttpProvider(ABC):
	name: str = 'provider'

	def __init__(self, session: requests.Session | None = None, timeout: float = 15.0):
		self.session = session or requests.Session()
		self.timeout = timeout


class WebSearchProvider(HttpProvider):
	@abstractmethod
	def search(self, query: str, count: int = 10) -> list[SearchResult]:
		raise NotImplementedError


class PaperProvider(HttpProvider):
	max_page_size: int = 200

	@abstractmethod
	def search(self, query: str, cursor: str | None = None, per_page: int | None = None, **options: Any) -> PagedPapers:
		raise NotImplementedError

	def page_size(self, per_page: int | None) -> int:
		return clamp_page_size(per_page, self.max_page_size)

	def normalize(self, normalizer: Callable[..., PagedPapers], *payload: Any) -> PagedPapers:
		try:
			return normalizer(*payload)
		except (AttributeError, KeyError, TypeError, ValueError) as e:
			raise MalformedResponseError(self.name, f'unexpected payload shape: {e!r}') from e
