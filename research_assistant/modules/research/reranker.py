from collections.abc import Sequence
from dataclasses import replace
from typing import Any

import requests

from research_assistant.core.errors import MalformedResponseError, ProviderError
from research_assistant.models import SearchResult, clamp_score
from research_assistant.modules.search_provider.http import post_json
from research_assistant.modules.search_provider.langsearch import BASE_URL, check_api_code
from research_assistant.utils.logger import logger


class LangSearchReranker:
	name = 'langsearch-rerank'

	def __init__(
		self,
		api_key: str,
		model: str = 'langsearch-reranker-v1',
		session: requests.Session | None = None,
		timeout: float = 15.0,
	):
		self.api_key = api_key
		self.model = model
		self.session = session or requests.Session()
		self.timeout = timeout

	def rerank(self, query: str, candidates: Sequence[SearchResult], top_n: int = 10) -> list[SearchResult]:
		"""Reorder ``candidates`` by relevance to ``query``.

		On any transport or payload error the pre-rerank order is kept,
		truncated to ``top_n``.
		"""
		if not candidates:
			return []

		try:
			reranked = self._rerank(query, candidates, top_n)
		except ProviderError as e:
			logger.warning(f'Reranking failed, keeping original order: {e}')
			return list(candidates[:top_n])

		logger.info(f'Reranked {len(candidates)} candidates into {len(reranked)} results')
		return reranked

	def _rerank(self, query: str, candidates: Sequence[SearchResult], top_n: int) -> list[SearchResult]:
		documents = [
			{
				'id': str(index),
				'text': f'{result.title} {result.snippet}',
				'metadata': {'url': result.url, 'domain': result.domain, 'originalScore': result.score},
			}
			for index, result in enumerate(candidates)
		]

		data = post_json(
			self.session,
			self.name,
			f'{BASE_URL}/rerank',
			self.timeout,
			headers={'Authorization': f'Bearer {self.api_key}', 'Content-Type': 'application/json'},
			json={
				'model': self.model,
				'query': query,
				'top_n': top_n,
				'return_documents': True,
				'documents': documents,
			},
		)
		check_api_code(self.name, data)

		ranked = data.get('results')
		if not isinstance(ranked, list):
			raise MalformedResponseError(self.name, 'rerank response has no results list')

		reranked = [
			replace(
				self._resolve(candidates, item),
				score=clamp_score(item.get('relevance_score') or 1 - position * 0.1),
			)
			for position, item in enumerate(ranked)
			if isinstance(item, dict)
		]
		if not reranked:
			raise MalformedResponseError(self.name, 'rerank returned no usable results')
		return reranked

	@staticmethod
	def _resolve(candidates: Sequence[SearchResult], item: dict[str, Any]) -> SearchResult:
		# An id that does not map back to a candidate resolves to the first one.
		document = item.get('document')
		if not isinstance(document, dict):
			return candidates[0]
		try:
			index = int(document.get('id', 0))
		except (TypeError, ValueError):
			return candidates[0]
		return candidates[index] if 0 <= index < len(candidates) else candidates[0]
