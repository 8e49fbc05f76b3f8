from collections.abc import Sequence

from research_assistant.models import SearchResult
from research_assistant.utils.logger import logger


class ResultDeduplicator:
	"""Drops repeated results keyed on the exact ``(title, url)`` pair.

	The key is case-sensitive and un-normalized: records whose titles or URLs
	differ only trivially (trailing slash, casing) both survive. The first
	occurrence wins, so the output keeps the input order.
	"""

	def deduplicate(self, results: Sequence[SearchResult]) -> list[SearchResult]:
		if not results:
			return []

		seen: set[tuple[str, str]] = set()
		unique_results: list[SearchResult] = []

		for result in results:
			key = (result.title, result.url)
			if key in seen:
				logger.debug(f'Duplicate dropped: {result.title[:40]}... ({result.url})')
				continue
			seen.add(key)
			unique_results.append(result)

		logger.info(
			f'Deduplication complete: {len(results)} → {len(unique_results)} '
			f'({len(results) - len(unique_results)} duplicates removed)'
		)

		return unique_results
