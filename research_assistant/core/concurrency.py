from collections.abc import Callable, Hashable, Mapping
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import TypeVar

from research_assistant.utils.logger import logger

K = TypeVar('K', bound=Hashable)
T = TypeVar('T')


def fan_out(tasks: Mapping[K, Callable[[], T]], max_workers: int = 4) -> dict[K, T]:
	"""Run independent calls concurrently and keep only the ones that succeed.

	A failing branch is logged and dropped; it never cancels its siblings.
	The returned dict follows the key order of ``tasks``.
	"""
	if not tasks:
		return {}

	completed: dict[K, T] = {}
	with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(tasks)))) as executor:
		futures = {executor.submit(task): key for key, task in tasks.items()}
		for future in as_completed(futures):
			key = futures[future]
			try:
				completed[key] = future.result()
			except Exception as e:
				logger.warning(f'Concurrent call {key!r} failed: {e}')

	return {key: completed[key] for key in tasks if key in completed}
