import time
from collections.abc import Callable
from typing import TypeVar

from tenacity import RetryCallState, Retrying, retry_if_not_exception_type, stop_after_attempt, wait_exponential

from research_assistant.core.errors import ConfigurationError
from research_assistant.utils.logger import logger

T = TypeVar('T')


class RetryPolicy:
	"""Bounded retry with exponential back-off and a local fallback.

	Attempt ``n`` that fails is followed by a wait of ``2 ** n`` seconds.
	Once ``max_attempts`` attempts have failed the stage's fallback producer
	is called and its value returned instead of raising. A
	``ConfigurationError`` is never retried and propagates to the caller.
	"""

	def __init__(self, max_attempts: int = 3, sleep: Callable[[float], None] = time.sleep):
		self.max_attempts = max_attempts
		self.sleep = sleep

	def run(self, stage: str, operation: Callable[[], T], fallback: Callable[[], T]) -> T:
		def log_retry(state: RetryCallState) -> None:
			delay = state.next_action.sleep if state.next_action else 0
			logger.warning(
				f'{stage} attempt {state.attempt_number} failed: {state.outcome.exception()} '
				f'(retrying in {delay:.0f}s)'
			)

		def use_fallback(state: RetryCallState) -> T:
			logger.error(f'All {stage} attempts failed, using fallback: {state.outcome.exception()}')
			return fallback()

		retrying = Retrying(
			stop=stop_after_attempt(self.max_attempts),
			wait=wait_exponential(multiplier=2),
			retry=retry_if_not_exception_type(ConfigurationError),
			before_sleep=log_retry,
			retry_error_callback=use_fallback,
			sleep=self.sleep,
		)
		return retrying(operation)
