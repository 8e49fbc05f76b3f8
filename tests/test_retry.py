from unittest.mock import Mock

import pytest

from research_assistant.core.errors import ConfigurationError, MalformedResponseError
from research_assistant.core.retry import RetryPolicy


def test_success_on_third_attempt(no_wait_policy, recorded_sleeps):
	operation = Mock(side_effect=[MalformedResponseError('groq', 'bad'), RuntimeError('boom'), 'done'])
	fallback = Mock(return_value='fallback')

	assert no_wait_policy.run('summary', operation, fallback) == 'done'
	assert operation.call_count == 3
	fallback.assert_not_called()
	assert recorded_sleeps == [2, 4]


def test_exhaustion_returns_fallback(no_wait_policy, recorded_sleeps):
	operation = Mock(side_effect=RuntimeError('always'))

	assert no_wait_policy.run('citations', operation, lambda: ['fallback']) == ['fallback']
	assert operation.call_count == 3
	assert recorded_sleeps == [2, 4]


def test_first_attempt_success_never_sleeps(no_wait_policy, recorded_sleeps):
	assert no_wait_policy.run('search', lambda: 42, lambda: 0) == 42
	assert recorded_sleeps == []


def test_configuration_error_is_not_retried(no_wait_policy, recorded_sleeps):
	operation = Mock(side_effect=ConfigurationError('no keys'))
	fallback = Mock()

	with pytest.raises(ConfigurationError):
		no_wait_policy.run('summary', operation, fallback)

	assert operation.call_count == 1
	fallback.assert_not_called()
	assert recorded_sleeps == []


def test_custom_attempt_count():
	sleeps = []
	operation = Mock(side_effect=RuntimeError('always'))

	RetryPolicy(max_attempts=4, sleep=sleeps.append).run('insights', operation, lambda: None)

	assert operation.call_count == 4
	assert sleeps == [2, 4, 8]
