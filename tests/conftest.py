from unittest.mock import Mock

import pytest

from research_assistant.config.settings import Settings
from research_assistant.core.retry import RetryPolicy

NO_KEYS = {
	'GROQ_API_KEY': None,
	'GOOGLE_GENERATIVE_AI_API_KEY': None,
	'LANGSEARCH_API_KEY': None,
	'BRAVE_API_KEY': None,
	'GOOGLE_SEARCH_API_KEY': None,
	'GOOGLE_SEARCH_CSE_ID': None,
	'OPENALEX_MAILTO': None,
	'OPENALEX_API_KEY': None,
	'CROSSREF_MAILTO': None,
}


def make_response(json_data=None, text='', status_code=200):
	response = Mock()
	response.status_code = status_code
	response.text = text
	response.raise_for_status.return_value = None
	if isinstance(json_data, Exception):
		response.json.side_effect = json_data
	else:
		response.json.return_value = json_data
	return response


@pytest.fixture
def make_settings():
	def factory(**overrides):
		values = {**NO_KEYS, 'ENRICH_RESULTS': False, **overrides}
		return Settings(_env_file=None, **values)

	return factory


@pytest.fixture
def session():
	return Mock()


@pytest.fixture
def recorded_sleeps():
	return []


@pytest.fixture
def no_wait_policy(recorded_sleeps):
	return RetryPolicy(max_attempts=3, sleep=recorded_sleeps.append)
