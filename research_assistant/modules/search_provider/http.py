from typing import Any

import requests

from research_assistant.core.errors import MalformedResponseError, ProviderTransportError

USER_AGENT = 'research-assistant'


def build_user_agent(mailto: str | None = None) -> str:
	return f'{USER_AGENT} ({mailto})' if mailto else USER_AGENT


def send(
	session: requests.Session,
	provider: str,
	method: str,
	url: str,
	timeout: float,
	**kwargs: Any,
) -> requests.Response:
	try:
		response = session.request(method, url, timeout=timeout, **kwargs)
		response.raise_for_status()
	except requests.RequestException as e:
		raise ProviderTransportError(provider, str(e)) from e
	return response


def get_json(session: requests.Session, provider: str, url: str, timeout: float, **kwargs: Any) -> Any:
	return decode_json(provider, send(session, provider, 'GET', url, timeout, **kwargs))


def post_json(session: requests.Session, provider: str, url: str, timeout: float, **kwargs: Any) -> Any:
	return decode_json(provider, send(session, provider, 'POST', url, timeout, **kwargs))


def decode_json(provider: str, response: requests.Response) -> Any:
	try:
		return response.json()
	except ValueError as e:
		raise MalformedResponseError(provider, f'response is not valid JSON: {e}') from e
