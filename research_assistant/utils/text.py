import re

from bs4 import BeautifulSoup

_WHITESPACE = re.compile(r'\s+')


def collapse_whitespace(text: str) -> str:
	return _WHITESPACE.sub(' ', text).strip()


def strip_markup(markup: str) -> str:
	"""Plain text of an HTML/JATS fragment, tags replaced by spaces."""
	soup = BeautifulSoup(markup, 'html.parser')
	return collapse_whitespace(soup.get_text(' '))


def truncate(text: str, limit: int = 200) -> str:
	return text[:limit] + ('...' if len(text) > limit else '')
