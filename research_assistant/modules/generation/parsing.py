import json
from typing import Any

from research_assistant.core.errors import MalformedResponseError


def _balanced_arrays(text: str):
	"""Yield every balanced ``[...]`` span, ignoring brackets inside JSON strings."""
	for start, char in enumerate(text):
		if char != '[':
			continue

		depth = 0
		in_string = False
		escaped = False
		for end in range(start, len(text)):
			current = text[end]
			if in_string:
				if escaped:
					escaped = False
				elif current == '\\':
					escaped = True
				elif current == '"':
					in_string = False
				continue

			if current == '"':
				in_string = True
			elif current == '[':
				depth += 1
			elif current == ']':
				depth -= 1
				if depth == 0:
					yield text[start : end + 1]
					break


def extract_json_array(text: str, provider: str = 'generation') -> list[Any]:
	"""Return the first substring of ``text`` that decodes to a JSON list.

	Models like to wrap the array in prose or markdown fences, so the whole
	completion is scanned instead of being decoded directly.
	"""
	for candidate in _balanced_arrays(text or ''):
		try:
			value = json.loads(candidate)
		except json.JSONDecodeError:
			continue
		if isinstance(value, list):
			return value

	raise MalformedResponseError(provider, 'No JSON array found in completion')
