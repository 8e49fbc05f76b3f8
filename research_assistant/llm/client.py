from abc import ABC, abstractmethod
from typing import Any

from research_assistant.config.settings import Settings
from research_assistant.core.availability import AvailabilityRegistry, Capability
from research_assistant.core.errors import MalformedResponseError, ProviderTransportError
from research_assistant.utils.logger import logger

GROQ_BASE_URL = 'https://api.groq.com/openai/v1'


class GenerationProvider(ABC):
	name: str = 'generation'

	def generate(self, system: str, prompt: str) -> str:
		logger.info(f'Generating with {self.name}...')
		try:
			text = self._generate(system, prompt)
		except Exception as e:
			logger.error(f'{self.name} generation failed: {e}')
			raise ProviderTransportError(self.name, f'Failed to generate text: {e}') from e

		if not text or not text.strip():
			raise MalformedResponseError(self.name, 'Empty completion')
		return text

	@abstractmethod
	def _generate(self, system: str, prompt: str) -> str | None:
		pass


class GroqProvider(GenerationProvider):
	"""Groq through its OpenAI-compatible chat completions endpoint."""

	name = 'groq'

	def __init__(self, api_key: str, model: str, temperature: float = 0.3, client: Any = None):
		if client is None:
			from openai import OpenAI

			client = OpenAI(base_url=GROQ_BASE_URL, api_key=api_key)
		self.client = client
		self.model = model
		self.temperature = temperature

	def _generate(self, system: str, prompt: str) -> str | None:
		response = self.client.chat.completions.create(
			model=self.model,
			messages=[
				{'role': 'system', 'content': system},
				{'role': 'user', 'content': prompt},
			],
			temperature=self.temperature,
		)
		return response.choices[0].message.content


class GeminiProvider(GenerationProvider):
	name = 'gemini'

	def __init__(self, api_key: str, model: str, client: Any = None):
		if client is None:
			from google import genai

			client = genai.Client(api_key=api_key)
		self.client = client
		self.model = model

	def _generate(self, system: str, prompt: str) -> str | None:
		from google.genai import types

		response = self.client.models.generate_content(
			model=self.model,
			contents=prompt,
			config=types.GenerateContentConfig(system_instruction=system),
		)
		return response.text


def create_generation_provider(availability: AvailabilityRegistry, config: Settings) -> GenerationProvider:
	"""Instantiate the preferred configured model; raises ConfigurationError if none."""
	capability = availability.require_generation_provider()
	if capability == Capability.GROQ:
		provider = GroqProvider(config.GROQ_API_KEY, config.GROQ_MODEL)
	else:
		provider = GeminiProvider(config.GOOGLE_GENERATIVE_AI_API_KEY, config.GEMINI_MODEL)

	logger.info(f'Generation provider initialized: {provider.name}/{provider.model}')
	return provider
