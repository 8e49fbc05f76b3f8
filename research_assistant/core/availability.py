from dataclasses import dataclass
from enum import Enum

from research_assistant.config.settings import Settings
from research_assistant.core.errors import ConfigurationError
from research_assistant.utils.logger import logger


class Capability(Enum):
	GROQ = 'groq'
	GEMINI = 'gemini'
	LANGSEARCH = 'langSearch'
	BRAVE = 'brave'
	GOOGLE_SEARCH = 'googleSearch'
	OPENALEX = 'openAlex'


GENERATION_PREFERENCE: tuple[Capability, ...] = (Capability.GROQ, Capability.GEMINI)

SEARCH_PREFERENCE: tuple[Capability, ...] = (
	Capability.LANGSEARCH,
	Capability.BRAVE,
	Capability.GOOGLE_SEARCH,
	Capability.OPENALEX,
)

# Public providers that need no credential; always reported as available.
UNKEYED_PROVIDERS: tuple[str, ...] = ('crossref', 'arxiv', 'europePmc', 'duckDuckGo', 'wikipedia', 'pubMed')


@dataclass(frozen=True)
class AvailabilityRegistry:
	capabilities: frozenset[Capability]

	@classmethod
	def from_settings(cls, config: Settings) -> 'AvailabilityRegistry':
		present = {
			Capability.GROQ: bool(config.GROQ_API_KEY),
			Capability.GEMINI: bool(config.GOOGLE_GENERATIVE_AI_API_KEY),
			Capability.LANGSEARCH: bool(config.LANGSEARCH_API_KEY),
			Capability.BRAVE: bool(config.BRAVE_API_KEY),
			Capability.GOOGLE_SEARCH: bool(config.GOOGLE_SEARCH_API_KEY and config.GOOGLE_SEARCH_CSE_ID),
			Capability.OPENALEX: bool(config.OPENALEX_MAILTO or config.OPENALEX_API_KEY),
		}
		registry = cls(frozenset(cap for cap, ok in present.items() if ok))
		logger.info(f'Available APIs: {registry.status()}')
		return registry

	def is_available(self, capability: Capability) -> bool:
		return capability in self.capabilities

	def _first_available(self, preference: tuple[Capability, ...]) -> Capability | None:
		for capability in preference:
			if capability in self.capabilities:
				return capability
		return None

	def preferred_generation_provider(self) -> Capability | None:
		return self._first_available(GENERATION_PREFERENCE)

	def preferred_search_provider(self) -> Capability | None:
		return self._first_available(SEARCH_PREFERENCE)

	def require_generation_provider(self) -> Capability:
		provider = self.preferred_generation_provider()
		if provider is None:
			raise ConfigurationError(
				'No AI models available. Please configure GROQ_API_KEY or GOOGLE_GENERATIVE_AI_API_KEY'
			)
		return provider

	def status(self) -> dict[str, bool]:
		report = {capability.value: capability in self.capabilities for capability in Capability}
		report.update({name: True for name in UNKEYED_PROVIDERS})
		return report
