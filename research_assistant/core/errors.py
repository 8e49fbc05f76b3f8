class ResearchAssistantError(Exception):
	pass


class ConfigurationError(ResearchAssistantError):
	"""No generation provider credential is configured. Never retried."""


class ProviderError(ResearchAssistantError):
	def __init__(self, provider: str, message: str):
		self.provider = provider
		super().__init__(f'{provider}: {message}')


class ProviderTransportError(ProviderError):
	"""Network or HTTP failure while talking to an external provider."""


class MalformedResponseError(ProviderError):
	"""The provider answered, but not with the payload shape we expected."""


class InvalidRequestError(ResearchAssistantError):
	"""A caller-supplied parameter is missing or unusable."""
