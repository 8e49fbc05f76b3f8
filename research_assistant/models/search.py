from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse


def clamp_score(score: float) -> float:
	return max(0.0, min(1.0, score))


@dataclass(frozen=True)
class SearchResult:
	title: str
	url: str
	snippet: str
	score: float
	published_date: str | None = None
	author: str | None = None

	@property
	def domain(self) -> str:
		return urlparse(self.url).hostname or ''

	def to_dict(self) -> dict[str, Any]:
		return {
			'title': self.title,
			'url': self.url,
			'snippet': self.snippet,
			'domain': self.domain,
			'score': self.score,
			'published_date': self.published_date,
			'author': self.author,
		}
