from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ProviderId(Enum):
	OPENALEX = 'openalex'
	CROSSREF = 'crossref'
	ARXIV = 'arxiv'
	EUROPEPMC = 'europepmc'


@dataclass(frozen=True)
class PaperConcept:
	name: str
	id: str | None = None
	score: float | None = None

	def to_dict(self) -> dict[str, Any]:
		return _drop_none({'id': self.id, 'name': self.name, 'score': self.score})


@dataclass(frozen=True)
class Paper:
	id: str
	title: str
	source: ProviderId
	authors: list[str] = field(default_factory=list)
	doi: str | None = None
	abstract: str | None = None
	year: int | None = None
	published_at: str | None = None
	venue: str | None = None
	url: str | None = None
	pdf_url: str | None = None
	open_access: bool | None = None
	citations_count: int | None = None
	referenced_by_count: int | None = None
	concepts: list[PaperConcept] | None = None

	def to_dict(self) -> dict[str, Any]:
		return _drop_none(
			{
				'id': self.id,
				'doi': self.doi,
				'title': self.title,
				'abstract': self.abstract,
				'authors': list(self.authors),
				'year': self.year,
				'publishedAt': self.published_at,
				'venue': self.venue,
				'url': self.url,
				'pdfUrl': self.pdf_url,
				'source': self.source.value,
				'openAccess': self.open_access,
				'citationsCount': self.citations_count,
				'referencedByCount': self.referenced_by_count,
				'concepts': [c.to_dict() for c in self.concepts] if self.concepts is not None else None,
			}
		)


@dataclass(frozen=True)
class PagedPapers:
	papers: list[Paper]
	next_cursor: str | None
	total_count: int | None = None

	def to_dict(self) -> dict[str, Any]:
		data: dict[str, Any] = {
			'papers': [paper.to_dict() for paper in self.papers],
			'nextCursor': self.next_cursor,
		}
		if self.total_count is not None:
			data['totalCount'] = self.total_count
		return data


def _drop_none(data: dict[str, Any]) -> dict[str, Any]:
	return {key: value for key, value in data.items() if value is not None}
