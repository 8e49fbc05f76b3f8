from dataclasses import asdict, dataclass, field
from typing import Any

from pydantic import BaseModel


class ResearchRequest(BaseModel):
	query: str = ''
	citationStyle: str = 'apa'
	tone: str = 'academic'
	databases: list[str] = []


@dataclass(frozen=True)
class Citation:
	id: str
	formatted: str
	inText: str
	type: str
	year: str
	authors: list[str] = field(default_factory=list)

	def to_dict(self) -> dict[str, Any]:
		return asdict(self)
