from .search import SearchResult, clamp_score
from .paper import PagedPapers, Paper, PaperConcept, ProviderId
from .research import Citation, ResearchRequest


__all__ = [
    "SearchResult",
    "clamp_score",
    "PagedPapers",
    "Paper",
    "PaperConcept",
    "ProviderId",
    "Citation",
    "ResearchRequest",
]
