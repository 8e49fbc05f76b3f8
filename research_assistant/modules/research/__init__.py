from .academic import AcademicSearch, pages_to_search_results, paper_to_search_result, parse_provider_ids
from .aggregator import SearchAggregator
from .deduplication import ResultDeduplicator
from .enrichment import ContentEnricher
from .fallback import synthetic_results
from .reranker import LangSearchReranker

__all__ = [
    "AcademicSearch",
    "pages_to_search_results",
    "paper_to_search_result",
    "parse_provider_ids",
    "SearchAggregator",
    "ResultDeduplicator",
    "ContentEnricher",
    "synthetic_results",
    "LangSearchReranker",
]
