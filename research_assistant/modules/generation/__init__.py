from .fallbacks import (
    determine_source_type,
    extract_year,
    fallback_citations,
    fallback_related_topics,
    fallback_summary,
    insights_from_summary,
)
from .parsing import extract_json_array
from .stages import extract_insights, generate_citations, generate_related_topics, summarize

__all__ = [
    "determine_source_type",
    "extract_year",
    "fallback_citations",
    "fallback_related_topics",
    "fallback_summary",
    "insights_from_summary",
    "extract_json_array",
    "extract_insights",
    "generate_citations",
    "generate_related_topics",
    "summarize",
]
