from .base import PaperProvider, WebSearchProvider
from .arxiv import ArxivProvider
from .brave import BraveSearchProvider
from .crossref import CrossrefProvider
from .europepmc import EuropePmcProvider
from .langsearch import LangSearchProvider
from .openalex import OpenAlexProvider
from .open_web import (
    ArxivOpenSearchProvider,
    DuckDuckGoProvider,
    PubMedProvider,
    WikipediaProvider,
    default_open_sources,
)

__all__ = [
    "PaperProvider",
    "WebSearchProvider",
    "ArxivProvider",
    "BraveSearchProvider",
    "CrossrefProvider",
    "EuropePmcProvider",
    "LangSearchProvider",
    "OpenAlexProvider",
    "ArxivOpenSearchProvider",
    "DuckDuckGoProvider",
    "PubMedProvider",
    "WikipediaProvider",
    "default_open_sources",
]
