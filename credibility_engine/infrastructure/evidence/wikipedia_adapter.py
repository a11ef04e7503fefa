"""Wikipedia implementation of the evidence provider interface."""

import asyncio
import logging
import re
from typing import Dict, List, Optional, Set

import wikipediaapi
from cachetools import TTLCache
from pydantic import BaseModel, Field

from ...domain.ports.evidence_provider import EvidenceProvider, EvidenceSnippet

logger = logging.getLogger(__name__)


class WikipediaConfig(BaseModel):
    """Configuration for Wikipedia adapter."""

    user_agent: str = Field(
        default="CredibilityEngine/1.0",
        description="User agent for Wikipedia API"
    )
    language: str = Field(default="en", description="Wikipedia language code")
    cache_ttl: int = Field(default=3600, description="Cache TTL in seconds")
    cache_maxsize: int = Field(default=1000, description="Maximum cache size")
    max_candidates: int = Field(default=6, description="Page titles tried per query")
    summary_chars: int = Field(default=500, description="Summary characters kept per snippet")


class WikipediaEvidenceAdapter(EvidenceProvider):
    """Looks up Wikipedia pages related to a claim.

    Candidate page titles are the cleaned query itself and every run of
    capitalized words in it (names, products, organisations). Pages are
    ranked by term overlap with the query.
    """

    def __init__(
        self,
        config: Optional[WikipediaConfig] = None,
        provider_name: str = "Wikipedia",
    ):
        """Initialize the adapter.

        Args:
            config: Adapter configuration
            provider_name: Name of the provider
        """
        self._config = config or WikipediaConfig()
        self._name = provider_name
        self._wiki = None
        self._initialized = False
        self._cache = TTLCache(
            maxsize=self._config.cache_maxsize,
            ttl=self._config.cache_ttl
        )

    async def initialize(self) -> None:
        """Initialize the Wikipedia API client."""
        try:
            self._wiki = wikipediaapi.Wikipedia(
                user_agent=self._config.user_agent,
                language=self._config.language,
            )
            self._initialized = True
        except Exception as e:
            self._initialized = False
            self._wiki = None
            raise ConnectionError(f"Failed to initialize evidence provider: {e}")

    async def search(
        self,
        query: str,
        max_results: int = 3,
        min_score: float = 0.3,
    ) -> List[EvidenceSnippet]:
        """Search for pages relevant to the query.

        Args:
            query: Search query, usually a claim
            max_results: Maximum number of results
            min_score: Minimum relevance score

        Returns:
            Snippets sorted by relevance
        """
        if not self._wiki:
            raise RuntimeError("Provider not initialized")

        cache_key = f"search:{self._config.language}:{query}:{max_results}:{min_score}"
        if cache_key in self._cache:
            return self._cache[cache_key]

        results = await asyncio.to_thread(self._lookup, query, max_results, min_score)
        logger.info(f"📚 Found {len(results)} evidence pages for: {query[:80]}")

        self._cache[cache_key] = results
        return results

    def _lookup(self, query: str, max_results: int, min_score: float) -> List[EvidenceSnippet]:
        results = []
        seen_titles: Set[str] = set()

        for title in self._candidate_titles(query):
            page = self._wiki.page(title)
            if not page.exists() or page.title in seen_titles:
                continue
            seen_titles.add(page.title)

            relevance = self._calculate_relevance(query, page.title, page.summary)
            if relevance < min_score:
                continue

            results.append(
                EvidenceSnippet(
                    title=page.title,
                    summary=page.summary[:self._config.summary_chars],
                    url=page.fullurl,
                    relevance_score=relevance,
                    metadata={
                        "language": self._config.language,
                        "pageid": page.pageid,
                    },
                )
            )

        results.sort(key=lambda x: x.relevance_score, reverse=True)
        return results[:max_results]

    def _candidate_titles(self, query: str) -> List[str]:
        cleaned = self._preprocess_query(query)
        candidates = [cleaned] if cleaned else []
        for match in re.finditer(r"\b[A-Z][\w'-]*(?:\s+[A-Z][\w'-]*)*", cleaned):
            title = match.group(0)
            if title not in candidates:
                candidates.append(title)
        return candidates[:self._config.max_candidates]

    def _preprocess_query(self, query: str) -> str:
        """Remove special characters and normalize whitespace."""
        query = re.sub(r"[^\w\s'-]", " ", query)
        return " ".join(query.split())

    def _calculate_relevance(self, query: str, title: str, summary: str) -> float:
        """Term overlap between the query and a page, title weighted higher."""
        query_terms = set(re.findall(r"\w+", query.lower()))
        if not query_terms:
            return 0.0

        title_matches = len(query_terms.intersection(re.findall(r"\w+", title.lower())))
        summary_matches = len(query_terms.intersection(re.findall(r"\w+", summary.lower())))

        score = (
            (title_matches / len(query_terms)) * 0.6 +
            (summary_matches / len(query_terms)) * 0.4
        )

        # Boost score for exact matches
        if title.lower() in query.lower():
            score = min(1.0, score * 1.5)

        return min(1.0, score)

    async def shutdown(self) -> None:
        """Shutdown the provider and clean up resources."""
        self._wiki = None
        self._initialized = False
        self._cache.clear()

    @property
    def provider_name(self) -> str:
        """Get the provider name."""
        return self._name

    @property
    def is_available(self) -> bool:
        """Check if the provider is available and ready."""
        return self._initialized and self._wiki is not None

    @property
    def capabilities(self) -> Dict[str, bool]:
        """Get the provider's capabilities."""
        return {
            "evidence_search": True,
            "caching": True,
        }
