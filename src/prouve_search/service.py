"""Function-level contract consumed by the rendering layer."""

import logging
from typing import Any

from .config import DEFAULT_CONFIG, load_config
from .corpus import Corpus, SourceContent, StaticContentProvider, build_corpus
from .models import (
    FacetCatalogue,
    RecommendationItem,
    RecommendationOptions,
    SearchQuery,
    SearchResult,
)
from .recommend import RecommendationEngine
from .search import FilterRegistry, QueryEngine, SuggestionEngine
from .updates import ContentVersion, apply_version

logger = logging.getLogger(__name__)


class SearchService:
    """Owns one corpus snapshot and the engines built over it.

    Every operation is a pure read of the snapshot. New content becomes
    searchable only through ``with_version``, which returns a new service.
    """

    def __init__(
        self,
        corpus: Corpus,
        config: dict[str, Any] | None = None,
        content: SourceContent | None = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.corpus = corpus
        self.content = content
        self.query_engine = QueryEngine(corpus, self.config)
        self.suggestion_engine = SuggestionEngine(corpus, self.config)
        self.recommendation_engine = RecommendationEngine(corpus, self.config)
        self.filter_registry = FilterRegistry(corpus, self.config)

    @classmethod
    def from_content(cls, content: SourceContent, config: dict[str, Any] | None = None) -> "SearchService":
        return cls(build_corpus(content), config, content=content)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "SearchService":
        content = StaticContentProvider(config["data_path"]).load()
        return cls.from_content(content, config)

    def perform_global_search(self, query: SearchQuery) -> list[SearchResult]:
        return self.query_engine.search(query)

    def get_global_search_filters(self) -> FacetCatalogue:
        return self.filter_registry.get_facets()

    def get_search_suggestions(self, partial: str) -> list[str]:
        return self.suggestion_engine.suggest(partial)

    def get_work_recommendations(
        self, work_id: str, options: RecommendationOptions | None = None
    ) -> list[RecommendationItem]:
        return self.recommendation_engine.recommend("work", work_id, options)

    def get_scholar_recommendations(
        self, scholar_id: str, options: RecommendationOptions | None = None
    ) -> list[RecommendationItem]:
        return self.recommendation_engine.recommend("scholar", scholar_id, options)

    def get_biography_recommendations(
        self, section: str, options: RecommendationOptions | None = None
    ) -> list[RecommendationItem]:
        return self.recommendation_engine.recommend("biography", section, options)

    def get_general_recommendations(
        self, options: RecommendationOptions | None = None
    ) -> list[RecommendationItem]:
        return self.recommendation_engine.featured(options)

    def with_version(self, version: ContentVersion) -> "SearchService":
        """Re-index: a new service over the source content plus a version's changes."""
        if self.content is None:
            raise ValueError("Service was built from a bare corpus; source content is needed to re-index")
        content = apply_version(self.content, version)
        service = SearchService.from_content(content, self.config)
        logger.info(
            f"Re-indexed corpus for {version.version}: {len(self.corpus)} -> {len(service.corpus)} documents"
        )
        return service


def build_default_service(config_path: str | None = None) -> SearchService:
    """Service over the bundled content, honoring any config file found."""
    return SearchService.from_config(load_config(config_path))
