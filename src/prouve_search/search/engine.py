"""Free-text query engine: filter, score, excerpt and sort."""

import logging
from typing import Any, Callable

from ..config import search_weights
from ..corpus import Corpus
from ..models import SORT_KEYS, SearchableDocument, SearchQuery, SearchResult
from .filters import matches_filters
from .indexer import field_hits, index_document, make_excerpt, normalize

logger = logging.getLogger(__name__)


class QueryEngine:
    """Answers ``SearchQuery`` objects against one corpus snapshot."""

    def __init__(self, corpus: Corpus, config: dict[str, Any]):
        self.corpus = corpus
        self.weights = search_weights(config)
        search_cfg = config.get("search", {})
        self.excerpt_length = int(search_cfg.get("excerpt_length", 150))
        self.ellipsis = str(search_cfg.get("excerpt_ellipsis", "..."))

    def search(self, query: SearchQuery) -> list[SearchResult]:
        """Return the complete, sorted set of documents matching the query.

        An empty or whitespace-only term yields no results. Filters are
        applied before scoring and a document with no hits is dropped.
        """
        raw_term = query.term if isinstance(query.term, str) else ""
        term = normalize(raw_term.strip())
        if not term:
            logger.debug("Empty search term, returning no results")
            return []

        scored: list[tuple[SearchableDocument, float]] = []
        for doc in self.corpus:
            if not matches_filters(doc, query.filters):
                continue
            hits = field_hits(index_document(doc), term)
            if hits.total == 0:
                continue
            scored.append((doc, hits.score(self.weights)))

        results = [self._to_result(doc, score, raw_term.strip()) for doc, score in scored]
        return sort_results(results, query.sort_by, {d.id: d for d, _ in scored})

    def _to_result(self, doc: SearchableDocument, score: float, term: str) -> SearchResult:
        return SearchResult(
            id=doc.id,
            type=doc.type,
            title=doc.title,
            excerpt=make_excerpt(doc.body or doc.title, term, self.excerpt_length, self.ellipsis),
            relevance_score=score,
            metadata=doc.metadata.as_dict(),
        )


def _lexical(value: str) -> tuple[str, str]:
    return (value.casefold(), value)


def _relevance_key(result: SearchResult, doc: SearchableDocument) -> tuple:
    return (-result.relevance_score, result.id)


def _year_key(result: SearchResult, doc: SearchableDocument) -> tuple:
    year = doc.year
    # Documents without a year sort last
    return (year is None, -(year or 0), result.id)


def _title_key(result: SearchResult, doc: SearchableDocument) -> tuple:
    return (_lexical(result.title), result.id)


def _author_key(result: SearchResult, doc: SearchableDocument) -> tuple:
    return (_lexical(doc.metadata.author or doc.title), result.id)


SORTERS: dict[str, Callable[[SearchResult, SearchableDocument], tuple]] = {
    "relevance": _relevance_key,
    "year": _year_key,
    "title": _title_key,
    "author": _author_key,
}


def sort_results(
    results: list[SearchResult],
    sort_by: str,
    docs: dict[str, SearchableDocument],
) -> list[SearchResult]:
    """Sort by the requested key, breaking ties by ascending id."""
    if sort_by not in SORT_KEYS:
        logger.debug(f"Unknown sort key {sort_by!r}, falling back to relevance")
        sort_by = "relevance"
    key = SORTERS[sort_by]
    return sorted(results, key=lambda r: key(r, docs[r.id]))
