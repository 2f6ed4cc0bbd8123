"""Facet matching for queries and the static facet catalogue."""

from collections import Counter
from typing import Any

from ..corpus import Corpus
from ..models import DOCUMENT_TYPES, FacetCatalogue, FilterFacet, SearchableDocument, SearchFilters


def matches_filters(doc: SearchableDocument, filters: SearchFilters | None) -> bool:
    """AND across active facets, OR within a facet's value list.

    A document lacking the attribute a facet inspects does not satisfy it.
    An inverted year range, or one whose bounds cannot be read as
    integers, matches nothing.
    """
    if filters is None:
        return True
    if filters.type and doc.type not in filters.type:
        return False
    if filters.category and doc.category not in filters.category:
        return False
    if filters.region and doc.region not in filters.region:
        return False
    if filters.year:
        year = doc.year
        if year is None:
            return False
        try:
            low, high = (int(bound) for bound in filters.year)
        except (TypeError, ValueError):
            return False
        if not (low <= year <= high):
            return False
    return True


class FilterRegistry:
    """Computes facet definitions and counts over the entire corpus.

    Counts are a static catalogue view: they ignore whatever filters the
    current query has applied. A region counts every document carrying it,
    publications included, so it matches what selecting that region admits.
    """

    def __init__(self, corpus: Corpus, config: dict[str, Any]):
        self.corpus = corpus
        facet_cfg = config.get("facets", {})
        self.type_labels: dict[str, str] = facet_cfg.get("type_labels", {})
        self.region_labels: dict[str, str] = facet_cfg.get("region_labels", {})
        self.default_year_range = tuple(facet_cfg.get("default_year_range", (1901, 1984)))
        self._facets: FacetCatalogue | None = None

    def get_facets(self) -> FacetCatalogue:
        if self._facets is None:
            self._facets = self._compute()
        return self._facets

    def _compute(self) -> FacetCatalogue:
        type_counts = Counter(d.type for d in self.corpus)
        types = tuple(
            FilterFacet(id=t, name=self.type_labels.get(t, t), count=type_counts.get(t, 0))
            for t in DOCUMENT_TYPES
        )

        category_counts: Counter[str] = Counter()
        category_names: dict[str, str] = {}
        region_counts: Counter[str] = Counter()
        years = []
        for doc in self.corpus:
            if doc.type == "work" and doc.category:
                category_counts[doc.category] += 1
                category_names.setdefault(doc.category, doc.metadata.category_name or doc.category)
            if doc.region:
                region_counts[doc.region] += 1
            if doc.year is not None:
                years.append(doc.year)

        categories = tuple(
            FilterFacet(id=c, name=category_names[c], count=n)
            for c, n in sorted(category_counts.items())
        )
        regions = tuple(
            FilterFacet(id=r, name=self.region_labels.get(r, r), count=n)
            for r, n in sorted(region_counts.items())
        )
        year_range = (min(years), max(years)) if years else self.default_year_range

        return FacetCatalogue(types=types, categories=categories, regions=regions, year_range=year_range)
