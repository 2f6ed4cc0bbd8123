"""Query, suggestion and facet engines."""

from .engine import QueryEngine, sort_results
from .filters import FilterRegistry, matches_filters
from .suggest import SuggestionEngine

__all__ = ["FilterRegistry", "QueryEngine", "SuggestionEngine", "matches_filters", "sort_results"]
