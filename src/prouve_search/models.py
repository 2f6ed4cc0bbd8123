"""Data models used throughout the search subsystem."""

from dataclasses import asdict, dataclass, field
from typing import Any, Literal, Union


DocumentType = Literal["work", "scholar", "biography", "publication"]
SortKey = Literal["relevance", "year", "title", "author"]

DOCUMENT_TYPES: tuple[str, ...] = ("work", "scholar", "biography", "publication")
SORT_KEYS: tuple[str, ...] = ("relevance", "year", "title", "author")


@dataclass(frozen=True)
class WorkMetadata:
    """Attributes of an architectural work."""
    category: str
    category_name: str
    year: int | None = None
    location: str = ""
    status: str = ""
    kind: Literal["work"] = "work"

    @property
    def author(self) -> str | None:
        return None

    def as_dict(self) -> dict[str, Any]:
        return _drop_empty(asdict(self))


@dataclass(frozen=True)
class ScholarMetadata:
    """Attributes of a scholar in the directory."""
    name: str
    institution: str = ""
    country: str = ""
    region: str = ""
    specialization: tuple[str, ...] = ()
    publication_count: int = 0
    kind: Literal["scholar"] = "scholar"

    @property
    def author(self) -> str | None:
        return self.name

    def as_dict(self) -> dict[str, Any]:
        return _drop_empty(asdict(self))


@dataclass(frozen=True)
class PublicationMetadata:
    """Attributes of a scholar's publication."""
    scholar_id: str
    scholar_name: str
    publication_type: str = ""
    published_year: int | None = None
    publisher: str = ""
    region: str = ""
    specialization: tuple[str, ...] = ()
    kind: Literal["publication"] = "publication"

    @property
    def author(self) -> str | None:
        return self.scholar_name

    def as_dict(self) -> dict[str, Any]:
        return _drop_empty(asdict(self))


@dataclass(frozen=True)
class BiographyMetadata:
    """Attributes of one biography section."""
    section: str
    period: str = ""
    location: str = ""
    entry_count: int = 0
    kind: Literal["biography"] = "biography"

    @property
    def author(self) -> str | None:
        return None

    def as_dict(self) -> dict[str, Any]:
        return _drop_empty(asdict(self))


DocumentMetadata = Union[WorkMetadata, ScholarMetadata, PublicationMetadata, BiographyMetadata]


@dataclass(frozen=True)
class SearchableDocument:
    """The unit of indexing: one normalized entity from the corpus."""
    id: str
    type: DocumentType
    title: str
    body: str
    keywords: tuple[str, ...]
    metadata: DocumentMetadata
    source_ref: str

    @property
    def year(self) -> int | None:
        return getattr(self.metadata, "year", None)

    @property
    def category(self) -> str | None:
        return getattr(self.metadata, "category", None) or None

    @property
    def region(self) -> str | None:
        return getattr(self.metadata, "region", None) or None


@dataclass
class SearchFilters:
    """Structured constraints; None or an empty list means unconstrained."""
    type: list[str] | None = None
    category: list[str] | None = None
    region: list[str] | None = None
    year: tuple[int, int] | None = None

    def is_empty(self) -> bool:
        return not (self.type or self.category or self.region or self.year)


@dataclass
class SearchQuery:
    """A free-text query with filters and a sort key."""
    term: str = ""
    filters: SearchFilters = field(default_factory=SearchFilters)
    sort_by: str = "relevance"

    @classmethod
    def from_params(cls, params: dict[str, Any]) -> "SearchQuery":
        """Build a query from loosely typed request parameters.

        Accepts ``q`` or ``term``, comma separated or list values for
        ``type``/``category``/``region``, ``year_min``/``year_max`` and
        ``sort``/``sort_by``. Values that cannot be parsed are dropped.
        """
        term = params.get("q", params.get("term", "")) or ""
        if isinstance(term, list):
            term = term[0] if term else ""

        year = None
        year_min = _parse_int(params.get("year_min"))
        year_max = _parse_int(params.get("year_max"))
        if year_min is not None or year_max is not None:
            year = (
                year_min if year_min is not None else -10**6,
                year_max if year_max is not None else 10**6,
            )

        filters = SearchFilters(
            type=_parse_list(params.get("type")),
            category=_parse_list(params.get("category")),
            region=_parse_list(params.get("region")),
            year=year,
        )
        sort_by = params.get("sort_by", params.get("sort", "relevance")) or "relevance"
        return cls(term=str(term), filters=filters, sort_by=str(sort_by))


@dataclass(frozen=True)
class SearchResult:
    id: str
    type: str
    title: str
    excerpt: str
    relevance_score: float
    metadata: dict[str, Any]


@dataclass(frozen=True)
class RecommendationItem:
    id: str
    type: str
    title: str
    excerpt: str
    relevance_score: float
    reason: str
    metadata: dict[str, Any]


@dataclass
class RecommendationOptions:
    """Options for a recommendation call."""
    max_results: int | None = None
    include_types: list[str] | None = None
    exclude_ids: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FilterFacet:
    id: str
    name: str
    count: int


@dataclass(frozen=True)
class FacetCatalogue:
    """Facet definitions and counts over the whole corpus."""
    types: tuple[FilterFacet, ...]
    categories: tuple[FilterFacet, ...]
    regions: tuple[FilterFacet, ...]
    year_range: tuple[int, int]


def validate_search_query(query: SearchQuery) -> bool:
    """Check that a query is well formed.

    The engines answer malformed queries anyway; this is for callers that
    want to reject bad input early.
    """
    if not isinstance(query.term, str):
        return False
    if not isinstance(query.filters, SearchFilters):
        return False
    if query.sort_by not in SORT_KEYS:
        return False
    if query.filters.year is not None:
        try:
            low, high = query.filters.year
        except (TypeError, ValueError):
            return False
        if not isinstance(low, int) or not isinstance(high, int) or low > high:
            return False
    return True


def _drop_empty(data: dict[str, Any]) -> dict[str, Any]:
    out = {}
    for k, v in data.items():
        if k == "kind" or v is None or v == "" or v == ():
            continue
        out[k] = list(v) if isinstance(v, tuple) else v
    return out


def _parse_int(value: Any) -> int | None:
    if isinstance(value, list):
        value = value[0] if value else None
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _parse_list(value: Any) -> list[str] | None:
    if value is None:
        return None
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = [str(v) for v in value]
    items = [v.strip() for v in items if v and v.strip()]
    return items or None
