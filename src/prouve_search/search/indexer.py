"""Per-document searchable fields, hit counting and excerpts."""

import re
from dataclasses import dataclass

from ..config import SearchWeights
from ..models import SearchableDocument


@dataclass(frozen=True)
class IndexedFields:
    """Lower-cased views of a document's weighted text fields."""
    title: str
    body: str
    keywords: tuple[str, ...]


@dataclass(frozen=True)
class FieldHits:
    title: int
    body: int
    keywords: int

    @property
    def total(self) -> int:
        return self.title + self.body + self.keywords

    def score(self, weights: SearchWeights) -> float:
        return weights.title * self.title + weights.body * self.body + weights.keyword * self.keywords


def normalize(text: str) -> str:
    return text.lower()


def index_document(doc: SearchableDocument) -> IndexedFields:
    """Derive the fields used by query and suggestion scoring.

    Cheap enough to recompute per call; no persistent index is kept.
    """
    return IndexedFields(
        title=normalize(doc.title),
        body=normalize(doc.body),
        keywords=tuple(normalize(k) for k in doc.keywords),
    )


def count_hits(text: str, term: str) -> int:
    """Count non-overlapping occurrences of an already normalized term."""
    if not term:
        return 0
    return text.count(term)


def field_hits(fields: IndexedFields, term: str) -> FieldHits:
    return FieldHits(
        title=count_hits(fields.title, term),
        body=count_hits(fields.body, term),
        keywords=sum(count_hits(k, term) for k in fields.keywords),
    )


def make_excerpt(body: str, term: str = "", length: int = 150, ellipsis: str = "...") -> str:
    """Cut a window of ``length`` characters from the body.

    The window is centered on the first case-insensitive match of ``term``
    when there is one, otherwise it is the leading part of the body.
    Ellipses mark the cut ends.
    """
    if length <= 0:
        return ""
    if len(body) <= length:
        return body

    # Offsets come from the original text; lower() can change its length
    match = re.search(re.escape(term), body, re.IGNORECASE) if term else None
    if match is None:
        start = 0
    else:
        center = (match.start() + match.end()) // 2
        start = max(0, min(center - length // 2, len(body) - length))
    end = start + length

    excerpt = body[start:end].strip()
    if start > 0:
        excerpt = ellipsis + excerpt
    if end < len(body):
        excerpt = excerpt + ellipsis
    return excerpt
