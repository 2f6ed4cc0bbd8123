"""The immutable corpus snapshot shared by every engine."""

import logging
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping

from ..models import SearchableDocument
from .loader import load_documents
from .provider import SourceContent, StaticContentProvider

logger = logging.getLogger(__name__)


class Corpus:
    """Read-only collection of searchable documents with id lookups.

    Built once and passed by reference into the engines. Documents are
    frozen dataclasses and the collection exposes no mutators.
    """

    __slots__ = ("_documents", "_by_id", "_by_ref")

    def __init__(self, documents: Iterable[SearchableDocument]):
        kept: list[SearchableDocument] = []
        by_id: dict[str, SearchableDocument] = {}
        by_ref: dict[tuple[str, str], SearchableDocument] = {}

        for doc in documents:
            if doc.id in by_id:
                logger.warning(f"Duplicate document id {doc.id!r} ({doc.type}); keeping the first")
                continue
            kept.append(doc)
            by_id[doc.id] = doc
            by_ref.setdefault((doc.type, doc.source_ref), doc)

        self._documents = tuple(kept)
        self._by_id: Mapping[str, SearchableDocument] = MappingProxyType(by_id)
        self._by_ref: Mapping[tuple[str, str], SearchableDocument] = MappingProxyType(by_ref)

    @property
    def documents(self) -> tuple[SearchableDocument, ...]:
        return self._documents

    def __iter__(self) -> Iterator[SearchableDocument]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def get(self, doc_id: str) -> SearchableDocument | None:
        return self._by_id.get(doc_id)

    def resolve(self, doc_type: str, source_ref: str) -> SearchableDocument | None:
        """Find the document for a source entity by type and back-reference."""
        return self._by_ref.get((doc_type, source_ref))

    def of_type(self, doc_type: str) -> list[SearchableDocument]:
        return [d for d in self._documents if d.type == doc_type]


def build_corpus(source: SourceContent | StaticContentProvider) -> Corpus:
    """Load and normalize source content into a corpus snapshot."""
    content = source.load() if isinstance(source, StaticContentProvider) else source
    corpus = Corpus(load_documents(content))
    logger.debug(f"Built corpus with {len(corpus)} documents")
    return corpus
