"""Corpus construction: static content, normalization and the snapshot registry."""

from .loader import load_documents
from .provider import SourceContent, StaticContentProvider
from .registry import Corpus, build_corpus

__all__ = ["Corpus", "SourceContent", "StaticContentProvider", "build_corpus", "load_documents"]
