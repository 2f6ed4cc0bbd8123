"""Autocomplete suggestions from document titles and keywords."""

from typing import Any

from ..corpus import Corpus
from .indexer import normalize


class SuggestionEngine:
    """Completes a partial term from titles and keywords in the corpus."""

    def __init__(self, corpus: Corpus, config: dict[str, Any]):
        self.corpus = corpus
        cfg = config.get("suggestions", {})
        self.max_results = int(cfg.get("max_results", 5))
        self.min_length = int(cfg.get("min_length", 2))

    def suggest(self, partial: str) -> list[str]:
        """Return up to ``max_results`` distinct completions.

        Prefix matches come before inner substring matches; each group is
        ordered lexically. Inputs shorter than ``min_length`` after trimming
        yield an empty list.
        """
        if not isinstance(partial, str):
            return []
        needle = normalize(partial.strip())
        if len(needle) < self.min_length:
            return []

        candidates: dict[str, bool] = {}
        for doc in self.corpus:
            for text in (doc.title, *doc.keywords):
                pos = normalize(text).find(needle)
                if pos < 0:
                    continue
                candidates[text] = candidates.get(text, False) or pos == 0

        ranked = sorted(candidates, key=lambda t: (not candidates[t], t.casefold(), t))
        return ranked[: self.max_results]
