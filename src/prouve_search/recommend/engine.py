"""Related-content recommendations with a short reason per item."""

import logging
import re
from typing import Any

from ..config import recommendation_weights
from ..corpus import Corpus
from ..models import DOCUMENT_TYPES, RecommendationItem, RecommendationOptions, SearchableDocument
from ..search.indexer import make_excerpt

logger = logging.getLogger(__name__)

# Reason chosen on equal contributions, highest priority first
REASON_PRIORITY = ("category", "research_focus", "period", "region", "affinity")

FEATURED_SECTIONS = ("personal", "philosophy", "collaboration")
FEATURED = {
    "work": (0.9, "featured work"),
    "scholar": (0.8, "notable scholar"),
    "biography": (0.7, "biography highlight"),
}


class RecommendationEngine:
    """Scores every other document in the corpus against a source item."""

    def __init__(self, corpus: Corpus, config: dict[str, Any]):
        self.corpus = corpus
        self.weights = recommendation_weights(config)
        cfg = config.get("recommendations", {})
        self.max_results = int(cfg.get("max_results", 6))
        self.year_window = int(cfg.get("year_window", 5))
        self.excerpt_length = int(cfg.get("excerpt_length", 120))
        self.reasons: dict[str, str] = cfg.get("reasons", {})
        self.category_focus = {
            k: frozenset(s.lower() for s in v) for k, v in cfg.get("category_focus", {}).items()
        }
        self.affinity: dict[str, dict[str, Any]] = cfg.get("biography_affinity", {})

    def recommend(
        self,
        source_type: str,
        source_id: str,
        options: RecommendationOptions | None = None,
    ) -> list[RecommendationItem]:
        """Rank documents related to the item identified by type and id.

        Returns an empty list when the source cannot be resolved. The source
        itself and any excluded id never appear in the output.
        """
        options = options or RecommendationOptions()
        source = self.corpus.resolve(source_type, source_id)
        if source is None:
            logger.debug(f"No {source_type} {source_id!r} in corpus, nothing to recommend")
            return []

        include = set(options.include_types or DOCUMENT_TYPES)
        exclude = set(options.exclude_ids or ())
        limit = self.max_results if options.max_results is None else options.max_results

        ranked = []
        for cand in self.corpus:
            if cand.id == source.id or cand.type not in include or cand.id in exclude:
                continue
            contributions = self.score_pair(source, cand)
            score = round(sum(contributions.values()), 6)
            if score <= 0:
                continue
            ranked.append(self._to_item(cand, score, self._reason(contributions)))

        ranked.sort(key=lambda r: (-r.relevance_score, r.id))
        return ranked[: max(limit, 0)]

    def score_pair(self, source: SearchableDocument, cand: SearchableDocument) -> dict[str, float]:
        """Weighted contribution of each matched factor, keyed by factor name."""
        if source.type == "biography" or cand.type == "biography":
            if source.type == cand.type:
                return {}
            section_doc, other = (source, cand) if source.type == "biography" else (cand, source)
            return self._affinity_score(section_doc.metadata.section, other)

        w = self.weights
        contributions: dict[str, float] = {}
        both_works = source.type == cand.type == "work"

        if both_works and source.category and source.category == cand.category:
            contributions["category"] = w.category

        if not both_works:
            src_focus = self._focus(source)
            overlap = src_focus & self._focus(cand)
            if src_focus and overlap:
                contributions["research_focus"] = w.research_focus * len(overlap) / len(src_focus)

        if self._region_tokens(source) & self._region_tokens(cand):
            contributions["region"] = w.region

        if source.year is not None and cand.year is not None:
            dy = abs(source.year - cand.year)
            if dy <= self.year_window:
                contributions["period"] = w.period * (1 - dy / (self.year_window + 1))

        return contributions

    def _affinity_score(self, section: str, other: SearchableDocument) -> dict[str, float]:
        """Curated section preferences instead of attribute overlap."""
        prefs = self.affinity.get(section) or {}
        type_pref = float((prefs.get("types") or {}).get(other.type, 0))
        if type_pref <= 0:
            return {}

        w = self.weights
        contributions = {"affinity": w.affinity * type_pref}

        if other.category and other.category in (prefs.get("categories") or ()):
            contributions["category"] = w.preference

        preferred = {s.lower() for s in prefs.get("specializations") or ()}
        overlap = preferred & self._focus(other)
        if preferred and overlap:
            contributions["research_focus"] = w.preference * len(overlap) / len(preferred)

        years = prefs.get("years")
        if years and other.year is not None and years[0] <= other.year <= years[1]:
            contributions["period"] = w.preference

        return contributions

    def _focus(self, doc: SearchableDocument) -> frozenset[str]:
        if doc.type == "work":
            return self.category_focus.get(doc.category or "", frozenset())
        specialization = getattr(doc.metadata, "specialization", ())
        focus = {s.lower() for s in specialization}
        if doc.type == "publication":
            focus.update(k.lower() for k in doc.keywords)
        return frozenset(focus)

    @staticmethod
    def _region_tokens(doc: SearchableDocument) -> set[str]:
        meta = doc.metadata
        values = [getattr(meta, "region", ""), getattr(meta, "country", "")]
        values.extend(re.split(r"[,，、]", getattr(meta, "location", "") or ""))
        return {v.strip().lower() for v in values if v and v.strip()}

    def _reason(self, contributions: dict[str, float]) -> str:
        factor = max(
            contributions,
            key=lambda f: (round(contributions[f], 6), -REASON_PRIORITY.index(f)),
        )
        return self.reasons.get(factor, factor)

    def _to_item(self, doc: SearchableDocument, score: float, reason: str) -> RecommendationItem:
        return RecommendationItem(
            id=doc.id,
            type=doc.type,
            title=doc.title,
            excerpt=make_excerpt(doc.body or doc.title, length=self.excerpt_length),
            relevance_score=score,
            reason=reason,
            metadata=doc.metadata.as_dict(),
        )

    def featured(self, options: RecommendationOptions | None = None) -> list[RecommendationItem]:
        """General recommendations for pages without a source item.

        Newest works, the scholars with the most publications and the
        overview biography sections, three of each at most.
        """
        options = options or RecommendationOptions(max_results=9)
        include = set(options.include_types or DOCUMENT_TYPES)
        exclude = set(options.exclude_ids or ())
        limit = 9 if options.max_results is None else options.max_results

        def pool(doc_type: str) -> list[SearchableDocument]:
            if doc_type not in include:
                return []
            return [d for d in self.corpus.of_type(doc_type) if d.id not in exclude]

        works = sorted(pool("work"), key=lambda d: (d.year is None, -(d.year or 0), d.id))[:3]
        scholars = sorted(
            pool("scholar"), key=lambda d: (-d.metadata.publication_count, d.id)
        )[:3]
        sections = {d.metadata.section: d for d in pool("biography")}
        biography = [sections[s] for s in FEATURED_SECTIONS if s in sections]

        items = []
        for group in (works, scholars):
            for doc in group:
                score, reason = FEATURED[doc.type]
                items.append(self._to_item(doc, score, reason))
        base, reason = FEATURED["biography"]
        for rank, doc in enumerate(biography):
            items.append(self._to_item(doc, round(base - 0.1 * rank, 6), reason))

        items.sort(key=lambda r: (-r.relevance_score, r.id))
        return items[: max(limit, 0)]
