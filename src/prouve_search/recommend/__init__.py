"""Related-content recommendations."""

from .engine import REASON_PRIORITY, RecommendationEngine

__all__ = ["REASON_PRIORITY", "RecommendationEngine"]
