"""In-process search and recommendation over the Jean Prouvé content corpus."""

from .service import SearchService, build_default_service

__all__ = ["SearchService", "build_default_service"]
