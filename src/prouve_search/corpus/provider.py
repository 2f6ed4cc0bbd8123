"""Static content provider: reads the three entity families from YAML."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SourceContent:
    """Raw entity families as supplied by the content provider."""
    works: tuple[dict[str, Any], ...] = ()
    categories: tuple[dict[str, Any], ...] = ()
    scholars: tuple[dict[str, Any], ...] = ()
    biography: dict[str, Any] = field(default_factory=dict)


class StaticContentProvider:
    """Loads works, scholars and biography content from a data directory."""

    FILES = ("works.yaml", "scholars.yaml", "biography.yaml")

    def __init__(self, data_path: str | Path):
        self.data_path = Path(data_path)
        if not self.data_path.is_dir():
            raise FileNotFoundError(f"Content directory not found: {self.data_path}")

    def _read(self, name: str) -> dict[str, Any]:
        path = self.data_path / name
        if not path.exists():
            logger.warning(f"Content file missing, treating as empty: {path}")
            return {}
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Content file must contain a mapping: {path}")
        return data

    def load(self) -> SourceContent:
        works_data = self._read("works.yaml")
        scholars_data = self._read("scholars.yaml")
        biography = self._read("biography.yaml")
        return SourceContent(
            works=tuple(works_data.get("works") or ()),
            categories=tuple(works_data.get("categories") or ()),
            scholars=tuple(scholars_data.get("scholars") or ()),
            biography=biography,
        )
