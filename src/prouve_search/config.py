"""Configuration management for the search subsystem."""

import copy
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml


DEFAULT_DATA_PATH = Path(__file__).parent / "data"

DEFAULT_CONFIG = {
    "data_path": str(DEFAULT_DATA_PATH),
    "search": {
        "weights": {"title": 10.0, "keyword": 5.0, "body": 2.0},
        "excerpt_length": 150,
        "excerpt_ellipsis": "...",
    },
    "suggestions": {"max_results": 5, "min_length": 2},
    "recommendations": {
        "max_results": 6,
        "excerpt_length": 120,
        "year_window": 5,
        "weights": {
            "category": 0.4,
            "research_focus": 0.35,
            "region": 0.25,
            "period": 0.2,
            "affinity": 0.5,
            "preference": 0.1,
        },
        "reasons": {
            "category": "same category",
            "research_focus": "overlapping research focus",
            "period": "active in the same period",
            "region": "same region",
            "affinity": "related biography theme",
        },
        # Work category -> scholar specializations that study it
        "category_focus": {
            "residential": ["prefabricatedConstruction", "modernism"],
            "industrial": ["industrialDesign", "prefabricatedConstruction"],
            "educational": ["prefabricatedConstruction", "architecturalHistory"],
            "experimental": ["industrialDesign", "materialStudies"],
            "furniture": ["industrialDesign", "materialStudies"],
        },
        "biography_affinity": {
            "personal": {"types": {"work": 0.3, "scholar": 0.2, "publication": 0.1}},
            "education": {"types": {"work": 0.2, "scholar": 0.3, "publication": 0.1}},
            "career": {
                "types": {"work": 0.6, "scholar": 0.3, "publication": 0.2},
                "specializations": ["architecturalHistory"],
            },
            "philosophy": {
                "types": {"work": 0.5, "scholar": 0.4, "publication": 0.3},
                "categories": ["experimental", "residential"],
                "specializations": ["architecturalHistory"],
            },
            "collaboration": {
                "types": {"work": 0.5, "scholar": 0.3, "publication": 0.2},
                "years": [1945, 1960],
                "specializations": ["architecturalHistory"],
            },
            "legacy": {
                "types": {"work": 0.4, "scholar": 0.5, "publication": 0.4},
                "specializations": ["prefabricatedConstruction", "modernism"],
            },
            "timeline": {"types": {"work": 0.5, "scholar": 0.2, "publication": 0.1}},
        },
    },
    "facets": {
        "default_year_range": [1901, 1984],
        "type_labels": {
            "work": "建筑作品",
            "scholar": "学者研究",
            "biography": "传记内容",
            "publication": "出版物",
        },
        "region_labels": {
            "europe": "欧洲",
            "northAmerica": "北美洲",
            "asia": "亚洲",
            "africa": "非洲",
            "oceania": "大洋洲",
            "southAmerica": "南美洲",
        },
    },
}


@dataclass(frozen=True)
class SearchWeights:
    """Field weights for free-text scoring: title > keyword > body."""
    title: float
    keyword: float
    body: float


@dataclass(frozen=True)
class RecommendationWeights:
    """Attribute weights for related-content scoring."""
    category: float
    research_focus: float
    region: float
    period: float
    affinity: float
    preference: float


def _find_config_file() -> Path | None:
    """Look for config.yaml in standard locations."""
    candidates = [
        Path.cwd() / "config" / "config.yaml",
        Path.cwd() / "config.yaml",
        Path.home() / ".prouve_search" / "config.yaml",
    ]
    for p in candidates:
        if p.exists():
            return p
    return None


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration, merging defaults with file and env vars."""
    cfg = copy.deepcopy(DEFAULT_CONFIG)

    path = Path(config_path) if config_path else _find_config_file()
    if config_path and not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    if path and path.exists():
        with open(path, encoding="utf-8") as f:
            file_cfg = yaml.safe_load(f) or {}
        if not isinstance(file_cfg, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")
        _deep_merge(cfg, file_cfg)

    # Env overrides
    if data_path := os.environ.get("PROUVE_SEARCH_DATA"):
        cfg["data_path"] = data_path

    cfg["data_path"] = str(Path(cfg["data_path"]).expanduser().resolve())
    return cfg


def search_weights(config: dict[str, Any]) -> SearchWeights:
    w = config.get("search", {}).get("weights", {})
    defaults = DEFAULT_CONFIG["search"]["weights"]
    return SearchWeights(
        title=float(w.get("title", defaults["title"])),
        keyword=float(w.get("keyword", defaults["keyword"])),
        body=float(w.get("body", defaults["body"])),
    )


def recommendation_weights(config: dict[str, Any]) -> RecommendationWeights:
    w = config.get("recommendations", {}).get("weights", {})
    defaults = DEFAULT_CONFIG["recommendations"]["weights"]
    return RecommendationWeights(**{k: float(w.get(k, v)) for k, v in defaults.items()})


def _deep_merge(base: dict, override: dict) -> None:
    """Merge override into base in-place."""
    for k, v in override.items():
        if k in base and isinstance(base[k], dict) and isinstance(v, dict):
            _deep_merge(base[k], v)
        else:
            base[k] = v
