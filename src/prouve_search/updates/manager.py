"""Content updates for the scholar directory, grouped into versions."""

import copy
import itertools
import logging
from collections import Counter
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Literal

from ..corpus.provider import SourceContent

logger = logging.getLogger(__name__)

UpdateType = Literal["scholar", "publication", "exhibition"]
UpdateAction = Literal["add", "update", "delete"]


@dataclass(frozen=True)
class ContentUpdate:
    id: str
    type: UpdateType
    action: UpdateAction
    timestamp: datetime
    data: dict[str, Any]
    author: str | None = None
    description: str = ""


@dataclass(frozen=True)
class ContentVersion:
    version: str
    timestamp: datetime
    changes: tuple[ContentUpdate, ...]
    description: str


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ContentUpdateManager:
    """Collects pending updates and seals them into numbered versions.

    The search snapshot does not observe this manager; a sealed version has
    to be handed to ``SearchService.with_version`` explicitly.
    """

    def __init__(self, clock=_now):
        self._clock = clock
        self._seq = itertools.count(1)
        self._updates: list[ContentUpdate] = []
        self._versions: list[ContentVersion] = []

    def _record(self, type_: UpdateType, action: UpdateAction, data: dict, author, description) -> ContentUpdate:
        update = ContentUpdate(
            id=f"{type_}-{action}-{next(self._seq)}",
            type=type_,
            action=action,
            timestamp=self._clock(),
            data=copy.deepcopy(data),
            author=author,
            description=description,
        )
        self._updates.append(update)
        logger.debug(f"Recorded content update {update.id}: {description}")
        return update

    def add_scholar(self, scholar: dict[str, Any], author: str | None = None) -> ContentUpdate:
        return self._record("scholar", "add", scholar, author, f"Added new scholar: {scholar.get('name')}")

    def update_scholar(self, scholar_id: str, changes: dict[str, Any], author: str | None = None) -> ContentUpdate:
        return self._record(
            "scholar", "update", {"id": scholar_id, **changes}, author, f"Updated scholar: {scholar_id}"
        )

    def add_publication(self, scholar_id: str, publication: dict[str, Any], author: str | None = None) -> ContentUpdate:
        return self._record(
            "publication",
            "add",
            {"scholar_id": scholar_id, "publication": publication},
            author,
            f"Added publication: {publication.get('title')}",
        )

    def add_exhibition(self, scholar_id: str, exhibition: dict[str, Any], author: str | None = None) -> ContentUpdate:
        return self._record(
            "exhibition",
            "add",
            {"scholar_id": scholar_id, "exhibition": exhibition},
            author,
            f"Added exhibition: {exhibition.get('title')}",
        )

    def create_version(self, description: str) -> ContentVersion:
        """Seal all pending updates into a new version and clear the queue."""
        version = ContentVersion(
            version=f"v{len(self._versions) + 1}.0.0",
            timestamp=self._clock(),
            changes=tuple(self._updates),
            description=description,
        )
        self._versions.append(version)
        self._updates = []
        return version

    def get_updates(self) -> list[ContentUpdate]:
        return list(self._updates)

    def get_versions(self) -> list[ContentVersion]:
        return list(self._versions)

    def get_updates_by_type(self, type_: str) -> list[ContentUpdate]:
        return [u for u in self._updates if u.type == type_]

    def get_recent_updates(self, days: int = 30) -> list[ContentUpdate]:
        cutoff = self._clock() - timedelta(days=days)
        return [u for u in self._updates if u.timestamp >= cutoff]


class ContentValidator:
    """Field checks for records submitted through the update manager."""

    MIN_YEAR = 1900

    @staticmethod
    def _blank(record: dict[str, Any], key: str) -> bool:
        value = record.get(key)
        return not isinstance(value, str) or not value.strip()

    @classmethod
    def _year_ok(cls, value: Any, today: datetime | None = None) -> bool:
        max_year = (today or _now()).year + 1
        return isinstance(value, int) and cls.MIN_YEAR <= value <= max_year

    @classmethod
    def validate_scholar(cls, scholar: dict[str, Any]) -> tuple[bool, list[str]]:
        errors = []
        for key, label in (
            ("name", "Scholar name"),
            ("institution", "Institution"),
            ("country", "Country"),
            ("region", "Region"),
            ("biography", "Biography"),
        ):
            if cls._blank(scholar, key):
                errors.append(f"{label} is required")
        if not scholar.get("specialization"):
            errors.append("At least one specialization is required")
        return not errors, errors

    @classmethod
    def validate_publication(cls, publication: dict[str, Any]) -> tuple[bool, list[str]]:
        errors = []
        if cls._blank(publication, "title"):
            errors.append("Publication title is required")
        if not publication.get("type"):
            errors.append("Publication type is required")
        if not cls._year_ok(publication.get("year")):
            errors.append("Valid publication year is required")
        if cls._blank(publication, "abstract"):
            errors.append("Abstract is required")
        if not publication.get("keywords"):
            errors.append("At least one keyword is required")
        return not errors, errors

    @classmethod
    def validate_exhibition(cls, exhibition: dict[str, Any]) -> tuple[bool, list[str]]:
        errors = []
        if cls._blank(exhibition, "title"):
            errors.append("Exhibition title is required")
        if cls._blank(exhibition, "venue"):
            errors.append("Venue is required")
        if not cls._year_ok(exhibition.get("year")):
            errors.append("Valid exhibition year is required")
        if cls._blank(exhibition, "description"):
            errors.append("Description is required")
        if cls._blank(exhibition, "role"):
            errors.append("Role is required")
        return not errors, errors


def generate_update_report(updates: list[ContentUpdate], now: datetime | None = None) -> str:
    """Plain-text summary of a batch of updates."""
    now = now or _now()
    by_type = Counter(u.type for u in updates)
    by_action = Counter(u.action for u in updates)
    recent = sum(1 for u in updates if u.timestamp >= now - timedelta(days=7))
    return "\n".join([
        "Content Update Report:",
        f"- Total Updates: {len(updates)}",
        f"- By Type: {', '.join(f'{k}: {v}' for k, v in by_type.items())}",
        f"- By Action: {', '.join(f'{k}: {v}' for k, v in by_action.items())}",
        f"- Recent Updates (last 7 days): {recent}",
    ])


def apply_version(content: SourceContent, version: ContentVersion) -> SourceContent:
    """Return new source content with a version's changes applied.

    The input content is left untouched. Changes that reference an unknown
    scholar are skipped with a warning.
    """
    scholars = [copy.deepcopy(s) for s in content.scholars]
    by_id = {s.get("id"): s for s in scholars if isinstance(s, dict)}

    for change in version.changes:
        data = change.data
        if change.type == "scholar" and change.action == "add":
            if data.get("id") in by_id:
                logger.warning(f"Scholar {data.get('id')!r} already exists, skipping {change.id}")
                continue
            scholar = copy.deepcopy(data)
            scholars.append(scholar)
            by_id[scholar.get("id")] = scholar
            continue

        scholar_id = data.get("id") if change.type == "scholar" else data.get("scholar_id")
        target = by_id.get(scholar_id)
        if target is None:
            logger.warning(f"Unknown scholar {scholar_id!r} in {change.id}, skipping")
            continue

        if change.type == "scholar" and change.action == "update":
            target.update({k: copy.deepcopy(v) for k, v in data.items() if k != "id"})
        elif change.type == "scholar" and change.action == "delete":
            scholars = [s for s in scholars if s is not target]
            del by_id[scholar_id]
        elif change.type == "publication" and change.action == "add":
            target.setdefault("publications", []).append(copy.deepcopy(data["publication"]))
        elif change.type == "exhibition" and change.action == "add":
            target.setdefault("exhibitions", []).append(copy.deepcopy(data["exhibition"]))
        else:
            logger.warning(f"Unsupported change {change.type}/{change.action} in {change.id}, skipping")

    return replace(content, scholars=tuple(scholars))
