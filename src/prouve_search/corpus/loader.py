"""Normalize works, scholars and biography sections into searchable documents."""

import logging
import re
from typing import Any, Callable, Iterable, Iterator

from ..models import (
    BiographyMetadata,
    PublicationMetadata,
    ScholarMetadata,
    SearchableDocument,
    WorkMetadata,
)
from .provider import SourceContent

logger = logging.getLogger(__name__)

# Section key -> (source key in biography content, display title)
BIOGRAPHY_SECTIONS: dict[str, tuple[str, str]] = {
    "personal": ("personal_info", "个人信息"),
    "education": ("education", "教育背景"),
    "career": ("career", "职业生涯"),
    "philosophy": ("philosophy", "设计哲学"),
    "collaboration": ("collaborations", "合作项目"),
    "legacy": ("legacy", "遗产与影响"),
    "timeline": ("timeline", "生平年表"),
}


class MalformedRecord(ValueError):
    """A source record that cannot be turned into a document."""


# Raised by a mapper when an optional field has the wrong shape
RECORD_ERRORS = (MalformedRecord, TypeError, AttributeError, ValueError)


def load_documents(content: SourceContent) -> list[SearchableDocument]:
    """Map every source entity to a document, skipping malformed records.

    Args:
        content: Raw entity families from the content provider.

    Returns:
        Documents in source order: works, scholars with their publications,
        then biography sections.
    """
    categories = {
        c["id"]: c for c in content.categories if isinstance(c, dict) and c.get("id")
    }
    docs: list[SearchableDocument] = []

    docs.extend(_map_all("work", content.works, lambda w: [work_to_document(w, categories)]))
    docs.extend(_map_all("scholar", content.scholars, scholar_to_documents))
    docs.extend(biography_to_documents(content.biography))
    return docs


def _map_all(
    family: str,
    records: Iterable[Any],
    mapper: Callable[[dict[str, Any]], list[SearchableDocument]],
) -> Iterator[SearchableDocument]:
    for record in records:
        try:
            if not isinstance(record, dict):
                raise MalformedRecord(f"expected a mapping, got {type(record).__name__}")
            docs = mapper(record)
        except RECORD_ERRORS as e:
            logger.warning(f"Skipping malformed {family} record {_describe(record)}: {e}")
            continue
        yield from docs


def work_to_document(work: dict[str, Any], categories: dict[str, dict]) -> SearchableDocument:
    work_id = _required(work, "id")
    title = _required(work, "title")

    category = work.get("category")
    if isinstance(category, dict):
        category_id = str(category.get("id", ""))
        category_name = str(category.get("name", category_id))
    else:
        category_id = str(category or "")
        category_name = str(categories.get(category_id, {}).get("name", category_id))

    commentary = work.get("commentary") or {}
    body = _body(work.get("description"), commentary.get("content"))
    location = str(work.get("location") or "")
    status = str(work.get("status") or "")

    return SearchableDocument(
        id=work_id,
        type="work",
        title=title,
        body=body,
        keywords=_keywords([category_name, location, *(work.get("tags") or [])]),
        metadata=WorkMetadata(
            category=category_id,
            category_name=category_name,
            year=_year(work.get("year")),
            location=location,
            status=status,
        ),
        source_ref=work_id,
    )


def scholar_to_documents(scholar: dict[str, Any]) -> list[SearchableDocument]:
    """One document for the scholar plus one per well-formed publication."""
    scholar_id = _required(scholar, "id")
    name = scholar.get("name") or scholar.get("title")
    if not name or not str(name).strip():
        raise MalformedRecord("missing required field 'name'")
    name = str(name).strip()

    specialization = tuple(str(s) for s in scholar.get("specialization") or ())
    publications = [p for p in scholar.get("publications") or () if isinstance(p, dict)]
    institution = str(scholar.get("institution") or "")
    country = str(scholar.get("country") or "")
    region = str(scholar.get("region") or "")

    docs = [
        SearchableDocument(
            id=scholar_id,
            type="scholar",
            title=name,
            body=_body(scholar.get("biography"), institution),
            keywords=_keywords([institution, country, *specialization]),
            metadata=ScholarMetadata(
                name=name,
                institution=institution,
                country=country,
                region=region,
                specialization=specialization,
                publication_count=len(publications),
            ),
            source_ref=scholar_id,
        )
    ]

    for pub in publications:
        try:
            docs.append(_publication_to_document(pub, scholar_id, name, region, specialization))
        except RECORD_ERRORS as e:
            logger.warning(f"Skipping malformed publication {_describe(pub)} of {scholar_id}: {e}")
    return docs


def _publication_to_document(
    pub: dict[str, Any],
    scholar_id: str,
    scholar_name: str,
    region: str,
    specialization: tuple[str, ...],
) -> SearchableDocument:
    pub_id = _required(pub, "id")
    title = _required(pub, "title")
    return SearchableDocument(
        id=pub_id,
        type="publication",
        title=title,
        body=_body(pub.get("abstract")),
        keywords=_keywords(pub.get("keywords") or []),
        metadata=PublicationMetadata(
            scholar_id=scholar_id,
            scholar_name=scholar_name,
            publication_type=str(pub.get("type") or ""),
            published_year=_year(pub.get("year")),
            publisher=str(pub.get("publisher") or ""),
            region=region,
            specialization=specialization,
        ),
        source_ref=pub_id,
    )


def biography_to_documents(biography: dict[str, Any]) -> list[SearchableDocument]:
    """One document per non-empty biography section."""
    docs = []
    if not isinstance(biography, dict):
        logger.warning("Skipping malformed biography content: expected a mapping")
        return docs

    for section, (source_key, title) in BIOGRAPHY_SECTIONS.items():
        raw = biography.get(source_key)
        if not raw:
            continue
        try:
            doc = _section_to_document(section, title, raw)
        except RECORD_ERRORS as e:
            logger.warning(f"Skipping malformed biography section {section!r}: {e}")
            continue
        if doc is not None:
            docs.append(doc)
    return docs


def _section_to_document(section: str, title: str, raw: Any) -> SearchableDocument | None:
    if isinstance(raw, dict):
        entries = [raw]
    elif isinstance(raw, list):
        entries = [e for e in raw if isinstance(e, dict)]
    else:
        raise MalformedRecord(f"expected a mapping or a list, got {type(raw).__name__}")
    if not entries:
        return None

    texts, keywords = _SECTION_EXTRACTORS[section](entries)
    return SearchableDocument(
        id=f"biography-{section}",
        type="biography",
        title=title,
        body=_body(*texts),
        keywords=_keywords(keywords),
        metadata=BiographyMetadata(
            section=section,
            period=_period(entries),
            location=_first(entries, "location", "birth_place"),
            entry_count=len(entries),
        ),
        source_ref=section,
    )


def _personal(entries):
    info = entries[0]
    text = (
        f"{info.get('full_name', '')}，{info.get('birth_date', '')}出生于{info.get('birth_place', '')}，"
        f"{info.get('death_date', '')}逝世。"
    )
    family = [
        f"{m.get('name', '')}（{m.get('relationship', '')}）{m.get('description', '')}"
        for m in info.get("family") or () if isinstance(m, dict)
    ]
    keywords = [info.get("full_name"), info.get("birth_place"), info.get("nationality")]
    return [text, *family], keywords


def _education(entries):
    texts = [f"{e.get('institution', '')} {e.get('degree', '')}：{e.get('description', '')}" for e in entries]
    return texts, [e.get("institution") for e in entries] + [e.get("degree") for e in entries]


def _career(entries):
    texts = [
        f"{e.get('position', '')}，{e.get('organization', '')}（{e.get('period', '')}）："
        + "；".join(e.get("achievements") or ())
        for e in entries
    ]
    return texts, [e.get("position") for e in entries] + [e.get("organization") for e in entries]


def _philosophy(entries):
    texts = [f"{e.get('theme', '')}：{e.get('content', '')}" for e in entries]
    return texts, [e.get("theme") for e in entries]


def _collaboration(entries):
    texts = [
        f"与{e.get('collaborator', '')}合作{e.get('project', '')}：{e.get('description', '')}{e.get('outcome', '')}"
        for e in entries
    ]
    return texts, [e.get("collaborator") for e in entries] + [e.get("project") for e in entries]


def _legacy(entries):
    texts = [f"{e.get('title', '')}：{e.get('description', '')}" for e in entries]
    return texts, [e.get("title") for e in entries]


def _timeline(entries):
    texts = [f"{e.get('year', '')} {e.get('title', '')}：{e.get('description', '')}" for e in entries]
    return texts, [e.get("title") for e in entries]


_SECTION_EXTRACTORS = {
    "personal": _personal,
    "education": _education,
    "career": _career,
    "philosophy": _philosophy,
    "collaboration": _collaboration,
    "legacy": _legacy,
    "timeline": _timeline,
}


def _required(record: dict[str, Any], key: str) -> str:
    value = record.get(key)
    if value is None or not str(value).strip():
        raise MalformedRecord(f"missing required field '{key}'")
    return str(value).strip()


def _body(*texts: Any) -> str:
    """Join the descriptive texts.

    Empty when there are none: the title is scored on its own, so the
    excerpt falls back to it instead of the body repeating it.
    """
    parts = [str(t).strip() for t in texts if t and str(t).strip()]
    return " ".join(parts)


def _keywords(values: Iterable[Any]) -> tuple[str, ...]:
    seen: dict[str, None] = {}
    for v in values:
        if v is None:
            continue
        v = str(v).strip()
        if v:
            seen.setdefault(v, None)
    return tuple(seen)


def _year(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _period(entries: list[dict[str, Any]]) -> str:
    years = []
    for e in entries:
        for key in ("year", "period"):
            years.extend(int(y) for y in re.findall(r"\d{4}", str(e.get(key, ""))))
    if not years:
        return ""
    low, high = min(years), max(years)
    return str(low) if low == high else f"{low}-{high}"


def _first(entries: list[dict[str, Any]], *keys: str) -> str:
    for e in entries:
        for key in keys:
            if e.get(key):
                return str(e[key])
    return ""


def _describe(record: Any) -> str:
    if isinstance(record, dict):
        return repr(record.get("id") or record.get("title") or record.get("name") or "<no id>")
    return repr(record)[:40]
