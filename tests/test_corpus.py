"""Tests for the content provider, loader and corpus registry."""

import logging
import tempfile
from pathlib import Path

import pytest

from prouve_search.config import DEFAULT_DATA_PATH
from prouve_search.corpus import SourceContent, StaticContentProvider, build_corpus, load_documents
from prouve_search.models import BiographyMetadata, PublicationMetadata, ScholarMetadata, WorkMetadata


def _content(**overrides):
    data = dict(
        categories=({"id": "residential", "name": "住宅建筑"},),
        works=(
            {
                "id": "w1",
                "title": "Maison A",
                "year": 1950,
                "location": "南锡，法国",
                "category": "residential",
                "description": "A steel house.",
                "tags": ["steel", "steel", "house"],
            },
        ),
        scholars=(
            {
                "id": "s1",
                "name": "Ada Scholar",
                "institution": "Some University",
                "country": "France",
                "region": "europe",
                "specialization": ["modernism"],
                "biography": "Writes about houses.",
                "publications": [
                    {"id": "p1", "title": "On Houses", "year": 2001, "abstract": "Houses.", "keywords": ["house"]},
                ],
            },
        ),
        biography={"philosophy": [{"theme": "Honesty", "content": "Materials speak.", "year": 1950}]},
    )
    data.update(overrides)
    return SourceContent(**data)


def _bundled():
    return build_corpus(StaticContentProvider(DEFAULT_DATA_PATH))


def test_load_maps_all_families():
    docs = load_documents(_content())
    assert [(d.id, d.type) for d in docs] == [
        ("w1", "work"),
        ("s1", "scholar"),
        ("p1", "publication"),
        ("biography-philosophy", "biography"),
    ]


def test_metadata_is_tagged_by_type():
    docs = {d.id: d for d in load_documents(_content())}
    assert isinstance(docs["w1"].metadata, WorkMetadata)
    assert isinstance(docs["s1"].metadata, ScholarMetadata)
    assert isinstance(docs["p1"].metadata, PublicationMetadata)
    assert isinstance(docs["biography-philosophy"].metadata, BiographyMetadata)
    for doc in docs.values():
        assert doc.metadata.kind == doc.type


def test_work_document_fields():
    work = load_documents(_content())[0]
    assert work.title == "Maison A"
    assert work.body == "A steel house."
    assert work.keywords == ("住宅建筑", "南锡，法国", "steel", "house")
    assert work.metadata.category == "residential"
    assert work.metadata.category_name == "住宅建筑"
    assert work.year == 1950
    assert work.source_ref == "w1"


def test_only_works_carry_year():
    docs = {d.id: d for d in load_documents(_content())}
    assert docs["w1"].year == 1950
    assert docs["p1"].year is None
    assert docs["p1"].metadata.published_year == 2001
    assert docs["biography-philosophy"].year is None
    assert docs["biography-philosophy"].metadata.period == "1950"


def test_publication_carries_author():
    pub = {d.id: d for d in load_documents(_content())}["p1"]
    assert pub.metadata.scholar_id == "s1"
    assert pub.metadata.author == "Ada Scholar"
    assert pub.region == "europe"
    assert pub.metadata.specialization == ("modernism",)


def test_missing_description_leaves_body_empty():
    content = _content(works=({"id": "w2", "title": "Bare Work", "category": "residential"},))
    work = load_documents(content)[0]
    assert work.body == ""
    assert work.title == "Bare Work"


def test_malformed_records_are_skipped(caplog):
    content = _content(
        works=(
            {"id": "ok", "title": "Fine"},
            {"id": "no-title"},
            {"title": "No Id"},
            "not a mapping",
        ),
        scholars=(
            {"name": "Nameless id"},
            {
                "id": "s2",
                "name": "Bea",
                "publications": [{"title": "No id publication"}, {"id": "p2", "title": "Good"}],
            },
        ),
    )
    with caplog.at_level(logging.WARNING):
        docs = load_documents(content)
    ids = [d.id for d in docs]
    assert ids == ["ok", "s2", "p2", "biography-philosophy"]
    assert "Skipping malformed work" in caplog.text


def test_badly_shaped_optional_fields_skip_only_that_record(caplog):
    content = _content(
        works=(
            {"id": "bad-commentary", "title": "Bad", "commentary": "just a string"},
            {"id": "bad-tags", "title": "Bad", "tags": 5},
            {"id": "ok", "title": "Fine", "commentary": {"content": "Notes."}},
        ),
        scholars=(
            {"id": "s3", "name": "Cy", "specialization": 7},
            {"id": "s4", "name": "Di", "publications": [{"id": "p4", "title": "T", "keywords": 3}]},
        ),
        biography={
            "career": 5,
            "philosophy": [{"theme": "Honesty", "content": "Materials speak."}],
            "legacy": [{"title": "Lasting", "description": "Still built."}],
        },
    )
    with caplog.at_level(logging.WARNING):
        docs = load_documents(content)
    assert [d.id for d in docs] == ["ok", "s4", "biography-philosophy", "biography-legacy"]
    assert "bad-commentary" in caplog.text
    assert "biography section 'career'" in caplog.text


def test_biography_sections_become_documents():
    corpus = _bundled()
    sections = [d.source_ref for d in corpus.of_type("biography")]
    assert sections == ["personal", "education", "career", "philosophy", "collaboration", "legacy", "timeline"]
    personal = corpus.get("biography-personal")
    assert "1901年4月8日" in personal.body
    assert personal.metadata.location == "法国巴黎"
    assert corpus.get("biography-timeline").metadata.period == "1901-1984"


def test_empty_biography_section_is_omitted():
    content = _content(biography={"career": [], "philosophy": [{"theme": "T", "content": "C"}]})
    ids = [d.id for d in load_documents(content) if d.type == "biography"]
    assert ids == ["biography-philosophy"]


def test_corpus_keeps_first_duplicate():
    content = _content(works=({"id": "dup", "title": "First"}, {"id": "dup", "title": "Second"}))
    corpus = build_corpus(content)
    assert corpus.get("dup").title == "First"
    assert len([d for d in corpus if d.id == "dup"]) == 1


def test_resolve_by_type_and_source_ref():
    corpus = _bundled()
    assert corpus.resolve("work", "maison-tropicale").id == "maison-tropicale"
    assert corpus.resolve("biography", "career").id == "biography-career"
    assert corpus.resolve("scholar", "maison-tropicale") is None
    assert corpus.resolve("work", "nope") is None


def test_bundled_corpus_ids_are_unique():
    corpus = _bundled()
    ids = [d.id for d in corpus]
    assert len(ids) == len(set(ids))
    assert len(corpus.of_type("work")) == 3
    assert len(corpus.of_type("scholar")) == 6
    assert len(corpus.of_type("publication")) == 9


def test_corpus_is_read_only():
    corpus = _bundled()
    assert isinstance(corpus.documents, tuple)
    with pytest.raises(AttributeError):
        corpus.get("maison-tropicale").title = "changed"


def test_provider_reads_yaml_directory():
    with tempfile.TemporaryDirectory() as tmpdir:
        Path(tmpdir, "works.yaml").write_text(
            "works:\n  - id: w9\n    title: Nine\n    year: 1960\n", encoding="utf-8"
        )
        content = StaticContentProvider(tmpdir).load()
        assert content.works[0]["id"] == "w9"
        assert content.scholars == ()
        assert content.biography == {}


def test_provider_rejects_missing_directory():
    with pytest.raises(FileNotFoundError):
        StaticContentProvider("/nonexistent/content/dir")
