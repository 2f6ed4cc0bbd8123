"""Tests for content updates, validation and re-indexing."""

import logging
from datetime import datetime, timedelta, timezone

import pytest

from prouve_search.config import load_config
from prouve_search.corpus import SourceContent, build_corpus
from prouve_search.models import SearchQuery
from prouve_search.service import SearchService
from prouve_search.updates import ContentUpdateManager, ContentValidator, apply_version, generate_update_report

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def _scholar(**overrides):
    scholar = {
        "id": "jean-dupont",
        "name": "Jean Dupont",
        "institution": "Université de Lorraine",
        "country": "France",
        "region": "europe",
        "specialization": ["prefabricatedConstruction"],
        "biography": "Historian of the Maxéville factory.",
        "publications": [],
        "exhibitions": [],
    }
    scholar.update(overrides)
    return scholar


def _publication(**overrides):
    pub = {
        "id": "pub-10",
        "title": "Maxéville Notebooks",
        "type": "book",
        "year": 2024,
        "abstract": "Workshop records from Maxéville.",
        "keywords": ["workshop"],
    }
    pub.update(overrides)
    return pub


class _Clock:
    def __init__(self, start=NOW):
        self.now = start

    def __call__(self):
        return self.now


def test_manager_records_and_versions():
    manager = ContentUpdateManager(clock=_Clock())
    first = manager.add_scholar(_scholar(), author="editor")
    second = manager.add_publication("jean-dupont", _publication())
    assert first.id == "scholar-add-1"
    assert second.id == "publication-add-2"
    assert first.author == "editor"
    assert first.description == "Added new scholar: Jean Dupont"
    assert [u.type for u in manager.get_updates_by_type("publication")] == ["publication"]

    version = manager.create_version("Spring additions")
    assert version.version == "v1.0.0"
    assert version.changes == (first, second)
    assert manager.get_updates() == []

    manager.update_scholar("jean-dupont", {"institution": "ENSA Nancy"})
    assert manager.create_version("Fix").version == "v2.0.0"
    assert [v.version for v in manager.get_versions()] == ["v1.0.0", "v2.0.0"]


def test_recorded_data_is_a_copy():
    manager = ContentUpdateManager(clock=_Clock())
    scholar = _scholar()
    update = manager.add_scholar(scholar)
    scholar["name"] = "Changed"
    assert update.data["name"] == "Jean Dupont"


def test_recent_updates_window():
    clock = _Clock(NOW - timedelta(days=40))
    manager = ContentUpdateManager(clock=clock)
    manager.add_scholar(_scholar(id="old"))
    clock.now = NOW
    manager.add_scholar(_scholar(id="new"))
    assert [u.data["id"] for u in manager.get_recent_updates(30)] == ["new"]
    assert len(manager.get_recent_updates(60)) == 2


def test_update_report():
    manager = ContentUpdateManager(clock=_Clock())
    manager.add_scholar(_scholar())
    manager.add_exhibition("jean-dupont", {"title": "Show"})
    report = generate_update_report(manager.get_updates(), now=NOW)
    assert "- Total Updates: 2" in report
    assert "scholar: 1" in report
    assert "exhibition: 1" in report
    assert "- Recent Updates (last 7 days): 2" in report


def test_validate_scholar():
    assert ContentValidator.validate_scholar(_scholar()) == (True, [])
    ok, errors = ContentValidator.validate_scholar(_scholar(name=" ", specialization=[]))
    assert not ok
    assert "Scholar name is required" in errors
    assert "At least one specialization is required" in errors


def test_validate_publication_year_bounds():
    assert ContentValidator.validate_publication(_publication())[0]
    ok, errors = ContentValidator.validate_publication(_publication(year=1850))
    assert not ok
    assert errors == ["Valid publication year is required"]
    assert not ContentValidator.validate_publication(_publication(year=3000))[0]


def test_validate_exhibition():
    ok, errors = ContentValidator.validate_exhibition({"title": "Show", "year": 2020})
    assert not ok
    assert "Venue is required" in errors
    assert "Role is required" in errors


def test_apply_version_leaves_input_untouched():
    base = SourceContent(scholars=(_scholar(),))
    manager = ContentUpdateManager(clock=_Clock())
    manager.add_publication("jean-dupont", _publication())
    manager.update_scholar("jean-dupont", {"institution": "ENSA Nancy"})
    updated = apply_version(base, manager.create_version("v"))

    assert base.scholars[0]["publications"] == []
    assert base.scholars[0]["institution"] == "Université de Lorraine"
    assert updated.scholars[0]["publications"][0]["id"] == "pub-10"
    assert updated.scholars[0]["institution"] == "ENSA Nancy"
    assert build_corpus(updated).get("pub-10").metadata.scholar_name == "Jean Dupont"


def test_apply_version_skips_unknown_scholar(caplog):
    manager = ContentUpdateManager(clock=_Clock())
    manager.add_publication("ghost", _publication())
    manager.add_scholar(_scholar())
    manager.add_scholar(_scholar(name="Duplicate"))
    with caplog.at_level(logging.WARNING):
        updated = apply_version(SourceContent(), manager.create_version("v"))
    assert [s["name"] for s in updated.scholars] == ["Jean Dupont"]
    assert "Unknown scholar 'ghost'" in caplog.text
    assert "already exists" in caplog.text


def test_with_version_reindexes_into_new_service():
    service = SearchService.from_config(load_config())
    manager = ContentUpdateManager()
    manager.add_scholar(_scholar())
    manager.add_publication("jean-dupont", _publication())
    refreshed = service.with_version(manager.create_version("New scholar"))

    query = SearchQuery(term="Maxéville")
    assert service.perform_global_search(query) == []
    assert [r.id for r in refreshed.perform_global_search(query)] == ["pub-10", "jean-dupont"]
    assert len(refreshed.corpus) == len(service.corpus) + 2
    assert refreshed.get_global_search_filters().regions != service.get_global_search_filters().regions


def test_with_version_requires_source_content():
    service = SearchService(build_corpus(SourceContent()))
    with pytest.raises(ValueError):
        service.with_version(ContentUpdateManager().create_version("empty"))
