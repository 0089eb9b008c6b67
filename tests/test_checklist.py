"""
Tests for wingit/checklist.py

Run with: pytest tests/test_checklist.py
"""

from pathlib import Path

import pytest

from wingit.checklist import build_seen_set, load_personal_checklist, personal_checklist_view
from wingit.errors import DataLoadError
from wingit.models import PersonalChecklist, PersonalSighting, SpeciesSummary

TESTDATA = Path(__file__).parent / "testdata"


@pytest.fixture
def example_checklist() -> PersonalChecklist:
    return load_personal_checklist(TESTDATA / "personal_checklist_example.json")


class TestLoadPersonalChecklist:
    def test_decodes_fixture(self, example_checklist):
        assert example_checklist.meta.owner == "kpb"
        assert example_checklist.meta.total_species == 3
        assert len(example_checklist.species_index) == 3
        assert len(example_checklist.sightings) == 2

    def test_camel_case_fields_mapped(self, example_checklist):
        first = example_checklist.species_index[0]
        assert first.species_code == "clanut"
        assert first.sci_name == "Nucifraga columbiana"
        assert first.total_checklists == 3
        assert first.locations == ["Aspen Vista", "Santa Fe Ski Basin"]

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(DataLoadError, match="read personal checklist"):
            load_personal_checklist(tmp_path / "nope.json")

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(DataLoadError, match="decode personal checklist"):
            load_personal_checklist(path)

    def test_wrong_shape_raises(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(DataLoadError):
            load_personal_checklist(path)

    def test_null_fields_decode_as_defaults(self, tmp_path):
        path = tmp_path / "sparse.json"
        path.write_text(
            '{"meta": null, "speciesIndex": null,'
            ' "sightings": [{"speciesCode": "lewo", "locName": null, "count": null, "media": null},'
            '               {"speciesCode": null}]}'
        )
        checklist = load_personal_checklist(path)

        assert checklist.species_index == []
        assert checklist.meta.owner == ""
        assert checklist.sightings[0].loc_name == ""
        assert checklist.sightings[0].count == 0
        assert checklist.sightings[0].media is False
        assert checklist.sightings[1].species_code == ""
        assert build_seen_set(checklist) == {"lewo"}

    def test_null_summary_fields_decode_as_defaults(self, tmp_path):
        path = tmp_path / "sparse_index.json"
        path.write_text('{"speciesIndex": [{"speciesCode": "clanut", "locations": null, "lastSeen": null}]}')
        checklist = load_personal_checklist(path)

        assert checklist.species_index[0].locations == []
        assert checklist.species_index[0].last_seen == ""

    def test_empty_object_is_valid(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("{}")
        checklist = load_personal_checklist(path)
        assert checklist.sightings == []
        assert checklist.species_index == []


class TestBuildSeenSet:
    def test_species_index_is_authoritative(self, example_checklist):
        # mouchi is only in the index; the raw sightings are ignored
        assert build_seen_set(example_checklist) == {"clanut", "stejay", "mouchi"}

    def test_falls_back_to_sightings(self):
        checklist = PersonalChecklist(sightings=[
            PersonalSighting(species_code="lewo"),
            PersonalSighting(species_code="lewo"),
            PersonalSighting(species_code="pinsis"),
        ])
        assert build_seen_set(checklist) == {"lewo", "pinsis"}

    def test_sightings_ignored_when_index_present(self):
        checklist = PersonalChecklist(
            species_index=[SpeciesSummary(species_code="clanut")],
            sightings=[PersonalSighting(species_code="lewo")],
        )
        assert build_seen_set(checklist) == {"clanut"}

    def test_blank_codes_skipped(self):
        checklist = PersonalChecklist(species_index=[
            SpeciesSummary(species_code=""),
            SpeciesSummary(species_code="clanut"),
        ])
        assert build_seen_set(checklist) == {"clanut"}

    def test_blank_only_index_yields_empty_set(self):
        checklist = PersonalChecklist(
            species_index=[SpeciesSummary(species_code="")],
            sightings=[PersonalSighting(species_code="lewo")],
        )
        assert build_seen_set(checklist) == set()

    def test_empty_checklist(self):
        assert build_seen_set(PersonalChecklist()) == set()


class TestPersonalChecklistView:
    def test_payload_shape(self, example_checklist):
        view = personal_checklist_view(example_checklist)

        assert view["countSightings"] == 2
        assert view["meta"]["generatedAt"] == "2025-10-05T18:00:00Z"
        assert [s["speciesCode"] for s in view["speciesIndex"]] == ["clanut", "stejay", "mouchi"]
        assert "sightings" not in view
