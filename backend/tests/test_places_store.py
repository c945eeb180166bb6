"""
Tests for the JSON file store.
"""
import json
import logging

from domain.models import Place
from storage.places_store import PlacesFileStore


class TestPlacesFileStore:
    """Test loading, saving and ID computation."""

    def test_missing_file_loads_empty(self, tmp_path, caplog):
        store = PlacesFileStore(str(tmp_path / "nope.json"))
        with caplog.at_level(logging.WARNING):
            assert store.load() == []
        assert "Could not read places file" in caplog.text

    def test_malformed_json_loads_empty(self, tmp_path):
        path = tmp_path / "places.json"
        path.write_text("[{\"id\": \"1\",", encoding="utf-8")
        assert PlacesFileStore(str(path)).load() == []

    def test_null_document_loads_empty(self, tmp_path):
        path = tmp_path / "places.json"
        path.write_text("null", encoding="utf-8")
        assert PlacesFileStore(str(path)).load() == []

    def test_non_object_entries_are_skipped(self, tmp_path):
        path = tmp_path / "places.json"
        path.write_text(json.dumps([{"id": "4", "placeName": "Tekturmas"}, 7, "x"]), encoding="utf-8")
        places = PlacesFileStore(str(path)).load()
        assert [p.id for p in places] == ["4"]
        assert places[0].place_name == "Tekturmas"

    def test_null_lists_load_as_empty(self, tmp_path):
        path = tmp_path / "places.json"
        path.write_text(json.dumps([{"id": "1", "photoURLs": None, "comments": None}]), encoding="utf-8")
        place = PlacesFileStore(str(path)).load()[0]
        assert place.photo_urls == []
        assert place.comments == []

    def test_save_writes_pretty_json_with_wire_names(self, tmp_path):
        path = tmp_path / "sub" / "places.json"
        store = PlacesFileStore(str(path))
        place = Place(
            id="1",
            place_name="Aisha Bibi",
            rating=4.5,
            description="Mausoleum",
            photo_urls=["http://example.com/a.jpg"],
            comments=["lovely"],
            longitude=71.2,
            latitude=42.8,
        )

        store.save([place])

        text = path.read_text(encoding="utf-8")
        assert text.startswith("[\n  {\n    \"id\": \"1\"")
        data = json.loads(text)
        assert data == [
            {
                "id": "1",
                "placeName": "Aisha Bibi",
                "rating": 4.5,
                "description": "Mausoleum",
                "photoURLs": ["http://example.com/a.jpg"],
                "comments": ["lovely"],
                "longitude": 71.2,
                "latitude": 42.8,
            }
        ]
        assert store.load() == [place]

    def test_save_failure_is_logged_not_raised(self, tmp_path, caplog):
        # A directory where the file should be makes the write fail
        path = tmp_path / "places.json"
        path.mkdir()
        store = PlacesFileStore(str(path))
        with caplog.at_level(logging.ERROR):
            store.save([Place(id="1")])
        assert "Failed to write places file" in caplog.text

    def test_next_id(self):
        assert PlacesFileStore.next_id([]) == 1
        assert PlacesFileStore.next_id([Place(id="3"), Place(id="10"), Place(id="2")]) == 11

    def test_next_id_ignores_non_numeric(self):
        assert PlacesFileStore.next_id([Place(id="abc"), Place(id="")]) == 1
        assert PlacesFileStore.next_id([Place(id="abc"), Place(id="5")]) == 6

    def test_next_id_counts_only_plain_decimal_ids(self):
        assert PlacesFileStore.next_id([Place(id="1_0"), Place(id=" 7 "), Place(id="٣")]) == 1
        assert PlacesFileStore.next_id([Place(id="+4"), Place(id="-9"), Place(id="2")]) == 5

    def test_non_finite_numbers_load_as_zero(self, tmp_path):
        path = tmp_path / "places.json"
        path.write_text('[{"id": "1", "rating": Infinity, "latitude": NaN, "longitude": 1e400}]', encoding="utf-8")
        place = PlacesFileStore(str(path)).load()[0]
        assert (place.rating, place.latitude, place.longitude) == (0.0, 0.0, 0.0)

    def test_save_never_writes_non_finite_tokens(self, tmp_path, caplog):
        path = tmp_path / "places.json"
        store = PlacesFileStore(str(path))
        store.save([Place(id="1", rating=2.0)])

        with caplog.at_level(logging.ERROR):
            store.save([Place(id="1", rating=float("inf"))])

        assert "Failed to write places file" in caplog.text
        assert json.loads(path.read_text(encoding="utf-8"))[0]["rating"] == 2.0
