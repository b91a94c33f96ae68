"""Tests for the JSON-file local storage."""

import json

from schemas import SavedStory
from storage import SAVED_STORIES_KEY, LocalStorage, load_saved_stories, write_saved_stories


def test_missing_file_means_no_stories(storage):
    assert load_saved_stories(storage) == []


def test_write_then_load_keeps_order(storage):
    stories = [
        SavedStory(id=2, title="Second", content="b", date="05/01/2024, 02:30:15 PM"),
        SavedStory(id=1, title="First", content="a", date="05/01/2024, 02:30:16 PM"),
    ]

    write_saved_stories(storage, stories)

    assert load_saved_stories(LocalStorage(storage.path)) == stories


def test_stored_as_json_list_under_fixed_key(storage):
    write_saved_stories(storage, [SavedStory(id=7, title="T", content="C", date="d")])

    data = json.loads(storage.path.read_text(encoding="utf-8"))
    assert json.loads(data[SAVED_STORIES_KEY]) == [
        {"id": 7, "title": "T", "content": "C", "date": "d"}
    ]


def test_other_keys_preserved(storage):
    storage.set_item("theme", "dark")

    write_saved_stories(storage, [])

    assert storage.get_item("theme") == "dark"
    assert storage.get_item(SAVED_STORIES_KEY) == "[]"


def test_corrupt_file_treated_as_empty(storage, caplog):
    storage.path.write_text("{not json", encoding="utf-8")

    assert load_saved_stories(storage) == []
    assert "Failed to load stories" in caplog.text


def test_malformed_entries_treated_as_empty(storage):
    storage.set_item(SAVED_STORIES_KEY, json.dumps([{"id": "abc"}]))

    assert load_saved_stories(storage) == []


def test_save_after_corrupt_file_recovers(storage, caplog):
    storage.path.write_text("{not json", encoding="utf-8")
    assert load_saved_stories(storage) == []
    story = SavedStory(id=1, title="T", content="C", date="d")

    write_saved_stories(storage, [story])

    assert load_saved_stories(storage) == [story]
    assert "Discarding unreadable local storage" in caplog.text


def test_save_over_non_object_file(storage):
    storage.path.write_text("[1, 2, 3]", encoding="utf-8")

    write_saved_stories(storage, [])

    assert storage.get_item(SAVED_STORIES_KEY) == "[]"
