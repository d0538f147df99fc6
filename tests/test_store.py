from datetime import datetime, timezone

import pytest

from beacon.core.exceptions import CannotDeleteLastPage
from beacon.domains.pages.entities import (
    DEFAULT_ICON, NEW_PAGE_TITLE, UNTITLED_TITLE, DocumentCollection, Page, Theme
)
from beacon.domains.pages.services import DocumentStore


def test_default_store_has_single_welcome_page(store):
    assert len(store.pages) == 1
    assert store.active_page.id == "welcome"
    assert store.collection.current_page_id == "welcome"


def test_create_page_becomes_active(store):
    page = store.create_page("Notes", "📝")
    assert len(store.pages) == 2
    assert store.active_page.id == page.id
    assert store.collection.current_page_id == page.id
    assert page.title == "Notes"
    assert page.icon == "📝"


def test_create_page_defaults(store):
    page = store.create_page("   ", "")
    assert page.title == NEW_PAGE_TITLE
    assert page.icon == DEFAULT_ICON


def test_created_ids_are_unique_and_increasing(store):
    ids = [store.create_page(f"Page {i}").id for i in range(20)]
    assert len(set(ids)) == 20
    assert [int(i) for i in ids] == sorted(int(i) for i in ids)


def test_create_page_requests_persistence(store):
    calls = []
    store.on_change = lambda: calls.append("save")
    store.create_page("Notes")
    assert calls == ["save"]


def test_select_page_out_of_range_is_noop(notes_store):
    before = notes_store.snapshot()
    assert notes_store.select_page(5) is False
    assert notes_store.select_page(-1) is False
    assert notes_store.snapshot() == before


def test_select_page_captures_editor_content(notes_store):
    notes_store.editor.push(content="<div>Meeting moved</div>")
    assert notes_store.select_page(0) is True
    assert notes_store.collection.find_page("b").content == "<div>Meeting moved</div>"
    assert notes_store.active_page.id == "a"
    assert notes_store.editor.read().content == "<div>Milk and eggs</div>"


def test_select_page_by_id(notes_store):
    assert notes_store.select_page_by_id("c") is True
    assert notes_store.active_page.title == "Ideas"
    assert notes_store.select_page_by_id("missing") is False
    assert notes_store.active_page.title == "Ideas"


def test_capture_without_changes_keeps_updated_at(notes_store):
    page = notes_store.active_page
    updated_at = page.updated_at
    assert notes_store.capture_active_page() is False
    notes_store.select_page(0)
    assert page.updated_at == updated_at


def test_capture_with_changes_bumps_updated_at(notes_store):
    page = notes_store.active_page
    updated_at = datetime(2020, 1, 1, tzinfo=timezone.utc)
    page.updated_at = updated_at
    notes_store.editor.push(title="Renamed")
    assert notes_store.capture_active_page() is True
    assert page.title == "Renamed"
    assert page.updated_at > updated_at


def test_capture_blank_title_uses_placeholder(notes_store):
    notes_store.editor.push(title="  ")
    notes_store.capture_active_page()
    assert notes_store.active_page.title == UNTITLED_TITLE


def test_update_active_page_title(notes_store):
    notes_store.editor.push(content="<div>draft</div>")
    page = notes_store.update_active_page_title("Minutes")
    assert page.title == "Minutes"
    assert page.content == "<div>draft</div>"
    assert notes_store.editor.read().title == "Minutes"

    notes_store.update_active_page_title("")
    assert notes_store.active_page.title == UNTITLED_TITLE


def test_delete_last_page_is_refused(store):
    before = store.snapshot()
    with pytest.raises(CannotDeleteLastPage):
        store.delete_active_page()
    assert store.snapshot() == before


def test_delete_selects_same_index(notes_store):
    removed = notes_store.delete_active_page()
    assert removed.id == "b"
    assert [page.id for page in notes_store.pages] == ["a", "c"]
    assert notes_store.collection.current_page_id == "c"


def test_delete_last_index_selects_previous(notes_store):
    notes_store.select_page(2)
    notes_store.delete_active_page()
    assert notes_store.collection.current_page_id == "b"
    assert notes_store.editor.read().title == "Notes"


def test_delete_until_one_page_left(notes_store):
    notes_store.delete_active_page()
    notes_store.delete_active_page()
    assert len(notes_store.pages) == 1
    assert notes_store.collection.find_page(notes_store.collection.current_page_id) is not None
    with pytest.raises(CannotDeleteLastPage):
        notes_store.delete_active_page()


def test_duplicate_active_page(notes_store):
    copy = notes_store.duplicate_active_page()
    assert copy.title == "Notes (Copy)"
    assert copy.content == "<div>Meeting with Bob</div>"
    assert copy.icon == "📝"
    assert copy.id != "b"
    assert notes_store.collection.current_page_id == copy.id
    assert notes_store.pages[-1] is copy


def test_duplicate_uses_captured_content(notes_store):
    notes_store.editor.push(content="<div>Fresh</div>")
    copy = notes_store.duplicate_active_page()
    assert copy.content == "<div>Fresh</div>"


def test_search_empty_query_returns_all_in_order(notes_store):
    assert [page.id for page in notes_store.search_pages("")] == ["a", "b", "c"]
    assert [page.id for page in notes_store.search_pages("   ")] == ["a", "b", "c"]


def test_search_is_case_insensitive_over_title_and_content(notes_store):
    assert [page.id for page in notes_store.search_pages("NOTES")] == ["b"]
    assert [page.id for page in notes_store.search_pages("bob")] == ["b"]
    assert [page.id for page in notes_store.search_pages("<div>")] == ["a", "b"]
    assert notes_store.search_pages("nothing here") == []


def test_toggle_and_set_theme(store):
    calls = []
    store.on_change = lambda: calls.append("save")

    assert store.toggle_theme() is Theme.DARK
    assert store.toggle_theme() is Theme.LIGHT
    assert store.set_theme("dark") is Theme.DARK
    assert store.set_theme(Theme.LIGHT) is Theme.LIGHT
    assert calls == ["save", "save"]


def test_compute_stats_strips_markup():
    collection = DocumentCollection(pages=[
        Page(id="1", content="<p>Hello world</p>"),
        Page(id="2", content="  <div>one <b>two</b>   three</div>  "),
        Page(id="3", content=""),
    ], current_page_id="1")
    stats = DocumentStore(collection=collection).compute_stats()
    assert stats.page_count == 3
    assert stats.total_words == 5
    assert stats.total_characters == len("Hello world") + len("one two   three")


def test_format_text_passes_command_to_editor(notes_store):
    notes_store.format_text("bold")
    assert notes_store.editor.drain_commands() == ["bold"]
    with pytest.raises(ValueError):
        notes_store.format_text("strikethrough")


def test_insert_block_appends_markup(notes_store):
    notes_store.insert_block("todo")
    notes_store.insert_block("heading", level=2)
    content = notes_store.active_page.content
    assert content.startswith("<div>Meeting with Bob</div>")
    assert "todo-item" in content
    assert "heading-2" in content

    with pytest.raises(ValueError):
        notes_store.insert_block("heading", level=7)
    with pytest.raises(ValueError):
        notes_store.insert_block("table")


def test_replace_collection_repairs_current_page(store, notes_collection):
    notes_collection.current_page_id = "missing"
    store.replace_collection(notes_collection)
    assert store.collection.current_page_id == "a"
    assert store.editor.read().title == "Groceries"


def test_replace_collection_select_first(store, notes_collection):
    store.replace_collection(notes_collection, select_first=True)
    assert store.collection.current_page_id == "a"


def test_replace_collection_rejects_empty(store):
    with pytest.raises(ValueError):
        store.replace_collection(DocumentCollection(pages=[]))
    assert len(store.pages) == 1
