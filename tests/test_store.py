"""
Tests for the in-memory layout store.
"""

import threading

import pytest

from bulletin_canvas.errors import BulletinLockedError, BulletinNotFoundError
from bulletin_canvas.formats import create_default_canvas_layout, create_empty_layout
from bulletin_canvas.store import BulletinStatus, LayoutStore


@pytest.fixture
def store():
    store = LayoutStore()
    store.register('b1')
    return store


class TestLayoutStore:

    def test_register_defaults_to_draft(self, store):
        assert store.get_status('b1') == BulletinStatus.DRAFT
        assert store.has('b1')
        assert not store.has('b2')

    def test_no_layout_until_saved(self, store):
        assert store.get_layout('b1') is None
        assert not store.uses_canvas_layout('b1')

    def test_save_and_get(self, store):
        layout = create_default_canvas_layout('b1')
        store.save_layout('b1', layout)
        assert store.get_layout('b1') == layout
        assert store.uses_canvas_layout('b1')

    def test_saved_copy_is_isolated(self, store):
        layout = create_empty_layout(1)
        store.save_layout('b1', layout)
        layout.pages.clear()
        assert len(store.get_layout('b1').pages) == 1

    def test_last_write_wins(self, store):
        store.save_layout('b1', create_empty_layout(1))
        store.save_layout('b1', create_empty_layout(3))
        assert len(store.get_layout('b1').pages) == 3

    def test_unknown_bulletin(self, store):
        with pytest.raises(BulletinNotFoundError):
            store.get_status('missing')
        with pytest.raises(BulletinNotFoundError):
            store.save_layout('missing', create_empty_layout())

    def test_locked_rejects_save(self, store):
        store.save_layout('b1', create_empty_layout(2))
        store.lock('b1')
        with pytest.raises(BulletinLockedError):
            store.save_layout('b1', create_empty_layout(4))
        assert len(store.get_layout('b1').pages) == 2

    def test_status_strings(self, store):
        store.set_status('b1', 'approved')
        assert store.get_status('b1') == BulletinStatus.APPROVED
        with pytest.raises(ValueError):
            store.set_status('b1', 'published')

    def test_concurrent_saves(self, store):
        """Concurrent saves leave one complete layout."""
        def save(count):
            store.save_layout('b1', create_empty_layout(count))

        threads = [threading.Thread(target=save, args=(n,)) for n in range(1, 9)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        pages = store.get_layout('b1').pages
        assert [p.page_number for p in pages] == list(range(1, len(pages) + 1))
