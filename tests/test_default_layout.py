"""
Tests for the default canvas layout synthesizer.
"""

import itertools
import uuid

from bulletin_canvas.formats import CanvasLayout, centered_x, create_default_canvas_layout
from bulletin_canvas.geometry import bounding_rect, rects_overlap


def _is_uuid4(value: str) -> bool:
    return uuid.UUID(value).version == 4


class TestDefaultLayout:
    """Geometry and content of the synthesized layout."""

    def test_front_page(self):
        layout = create_default_canvas_layout('issue-1', church_name='Grace Community Church')
        page = layout.get_page(1)
        welcome, service_items, giving = page.blocks

        assert welcome.block_type == 'text'
        assert (welcome.x, welcome.y, welcome.width, welcome.height) == (58, 32, 700, 80)
        assert welcome.z_index == 1
        assert welcome.data == {
            'content': 'Welcome to Grace Community Church',
            'fontSize': 32,
            'fontWeight': 'bold',
            'textAlign': 'center',
            'color': '#1F2937',
        }

        assert service_items.block_type == 'serviceItems'
        assert (service_items.x, service_items.y, service_items.width, service_items.height) == (58, 144, 700, 600)
        assert service_items.data == {'bulletinIssueId': 'issue-1', 'maxItems': 20, 'showCcli': False}

        assert giving.block_type == 'giving'
        assert (giving.x, giving.y, giving.width, giving.height) == (233, 784, 350, 240)
        assert giving.data == {'displayType': 'both', 'givingUrl': 'https://example.com/give'}
        assert giving.z_index == 3

    def test_back_page(self):
        layout = create_default_canvas_layout('issue-1')
        announcements, events, contact = layout.get_page(2).blocks

        assert (announcements.x, announcements.y, announcements.height) == (58, 32, 320)
        assert announcements.data == {'maxItems': 5, 'category': None, 'priorityFilter': None}
        assert (events.x, events.y, events.height) == (58, 384, 320)
        assert events.data == {'maxItems': 5, 'dateRange': 'month'}
        assert contact.block_type == 'contactInfo'
        assert (contact.x, contact.y, contact.width, contact.height) == (233, 736, 350, 288)
        assert all(contact.data.values())

    def test_defaults(self):
        layout = create_default_canvas_layout('issue-1')
        welcome = layout.get_page(1).blocks[0]
        assert welcome.data['content'] == 'Welcome to Our Church'

    def test_custom_giving_url(self):
        layout = create_default_canvas_layout('issue-1', giving_url='https://give.example.org')
        giving = layout.get_page(1).blocks[2]
        assert giving.data['givingUrl'] == 'https://give.example.org'

    def test_four_pages_last_two_empty(self):
        layout = create_default_canvas_layout('issue-1')
        assert [p.page_number for p in layout.pages] == [1, 2, 3, 4]
        assert layout.get_page(3).blocks == []
        assert layout.get_page(4).blocks == []

    def test_blocks_do_not_overlap(self):
        layout = create_default_canvas_layout('issue-1')
        for page in layout.pages:
            rects = [bounding_rect(block.geometry) for block in page.blocks]
            for a, b in itertools.combinations(rects, 2):
                assert not rects_overlap(a, b)

    def test_blocks_fit_page(self):
        layout = create_default_canvas_layout('issue-1')
        for _, block in layout.iter_blocks():
            assert block.x >= 0 and block.y >= 0
            assert block.x + block.width <= 816
            assert block.y + block.height <= 1056
            assert block.rotation == 0

    def test_fresh_ids(self):
        first = create_default_canvas_layout('issue-1')
        second = create_default_canvas_layout('issue-1')
        ids = [page.id for page in first.pages] + [block.id for _, block in first.iter_blocks()]
        assert len(set(ids)) == len(ids)
        assert all(_is_uuid4(value) for value in ids)
        assert first.get_page(1).blocks[0].id != second.get_page(1).blocks[0].id

    def test_deterministic_geometry(self):
        first = create_default_canvas_layout('issue-1')
        second = create_default_canvas_layout('issue-1')
        geometries = [[b.geometry for _, b in layout.iter_blocks()] for layout in (first, second)]
        assert geometries[0] == geometries[1]

    def test_serializes(self):
        layout = create_default_canvas_layout('issue-1')
        assert CanvasLayout.from_api_dict(layout.to_api_dict()) == layout

    def test_centered_x(self):
        assert centered_x(700) == 58
        assert centered_x(350) == 233
        assert centered_x(100, page_width=300) == 100
