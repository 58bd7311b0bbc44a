"""Test fixtures for bulletin canvas.

Provides:
1. Model fixtures: small layouts and geometries
2. API fixtures: `test_client` / `api_client` (no server needed)
"""

import pytest

from bulletin_canvas.blocks import BlockType, CanvasBlock, CanvasPage
from bulletin_canvas.formats import CanvasLayout
from bulletin_canvas.geometry import BlockGeometry


@pytest.fixture
def square_geometry() -> BlockGeometry:
    """100x100 block at (100, 100), unrotated."""
    return BlockGeometry(x=100, y=100, width=100, height=100)


@pytest.fixture
def text_block() -> CanvasBlock:
    return CanvasBlock(
        id='text-1',
        block_type=BlockType.TEXT,
        x=100,
        y=100,
        width=200,
        height=100,
        z_index=1,
        data={'content': 'Hello'},
    )


@pytest.fixture
def rotated_block() -> CanvasBlock:
    return CanvasBlock(
        id='rotated-1',
        block_type=BlockType.ANNOUNCEMENTS,
        x=200,
        y=300,
        width=300,
        height=200,
        rotation=45,
        z_index=2,
    )


@pytest.fixture
def layout(text_block, rotated_block) -> CanvasLayout:
    """Two-page layout: both blocks on page 1, page 2 empty."""
    return CanvasLayout(pages=[
        CanvasPage(page_number=1, blocks=[text_block, rotated_block]),
        CanvasPage(page_number=2),
    ])


@pytest.fixture
def test_client():
    """TestClient for FastAPI unit testing without a server.

    The shared layout store is cleared before and after each test.
    """
    from starlette.testclient import TestClient

    from bulletin_canvas.app import create_api_app
    from bulletin_canvas.store import layout_store

    layout_store.clear()
    app = create_api_app()
    with TestClient(app) as client:
        yield client
    layout_store.clear()


@pytest.fixture
def api_client(test_client):
    """Alias for test_client."""
    return test_client
