"""
Tests for settings.
"""

from bulletin_canvas.config import Settings, settings


def test_defaults():
    assert settings.PAGE_WIDTH == 816
    assert settings.PAGE_HEIGHT == 1056
    assert settings.UNITS_PER_INCH == 96
    assert settings.GRID_SIZE == 16
    assert settings.HISTORY_LIMIT == 10


def test_env_override(monkeypatch):
    monkeypatch.setenv('BULLETIN_CANVAS_GRID_SIZE', '8')
    monkeypatch.setenv('BULLETIN_CANVAS_DEFAULT_CHURCH_NAME', 'St. Mark')
    fresh = Settings()
    assert fresh.GRID_SIZE == 8
    assert fresh.DEFAULT_CHURCH_NAME == 'St. Mark'
