"""
Geometry value types shared by blocks, the resize calculator and diagnostics.

BlockGeometry is the pure positional part of a block:
{
    "x": 58,
    "y": 32,
    "width": 700,
    "height": 80,
    "rotation": 0
}

Coordinates are page-local with y pointing down. Rotation is in degrees,
clockwise about the block center, normalized into [0, 360).
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


def normalize_rotation(value: float) -> float:
    """Wrap an angle in degrees into [0, 360)."""
    result = float(value) % 360.0
    # Tiny negative inputs round up to exactly 360.0
    if result >= 360.0:
        result = 0.0
    return result


class BlockGeometry(BaseModel):
    """Position, size and rotation of a block."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    x: float = Field(default=0.0)
    y: float = Field(default=0.0)
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    rotation: float = Field(default=0.0)

    @field_validator('rotation')
    @classmethod
    def _normalize_rotation(cls, value: float) -> float:
        return normalize_rotation(value)

    @property
    def center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)

    @property
    def is_rotated(self) -> bool:
        return self.rotation != 0.0


class Rect(BaseModel):
    """Axis-aligned rectangle (left, top, width, height)."""

    model_config = ConfigDict(frozen=True)

    left: float = 0.0
    top: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def point_at(self, fx: float, fy: float) -> tuple[float, float]:
        """Point at fractional position (fx, fy) inside the rect."""
        return (self.left + fx * self.width, self.top + fy * self.height)
