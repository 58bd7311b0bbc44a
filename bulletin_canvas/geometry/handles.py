"""
Resize handles and their anchors.

Each handle sits at a fractional position of the unrotated block:

    nw(0,0) ---- n(.5,0) ---- ne(1,0)
      |                          |
    w(0,.5)                   e(1,.5)
      |                          |
    sw(0,1) ---- s(.5,1) ---- se(1,1)

The anchor of a handle is the point diametrically opposite to it. Dragging
a handle must leave its anchor fixed on screen.
"""

from enum import Enum
from typing import Union

from ..errors import InvalidHandleError


class ResizeHandle(str, Enum):
    """The eight resize handles around a block."""
    NW = "nw"
    N = "n"
    NE = "ne"
    E = "e"
    SE = "se"
    S = "s"
    SW = "sw"
    W = "w"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            key = value.strip().replace('-', '').replace('_', '').lower()
            return _HANDLE_ALIASES.get(key)
        return None

    @classmethod
    def parse(cls, value: Union['ResizeHandle', str]) -> 'ResizeHandle':
        """
        Resolve a handle tag or alias.

        Args:
            value: Handle instance, short tag ("se") or long name ("bottomRight")

        Returns:
            ResizeHandle

        Raises:
            InvalidHandleError: If the value names no handle
        """
        if isinstance(value, ResizeHandle):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidHandleError(
                f"Unknown resize handle {value!r}, expected one of "
                f"{', '.join(h.value for h in cls)}"
            ) from None

    @property
    def fraction(self) -> tuple[float, float]:
        """Block-local fractional position (fx, fy) of the handle."""
        return _HANDLE_FRACTIONS[self]

    @property
    def anchor(self) -> 'ResizeHandle':
        """The handle diametrically opposite this one."""
        fx, fy = self.fraction
        return _FRACTION_HANDLES[(1.0 - fx, 1.0 - fy)]

    @property
    def x_sign(self) -> int:
        """+1 if a positive local dx grows the width, -1 if it shrinks it, 0 if untouched."""
        return _SIGNS[self.fraction[0]]

    @property
    def y_sign(self) -> int:
        """+1 if a positive local dy grows the height, -1 if it shrinks it, 0 if untouched."""
        return _SIGNS[self.fraction[1]]

    @property
    def is_corner(self) -> bool:
        return self.x_sign != 0 and self.y_sign != 0

    @property
    def is_edge(self) -> bool:
        return not self.is_corner


_HANDLE_FRACTIONS: dict[ResizeHandle, tuple[float, float]] = {
    ResizeHandle.NW: (0.0, 0.0),
    ResizeHandle.N: (0.5, 0.0),
    ResizeHandle.NE: (1.0, 0.0),
    ResizeHandle.E: (1.0, 0.5),
    ResizeHandle.SE: (1.0, 1.0),
    ResizeHandle.S: (0.5, 1.0),
    ResizeHandle.SW: (0.0, 1.0),
    ResizeHandle.W: (0.0, 0.5),
}

_FRACTION_HANDLES = {fraction: handle for handle, fraction in _HANDLE_FRACTIONS.items()}

_SIGNS = {0.0: -1, 0.5: 0, 1.0: 1}

_HANDLE_ALIASES = {
    'topleft': ResizeHandle.NW,
    'top': ResizeHandle.N,
    'topright': ResizeHandle.NE,
    'right': ResizeHandle.E,
    'bottomright': ResizeHandle.SE,
    'bottom': ResizeHandle.S,
    'bottomleft': ResizeHandle.SW,
    'left': ResizeHandle.W,
    'nw': ResizeHandle.NW,
    'n': ResizeHandle.N,
    'ne': ResizeHandle.NE,
    'e': ResizeHandle.E,
    'se': ResizeHandle.SE,
    's': ResizeHandle.S,
    'sw': ResizeHandle.SW,
    'w': ResizeHandle.W,
}
