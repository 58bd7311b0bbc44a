"""Exception classes for the canvas core."""


class CanvasError(Exception):
    """Base exception for canvas errors."""

    pass


class InvalidHandleError(CanvasError, ValueError):
    """Raised when a resize handle tag is not one of the eight known handles."""

    pass


class BlockNotFoundError(CanvasError, KeyError):
    """Raised when a block id is not present in the layout."""

    pass


class ResizeStateError(CanvasError, RuntimeError):
    """Raised when a resize is started twice or moved while idle."""

    pass


class BulletinNotFoundError(CanvasError, LookupError):
    """Raised when a bulletin is not registered with the layout store."""

    pass


class BulletinLockedError(CanvasError, PermissionError):
    """Raised when saving a layout for a locked bulletin."""

    pass
