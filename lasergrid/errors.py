class InvalidPlacement(ValueError):
    """Raised when a ring is placed where ``can_place_ring`` is false."""


class InvalidUpgrade(ValueError):
    """Raised when an upgrade has no qualifying run or an illegal target."""


class InvalidPosition(IndexError):
    """Raised when a non-empty cell is written outside the board."""


class CodecError(ValueError):
    """Raised when a board or game snapshot cannot be decoded."""
