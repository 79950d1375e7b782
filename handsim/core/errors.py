"""Exception types raised by the draw engine and its validators."""


class HandSimError(Exception):
    """Base class for hand simulator failures."""


class InvalidDrawConfigError(HandSimError, ValueError):
    """Raised when draw parameters are inconsistent with the deck."""


class DeckExhaustedError(HandSimError):
    """Raised when the deck runs out before the opening hand is complete."""
