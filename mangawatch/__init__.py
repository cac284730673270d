"""Track manga on web portals, detect new episodes and notify about them."""

__version__ = "0.1.0"