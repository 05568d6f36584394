# app/errors.py
"""Error taxonomy for overlay loading.

All of these are handled inside the overlay / lifecycle layer and turned into
a safe visible state; none should reach the Streamlit script.
"""


class OverlayError(Exception):
    """Base class for anything that keeps an overlay from being shown."""

    def __init__(self, message: str, url: str = None):
        super().__init__(message)
        self.url = url


class ResourceFetchError(OverlayError):
    """Network / HTTP failure (non-2xx status, unreachable host, missing file)."""


class ParseError(OverlayError):
    """Malformed feature collection or grid data."""


class ExtentUnusable(OverlayError):
    """Data is valid but its extent is empty or outside lon/lat range."""


class ListenerStateError(OverlayError):
    """The raster source reported its own error state."""
