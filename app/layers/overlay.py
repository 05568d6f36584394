# app/layers/overlay.py
"""Common shape of the raster and vector overlays."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from app.errors import ExtentUnusable, OverlayError
from app.utils.geo import fittable


class OverlayState(Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class OutcomeKind(Enum):
    READY = "ready"        # loaded, extent usable for fitting
    UNUSABLE = "unusable"  # loaded, but extent empty / not lon-lat
    ERROR = "error"        # nothing to show


@dataclass
class Outcome:
    kind: OutcomeKind
    extent: Optional[Tuple[float, float, float, float]] = None
    error: Optional[OverlayError] = None

    @classmethod
    def from_extent(cls, extent):
        if fittable(extent):
            return cls(OutcomeKind.READY, tuple(extent))
        return cls(OutcomeKind.UNUSABLE, tuple(extent) if extent is not None else None)

    @classmethod
    def failed(cls, error: OverlayError):
        return cls(OutcomeKind.ERROR, error=error)


class OverlaySource:
    """
    Base for overlays that load asynchronously.

    Subclasses implement `_load()` (raise OverlayError on failure, return the
    extent on success) and `to_folium()`. `load()` drives the state machine
    and never raises for resource problems.
    """

    kind = "overlay"

    def __init__(self, url: str, name: str = None):
        self.url = url
        self.name = name or url
        self.state = OverlayState.LOADING
        self.outcome: Optional[Outcome] = None
        self.discarded = False
        self._listener = None

    def on_change(self, callback):
        """Register the single state-change listener (replaces any previous one)."""
        self._listener = callback

    def _set_state(self, state: OverlayState):
        self.state = state
        if self._listener is not None and not self.discarded:
            self._listener(self)

    async def load(self) -> Outcome:
        try:
            extent = await self._load()
        except OverlayError as e:
            print(f"Error loading {self.kind} overlay {self.url}: {e}")
            self.outcome = Outcome.failed(e)
            self._set_state(OverlayState.ERROR)
            return self.outcome

        self.outcome = Outcome.from_extent(extent)
        if self.outcome.kind is OutcomeKind.UNUSABLE:
            self.outcome.error = ExtentUnusable(f"extent unusable for EPSG:4326: {extent}", url=self.url)
            print(f"{self.kind.capitalize()} {self.outcome.error}")
        self._set_state(OverlayState.READY)
        return self.outcome

    async def _load(self):
        raise NotImplementedError

    @property
    def extent(self):
        return self.outcome.extent if self.outcome is not None else None

    def discard(self):
        """Drop the listener; later state changes are not reported."""
        self.discarded = True
        self._listener = None

    def to_folium(self):
        raise NotImplementedError

    def __repr__(self):
        return f"{type(self).__name__}({self.url!r}, state={self.state.value})"
