# app/map_view.py
"""Map instance held across Streamlit reruns.

folium builds a fresh Leaflet page on every rerun, so the layers and the view
live here and are turned into a folium.Map by `to_folium()`.
"""
import math
from dataclasses import dataclass
from typing import Optional, Tuple

import folium

from app.utils.geo import to_leaflet_bounds

TILE_SIZE = 256


@dataclass
class FitRequest:
    extent: Tuple[float, float, float, float]
    padding: int
    max_zoom: int


@dataclass
class MapViewState:
    """Center is (lon, lat)."""
    center: Tuple[float, float] = (0.0, 0.0)
    zoom: float = 18
    fit: Optional[FitRequest] = None


def zoom_for_extent(extent, width: int, height: int, padding: int, max_zoom: int) -> float:
    """Largest zoom at which the extent fits inside the padded viewport, capped at max_zoom."""
    min_x, min_y, max_x, max_y = extent
    usable_w = max(width - 2 * padding, 1)
    usable_h = max(height - 2 * padding, 1)
    zooms = []
    if max_x > min_x:
        zooms.append(math.log2(usable_w * 360.0 / (TILE_SIZE * (max_x - min_x))))
    if max_y > min_y:
        zooms.append(math.log2(usable_h * 180.0 / (TILE_SIZE * (max_y - min_y))))
    if not zooms:
        return max_zoom
    return min(math.floor(min(zooms)), max_zoom)


class MapCanvas:
    """Ordered layer stack, view state and pointer-move listeners."""

    def __init__(self, width: int = 900, height: int = 500, view: MapViewState = None):
        self.width = width
        self.height = height
        self.view = view or MapViewState()
        self.layers = []
        self._listeners = {}
        self._next_key = 0

    # --- layers ---
    def add_layer(self, layer):
        self.layers.append(layer)

    def insert_layer(self, index: int, layer):
        self.layers.insert(index, layer)

    def remove_layer(self, layer) -> bool:
        for i, existing in enumerate(self.layers):
            if existing is layer:
                del self.layers[i]
                return True
        return False

    # --- view ---
    def fit(self, extent, padding: int, max_zoom: int):
        min_x, min_y, max_x, max_y = extent
        self.view.fit = FitRequest(tuple(extent), padding, max_zoom)
        self.view.center = ((min_x + max_x) / 2, (min_y + max_y) / 2)
        self.view.zoom = zoom_for_extent(extent, self.width, self.height, padding, max_zoom)

    def set_center(self, center):
        self.view.fit = None
        self.view.center = (float(center[0]), float(center[1]))

    def set_zoom(self, zoom):
        self.view.fit = None
        self.view.zoom = zoom

    # --- events ---
    def on(self, event: str, callback):
        """Register a listener; returns a key for `un`."""
        key = self._next_key
        self._next_key += 1
        self._listeners[key] = (event, callback)
        return key

    def un(self, key) -> bool:
        return self._listeners.pop(key, None) is not None

    def listener_count(self, event: str = None) -> int:
        return sum(1 for ev, _ in self._listeners.values() if event is None or ev == event)

    def dispatch(self, event: str, *args):
        for ev, callback in list(self._listeners.values()):
            if ev == event:
                callback(*args)

    # --- rendering ---
    def to_folium(self) -> folium.Map:
        """Build the Leaflet page: layers bottom to top, then the view."""
        lon, lat = self.view.center
        m = folium.Map(
            location=[lat, lon],
            zoom_start=self.view.zoom,
            tiles=None,
            max_zoom=23,
            control_scale=True,
        )
        for layer in self.layers:
            rendered = layer.to_folium()
            if rendered is not None:
                rendered.add_to(m)

        if self.view.fit is not None:
            fit = self.view.fit
            m.fit_bounds(
                to_leaflet_bounds(fit.extent),
                padding=(fit.padding, fit.padding),
                max_zoom=fit.max_zoom,
            )
        return m
