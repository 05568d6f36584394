# app/lifecycle.py
"""Owns what is on the map: one base layer, one raster, one stress map."""
import asyncio

from app.components.hover_probe import HoverProbe
from app.config import NONE_SELECTION
from app.layers.base_layer import build_base_layers
from app.layers.overlay import OutcomeKind, OverlayState
from app.layers.raster_layer import RasterOverlay
from app.layers.vector_layer import VectorOverlay
from app.viewport import ViewportController

SLOTS = ("base", "raster", "vector")


class LayerLifecycleManager:
    """
    Singleton layer slots plus the rules for swapping them.

    Every swap detaches and discards the previous occupant before anything
    new is attached. Async loads are tagged with a per-slot token; a result
    whose token is no longer the latest is dropped, so the map always shows
    the most recently selected resource even if an older load finishes last.

    Args:
        canvas: app.map_view.MapCanvas
        cfg: viewer config (see app.config.load_viewer_config)
        fetcher: object with `async fetch_json(url)`
        raster_reader: callable(url, source_crs) -> RasterGrid, for RasterOverlay
    """

    def __init__(self, canvas, cfg: dict, fetcher, raster_reader=None):
        self.canvas = canvas
        self.cfg = cfg
        self.fetcher = fetcher
        self.raster_reader = raster_reader
        self.viewport = ViewportController.from_config(canvas, cfg)
        self.base_layers = build_base_layers(cfg["base_maps"])
        self.slots = {name: None for name in SLOTS}
        self._tokens = {name: 0 for name in SLOTS}
        self.messages = []
        self.hover = HoverProbe(self._active_features)
        self.hover.attach(canvas)

    # --- slot access ---
    def get(self, slot):
        return self.slots[slot]

    def _set(self, slot, layer, index=None):
        self.slots[slot] = layer
        if index is None:
            self.canvas.add_layer(layer)
        else:
            self.canvas.insert_layer(index, layer)

    def clear(self, slot):
        """Detach and discard whatever occupies the slot."""
        layer = self.slots[slot]
        if layer is None:
            return
        self.canvas.remove_layer(layer)
        if hasattr(layer, "discard"):
            layer.discard()
        self.slots[slot] = None

    def _next_token(self, slot) -> int:
        self._tokens[slot] += 1
        return self._tokens[slot]

    def _is_current(self, slot, token) -> bool:
        return self._tokens[slot] == token

    def _active_features(self):
        vector = self.slots["vector"]
        return vector.features if vector is not None else None

    def _note(self, level, text):
        self.messages.append((level, text))

    # --- operations ---
    def set_base(self, selection: str):
        """Swap the base tiles and re-issue the view from the stress map extent."""
        self.clear("base")
        if selection != NONE_SELECTION:
            layer = self.base_layers.get(selection)
            if layer is None:
                self._note("warning", f"Unknown base map: {selection}")
            else:
                self._set("base", layer, index=0)

        vector = self.slots["vector"]
        self.viewport.apply_extent_or_fallback(vector.extent if vector is not None else None)

    async def set_stress(self, selection: str):
        """
        Replace the stress map with the named selection.

        "None" clears the slot and moves to the fallback view. A failed load
        leaves the slot empty and also falls back.
        """
        token = self._next_token("vector")
        self.clear("vector")

        if selection == NONE_SELECTION:
            self.viewport.apply_fallback()
            return None

        url = self.cfg["stress_maps"].get(selection)
        if url is None:
            self._note("warning", f"Unknown stress map: {selection}")
            self.viewport.apply_fallback()
            return None

        overlay = VectorOverlay(url, self.fetcher, name=selection)
        outcome = await overlay.load()
        if not self._is_current("vector", token):
            overlay.discard()
            return None

        if outcome.kind is OutcomeKind.ERROR:
            self._note("error", f"Could not load {selection}: {outcome.error}")
            self.viewport.apply_fallback()
            return None

        self._set("vector", overlay)
        if outcome.kind is OutcomeKind.UNUSABLE:
            self._note("warning", f"{selection} extent is empty or invalid")
        self.viewport.apply_extent_or_fallback(outcome.extent)
        return overlay

    async def set_raster(self, url: str = None, source_crs: str = None):
        """Replace the GeoTIFF overlay. The layer is attached while it loads."""
        raster_cfg = self.cfg["raster"]
        url = url or raster_cfg["url"]
        source_crs = source_crs or raster_cfg.get("source_crs")

        token = self._next_token("raster")
        self.clear("raster")

        kwargs = {"reader": self.raster_reader} if self.raster_reader is not None else {}
        overlay = RasterOverlay(url, source_crs, opacity=raster_cfg.get("opacity", 0.5), **kwargs)
        overlay.on_change(self._on_raster_state)
        index = 1 if self.slots["base"] is not None else 0
        self._set("raster", overlay, index=index)

        outcome = await overlay.load()
        # a newer call already cleared (and discarded) this overlay
        if not self._is_current("raster", token):
            return None

        if outcome.kind is OutcomeKind.ERROR:
            self.clear("raster")
            self.viewport.apply_fallback()
            return None

        self.viewport.apply_extent_or_fallback(outcome.extent)
        return overlay

    def _on_raster_state(self, overlay):
        """State listener of the attached raster; discarded overlays never reach it."""
        if overlay.state is OverlayState.ERROR:
            self._note("error", f"GeoTIFF failed to load: {overlay.outcome.error}")
        elif overlay.outcome is not None and overlay.outcome.kind is OutcomeKind.UNUSABLE:
            self._note("warning", "GeoTIFF extent invalid for EPSG:4326")

    async def initialize(self):
        """Attach the default base map and load the default raster and stress map.

        The two loads run concurrently; whichever finishes last sets the view.
        """
        self.set_base(self.cfg["default_base"])
        await asyncio.gather(
            self.set_raster(),
            self.set_stress(self.cfg["default_stress"]),
        )

    def teardown(self):
        """Release overlays and listeners; the canvas goes back to the caller."""
        for slot in SLOTS:
            self._next_token(slot)
            self.clear(slot)
        self.hover.detach()
        return self.canvas
