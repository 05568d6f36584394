# app/viewport.py
"""The one rule every overlay uses to move the map."""
from app.utils.geo import fittable

FALLBACK_CENTER = (144.45695, -37.68685)  # lon, lat
FALLBACK_ZOOM = 18
FIT_PADDING = 50
FIT_MAX_ZOOM = 18


class ViewportController:
    def __init__(self, canvas, fallback_center=FALLBACK_CENTER, fallback_zoom=FALLBACK_ZOOM,
                 padding=FIT_PADDING, max_zoom=FIT_MAX_ZOOM):
        self.canvas = canvas
        self.fallback_center = tuple(fallback_center)
        self.fallback_zoom = fallback_zoom
        self.padding = padding
        self.max_zoom = max_zoom

    @classmethod
    def from_config(cls, canvas, cfg: dict):
        return cls(
            canvas,
            fallback_center=cfg["fallback"]["center"],
            fallback_zoom=cfg["fallback"]["zoom"],
            padding=cfg["fit"]["padding"],
            max_zoom=cfg["fit"]["max_zoom"],
        )

    def apply_fallback(self):
        self.canvas.set_center(self.fallback_center)
        self.canvas.set_zoom(self.fallback_zoom)

    def apply_extent_or_fallback(self, extent) -> bool:
        """Fit the view to the extent if it is usable, else go to the fallback.

        Returns:
            True if the view was fit to the extent
        """
        if fittable(extent):
            self.canvas.fit(tuple(float(c) for c in extent), padding=self.padding, max_zoom=self.max_zoom)
            return True
        self.apply_fallback()
        return False
