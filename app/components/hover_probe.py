# app/components/hover_probe.py
"""Floating NDVI label that follows the pointer over the stress map."""
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from shapely.geometry import Point

NA_TEXT = "N/A"


def format_value(value) -> str:
    """Hover text for a feature value: "N/A" when absent, else the number as written."""
    if value is None:
        return NA_TEXT
    try:
        v = float(value)
    except (TypeError, ValueError):
        return NA_TEXT
    if math.isnan(v):
        return NA_TEXT
    if v.is_integer():
        return str(int(v))
    return repr(v)


@dataclass
class HoverLabel:
    visible: bool = False
    text: str = ""
    position: Optional[Tuple[float, float]] = None  # lon, lat

    @property
    def html(self) -> str:
        return f"NDVI: {self.text}"


class HoverProbe:
    """
    Hit-tests the active stress map under the pointer.

    Only vector features are considered; the raster overlay is never probed.
    The topmost feature (last drawn) wins when polygons overlap.

    Args:
        features_source: callable returning the active GeoDataFrame, or None
    """

    def __init__(self, features_source):
        self.features_source = features_source
        self.label = HoverLabel()
        self._canvas = None
        self._key = None

    def attach(self, canvas):
        """Register the single pointer-move listener on the map."""
        self.detach()
        self._canvas = canvas
        self._key = canvas.on("pointermove", self.on_pointer_move)

    def detach(self):
        if self._canvas is not None and self._key is not None:
            self._canvas.un(self._key)
        self._canvas = None
        self._key = None

    def feature_at(self, coordinate):
        gdf = self.features_source()
        if gdf is None or gdf.empty:
            return None
        pt = Point(coordinate[0], coordinate[1])
        hits = gdf.sindex.query(pt, predicate="intersects")
        if len(hits) == 0:
            return None
        return gdf.iloc[int(max(hits))]

    def on_pointer_move(self, coordinate):
        feature = self.feature_at(coordinate)
        if feature is None:
            self.label = HoverLabel()
        else:
            self.label = HoverLabel(
                visible=True,
                text=format_value(feature.get("value")),
                position=(float(coordinate[0]), float(coordinate[1])),
            )
        return self.label
