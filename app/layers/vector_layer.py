# app/layers/vector_layer.py
"""NDVI stress map: GeoJSON polygons filled by their `value` property."""
import folium
import geopandas as gpd
import pandas as pd
from shapely.errors import ShapelyError

from app.components.hover_probe import format_value
from app.errors import ParseError
from app.layers.overlay import OverlaySource
from app.utils.colors import color_for, to_hex
from app.utils.geo import extent_of

VALUE_KEY = "value"
LABEL_KEY = "ndvi_label"
LAYER_OPACITY = 0.7
STROKE = {"color": "#000000", "opacity": 0.2, "weight": 1}


def parse_features(geojson) -> gpd.GeoDataFrame:
    """
    Decode a feature collection into a GeoDataFrame in EPSG:4326.

    The `value` column is always present; non-numeric values become NaN
    (treated as absent).

    Raises:
        ParseError: if the document is not a usable feature collection
    """
    if not isinstance(geojson, dict) or geojson.get("type") != "FeatureCollection":
        raise ParseError("Expected a GeoJSON FeatureCollection")
    if not geojson.get("features"):
        return gpd.GeoDataFrame({VALUE_KEY: [], "geometry": []}, geometry="geometry", crs="EPSG:4326")
    try:
        gdf = gpd.GeoDataFrame.from_features(geojson["features"], crs="EPSG:4326")
    except (KeyError, TypeError, ValueError, AttributeError, ShapelyError) as e:
        raise ParseError(f"Could not decode features: {e}") from e

    if VALUE_KEY not in gdf.columns:
        gdf[VALUE_KEY] = float("nan")
    gdf[VALUE_KEY] = pd.to_numeric(gdf[VALUE_KEY], errors="coerce")
    return gdf


def style_for(feature: dict) -> dict:
    """Leaflet path style for one GeoJSON feature, computed at render time."""
    value = (feature.get("properties") or {}).get(VALUE_KEY)
    return {
        "fillColor": to_hex(color_for(value)),
        "fillOpacity": LAYER_OPACITY,
        **STROKE,
    }


class VectorOverlay(OverlaySource):
    """
    Stress map polygons fetched from a GeoJSON resource.

    Args:
        url: path or http(s) URL of the feature collection
        fetcher: object with `async fetch_json(url)` (see etl.utils.api_clients.AsyncFetcher)
    """

    kind = "vector"

    def __init__(self, url: str, fetcher, name: str = None):
        super().__init__(url, name=name)
        self.fetcher = fetcher
        self.features: gpd.GeoDataFrame = None

    async def _load(self):
        data = await self.fetcher.fetch_json(self.url)
        try:
            self.features = parse_features(data)
        except ParseError as e:
            e.url = self.url
            raise
        return extent_of(self.features)

    def to_folium(self):
        if self.features is None or self.features.empty:
            return None
        gdf = self.features.copy()
        gdf[LABEL_KEY] = gdf[VALUE_KEY].map(format_value)
        return folium.GeoJson(
            data=gdf.to_json(),
            name=self.name,
            style_function=style_for,
            tooltip=folium.GeoJsonTooltip(fields=[LABEL_KEY], aliases=["NDVI:"]),
        )
