# app/layers/__init__.py
"""Map layers: base tiles, the GeoTIFF overlay and the NDVI stress map."""

from .base_layer import BaseTileLayer, build_base_layers
from .overlay import OverlaySource, OverlayState, Outcome, OutcomeKind
from .raster_layer import RasterOverlay
from .vector_layer import VectorOverlay, parse_features, style_for

__all__ = [
    'BaseTileLayer',
    'build_base_layers',
    'OverlaySource',
    'OverlayState',
    'Outcome',
    'OutcomeKind',
    'RasterOverlay',
    'VectorOverlay',
    'parse_features',
    'style_for',
]
