"""Utility functions for the Streamlit app."""

from .geo import is_empty, is_plausible_geographic, fittable, extent_of, to_leaflet_bounds
from .colors import color_for, to_hex, to_css, gradient_stops

__all__ = [
    'is_empty',
    'is_plausible_geographic',
    'fittable',
    'extent_of',
    'to_leaflet_bounds',
    'color_for',
    'to_hex',
    'to_css',
    'gradient_stops',
]
