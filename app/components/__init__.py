# app/components/__init__.py
"""UI components for Streamlit application."""

from .hover_probe import HoverProbe, HoverLabel, format_value
from .legends import ndvi_colormap, legend_gradient_css, render_ndvi_legend
from .map_controls import render_map_controls, base_map_options, stress_map_options
from .tiff_viewer import load_tiff_rgba, render_tiff_viewer

__all__ = [
    'HoverProbe',
    'HoverLabel',
    'format_value',
    'ndvi_colormap',
    'legend_gradient_css',
    'render_ndvi_legend',
    'render_map_controls',
    'base_map_options',
    'stress_map_options',
    'load_tiff_rgba',
    'render_tiff_viewer',
]
