# app/components/tiff_viewer.py
"""Standalone GeoTIFF preview: first band drawn as a grayscale image."""
import streamlit as st
from rasterio.errors import RasterioError

from app.errors import OverlayError
from etl.utils.api_clients import SimpleRequestClient
from etl.utils.raster_tools import read_tiff_bytes, to_grayscale_rgba


def load_tiff_rgba(tiff_path: str, client: SimpleRequestClient = None):
    """
    Download a TIFF and convert band 1 to grayscale RGBA.

    Args:
        tiff_path: local path or http(s) URL
        client: request client (a default one is created if omitted)

    Returns:
        uint8 array (height, width, 4), or None if loading failed
    """
    client = client or SimpleRequestClient()
    try:
        data = client.get_bytes(tiff_path)
        band = read_tiff_bytes(data)
        return to_grayscale_rgba(band)
    except (OverlayError, RasterioError, ValueError) as e:
        print(f"Error loading TIFF: {e}")
        return None


def render_tiff_viewer(tiff_path: str, client: SimpleRequestClient = None):
    """Render the preview in the main Streamlit area."""
    st.markdown("## TIFF Viewer")
    rgba = load_tiff_rgba(tiff_path, client)
    if rgba is None:
        st.error(f"Could not load TIFF: {tiff_path}")
        return None
    height, width = rgba.shape[:2]
    st.image(rgba, caption=f"{tiff_path} ({width}×{height})")
    return rgba
