# app/components/legends.py
"""NDVI legend for the Streamlit UI and the folium map."""
import streamlit as st
from branca.colormap import LinearColormap

from app.utils.colors import gradient_stops, to_css, to_hex

LEGEND_TICKS = (0.0, 0.5, 1.0)
LEGEND_WIDTH_PX = 150


def ndvi_colormap(caption: str = "NDVI") -> LinearColormap:
    """Branca colormap sampled from the same ramp that fills the stress map."""
    stops = gradient_stops(3)
    cmap = LinearColormap(
        colors=[to_hex(rgba) for _, rgba in stops],
        index=[v for v, _ in stops],
        vmin=0.0,
        vmax=1.0,
        tick_labels=list(LEGEND_TICKS),
    )
    cmap.caption = caption
    return cmap


def legend_gradient_css() -> str:
    """CSS gradient whose stops are the ramp colors at 0, 0.5 and 1."""
    stops = ", ".join(f"{to_css(rgba)} {v * 100:.0f}%" for v, rgba in gradient_stops(3))
    return f"linear-gradient(to right, {stops})"


def legend_html() -> str:
    ticks = "".join(f"<span>{t:.1f}</span>" for t in LEGEND_TICKS)
    return f"""
    <details style="color: white; background-color: #3b3b3b; padding: 4px; font-size: 12px; cursor: pointer;">
        <summary style="font-weight: bold; margin-bottom: 8px;">NDVI Legend</summary>
        <div style="display: flex; flex-direction: column; align-items: start;">
            <div style="width: {LEGEND_WIDTH_PX}px; height: 15px; background: {legend_gradient_css()}; border: 1px solid #ccc;"></div>
            <div style="display: flex; justify-content: space-between; width: {LEGEND_WIDTH_PX}px; font-size: 12px;">
                {ticks}
            </div>
        </div>
    </details>
    """


def render_ndvi_legend():
    """Render the static (non-interactive) NDVI legend in the sidebar."""
    st.sidebar.markdown(legend_html(), unsafe_allow_html=True)
