# app/streamlit_app.py - NDVI stress map viewer
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import asyncio

import streamlit as st
from streamlit_folium import st_folium

from app.components.legends import ndvi_colormap, render_ndvi_legend
from app.components.map_controls import render_map_controls
from app.components.tiff_viewer import render_tiff_viewer
from app.config import load_viewer_config
from app.lifecycle import LayerLifecycleManager
from app.map_view import MapCanvas, MapViewState
from etl.utils.api_clients import AsyncFetcher


def run_async(coro, fetcher: AsyncFetcher):
    """Run one lifecycle operation to completion on a fresh event loop.

    Streamlit reruns the script on every interaction, so the aiohttp session
    is closed before the loop that owns it goes away.
    """
    async def _main():
        try:
            return await coro
        finally:
            await fetcher.close()

    return asyncio.run(_main())


def get_manager() -> LayerLifecycleManager:
    if "manager" not in st.session_state:
        cfg = load_viewer_config()
        canvas = MapCanvas(
            width=cfg["map"]["width"],
            height=cfg["map"]["height"],
            view=MapViewState(center=(0.0, 0.0), zoom=cfg["fallback"]["zoom"]),
        )
        fetcher = AsyncFetcher()
        manager = LayerLifecycleManager(canvas, cfg, fetcher)
        with st.spinner("Loading overlays..."):
            run_async(manager.initialize(), fetcher)
        st.session_state.manager = manager
    return st.session_state.manager


def on_base_change():
    st.session_state.manager.set_base(st.session_state.base_map)


def on_stress_change():
    manager = st.session_state.manager
    run_async(manager.set_stress(st.session_state.stress_map), manager.fetcher)


def show_messages(manager: LayerLifecycleManager):
    for level, text in manager.messages:
        if level == "error":
            st.sidebar.error(f"❌ {text}")
        else:
            st.sidebar.warning(f"⚠️ {text}")
    manager.messages.clear()


st.set_page_config(layout="wide", page_title="NDVI Stress Map")
st.title("🌱 NDVI Stress Map")

manager = get_manager()
cfg = manager.cfg

render_map_controls(cfg, on_base_change=on_base_change, on_stress_change=on_stress_change)
render_ndvi_legend()
show_messages(manager)

m = manager.canvas.to_folium()
m.add_child(ndvi_colormap())
map_data = st_folium(
    m,
    width=cfg["map"]["width"],
    height=cfg["map"]["height"],
    returned_objects=["last_clicked"],
)

# st_folium only reports clicks back to Python, so the probe runs on click;
# the browser-side tooltip covers plain hovering.
if map_data and map_data.get("last_clicked"):
    clicked = map_data["last_clicked"]
    manager.canvas.dispatch("pointermove", (clicked["lng"], clicked["lat"]))

label = manager.hover.label
if label.visible:
    lon, lat = label.position
    st.sidebar.markdown(f"### 📍 {label.html}")
    st.sidebar.caption(f"at {lat:.5f}, {lon:.5f}")

with st.expander("🖼️ TIFF Viewer"):
    render_tiff_viewer(cfg["raster"]["url"])
