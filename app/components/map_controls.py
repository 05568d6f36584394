"""Sidebar selectors for the base map and the stress map.

The options come from the viewer config so the selectors and the lifecycle
manager always agree on names.
"""
import streamlit as st

from app.config import NONE_SELECTION


def base_map_options(cfg: dict):
    return list(cfg["base_maps"].keys()) + [NONE_SELECTION]


def stress_map_options(cfg: dict):
    return [NONE_SELECTION] + list(cfg["stress_maps"].keys())


def _index_of(options, value):
    try:
        return options.index(value)
    except ValueError:
        return 0


def render_map_controls(cfg: dict, on_base_change=None, on_stress_change=None):
    """
    Render the "Base Map" and "Stress Map" selectboxes.

    Args:
        cfg: viewer config
        on_base_change: callback run by Streamlit when the base map changes
        on_stress_change: callback run by Streamlit when the stress map changes

    Returns:
        Tuple (base_selection, stress_selection)
    """
    st.sidebar.markdown("### 🗺️ Map Controls")
    base_opts = base_map_options(cfg)
    stress_opts = stress_map_options(cfg)

    base = st.sidebar.selectbox(
        "Base Map",
        base_opts,
        index=_index_of(base_opts, cfg["default_base"]),
        key="base_map",
        on_change=on_base_change,
    )
    stress = st.sidebar.selectbox(
        "Stress Map",
        stress_opts,
        index=_index_of(stress_opts, cfg["default_stress"]),
        key="stress_map",
        on_change=on_stress_change,
    )
    return base, stress
