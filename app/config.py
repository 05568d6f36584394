# app/config.py
"""Viewer configuration: defaults in code, optional overrides from YAML."""
import copy
import warnings
from pathlib import Path

import yaml

ROOT = Path(__file__).resolve().parent.parent
CONFIG_PATH = ROOT / "config" / "viewer.yaml"

NONE_SELECTION = "None"

DEFAULT_CONFIG = {
    "base_maps": {
        "Google Satellite": {
            "url": "http://mt0.google.com/vt/lyrs=s&hl=en&x={x}&y={y}&z={z}",
            "attr": "Google",
            "max_zoom": 23,
        },
    },
    "stress_maps": {
        "Stress Map 1": "assets/stress_sample.json",
        "Stress Map 2": "assets/stress_sample_2.json",
    },
    "default_base": "Google Satellite",
    "default_stress": "Stress Map 1",
    "raster": {
        "url": "assets/sample.tif",
        "source_crs": "EPSG:32642",
        "opacity": 0.5,
    },
    "fallback": {
        "center": [144.45695, -37.68685],  # lon, lat
        "zoom": 18,
    },
    "fit": {
        "padding": 50,
        "max_zoom": 18,
    },
    "map": {
        "width": 900,
        "height": 500,
    },
}


def _merge(base: dict, override: dict) -> dict:
    out = copy.deepcopy(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict) and k not in ("base_maps", "stress_maps"):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def _resolve_local(url: str) -> str:
    """Relative asset paths are resolved against the repository root."""
    if "://" in url:
        return url
    p = Path(url)
    return str(p if p.is_absolute() else ROOT / p)


def load_viewer_config(path: Path = None) -> dict:
    """Load viewer settings from YAML.

    Returns DEFAULT_CONFIG merged with whatever the file provides. A missing or
    unreadable file is not fatal: the defaults are returned and a warning issued.
    Mapping sections (base_maps, stress_maps) are replaced, not merged, so the
    file fully controls which options the selectors show.
    """
    path = Path(path) if path is not None else CONFIG_PATH
    cfg = copy.deepcopy(DEFAULT_CONFIG)
    if path.exists():
        try:
            loaded = yaml.safe_load(path.read_text())
            if isinstance(loaded, dict):
                cfg = _merge(cfg, loaded)
            elif loaded is not None:
                warnings.warn(f"Ignoring {path}: expected a mapping at top level")
        except (OSError, yaml.YAMLError) as e:
            warnings.warn(f"Could not read viewer config {path}: {e}. Using defaults.")

    cfg["stress_maps"] = {k: _resolve_local(v) for k, v in cfg["stress_maps"].items()}
    cfg["raster"]["url"] = _resolve_local(cfg["raster"]["url"])
    cfg["fallback"]["center"] = tuple(float(c) for c in cfg["fallback"]["center"])
    return cfg
