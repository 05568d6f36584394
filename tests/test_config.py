# tests/test_config.py
"""Tests for the viewer config loader."""
import pytest


def test_missing_file_gives_defaults(tmp_path):
    """Test that a missing config file yields the built-in defaults."""
    from app.config import ROOT, load_viewer_config

    cfg = load_viewer_config(tmp_path / "nope.yaml")
    assert cfg["fallback"]["center"] == (144.45695, -37.68685)
    assert cfg["fallback"]["zoom"] == 18
    assert cfg["fit"] == {"padding": 50, "max_zoom": 18}
    assert set(cfg["stress_maps"]) == {"Stress Map 1", "Stress Map 2"}
    assert cfg["stress_maps"]["Stress Map 1"] == str(ROOT / "assets" / "stress_sample.json")


def test_yaml_overrides_are_merged(tmp_path):
    """Test that YAML sections override defaults key by key."""
    from app.config import load_viewer_config

    path = tmp_path / "viewer.yaml"
    path.write_text(
        "fallback:\n"
        "  zoom: 12\n"
        "stress_maps:\n"
        "  Remote: https://example.com/ndvi.geojson\n"
    )
    cfg = load_viewer_config(path)
    assert cfg["fallback"]["zoom"] == 12
    assert cfg["fallback"]["center"] == (144.45695, -37.68685)
    assert cfg["stress_maps"] == {"Remote": "https://example.com/ndvi.geojson"}
    assert cfg["raster"]["source_crs"] == "EPSG:32642"


def test_broken_yaml_warns_and_uses_defaults(tmp_path):
    """Test that unparseable YAML warns and falls back to defaults."""
    from app.config import DEFAULT_CONFIG, load_viewer_config

    path = tmp_path / "viewer.yaml"
    path.write_text("fallback: [unclosed\n")
    with pytest.warns(UserWarning):
        cfg = load_viewer_config(path)
    assert cfg["fallback"]["zoom"] == DEFAULT_CONFIG["fallback"]["zoom"]


def test_shipped_config_loads():
    """Test that config/viewer.yaml defaults point at configured entries."""
    from app.config import load_viewer_config

    cfg = load_viewer_config()
    assert cfg["default_base"] in cfg["base_maps"]
    assert cfg["default_stress"] in cfg["stress_maps"]
