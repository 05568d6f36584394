# tests/test_overlays.py
"""Tests for the raster and vector overlays."""
import asyncio

import folium
import pytest

from app.errors import ParseError
from tests.conftest import FakeFetcher, failing_reader, fake_reader, square_collection


def test_vector_ready_with_extent(docs):
    """Test that a valid FeatureCollection loads with its total bounds."""
    from app.layers.overlay import OutcomeKind, OverlayState
    from app.layers.vector_layer import VectorOverlay

    overlay = VectorOverlay("a.json", FakeFetcher(docs))
    assert overlay.state is OverlayState.LOADING

    outcome = asyncio.run(overlay.load())

    assert outcome.kind is OutcomeKind.READY
    assert outcome.extent == (10.0, 10.0, 20.0, 20.0)
    assert overlay.state is OverlayState.READY
    assert len(overlay.features) == 2


def test_vector_fetch_failure_becomes_error_outcome():
    """Test that a fetch failure is returned as an Error outcome."""
    from app.errors import ResourceFetchError
    from app.layers.overlay import OutcomeKind, OverlayState
    from app.layers.vector_layer import VectorOverlay

    overlay = VectorOverlay("missing.json", FakeFetcher({}))
    outcome = asyncio.run(overlay.load())
    assert outcome.kind is OutcomeKind.ERROR
    assert isinstance(outcome.error, ResourceFetchError)
    assert overlay.state is OverlayState.ERROR


@pytest.mark.parametrize("doc", [
    ParseError("Malformed JSON in bad.json"),
    {"type": "Feature"},
    {"type": "FeatureCollection", "features": [{"type": "Feature", "properties": {}}]},
    {"type": "FeatureCollection", "features": 5},
])
def test_vector_parse_failures_become_error_outcome(doc):
    """Test that malformed documents are returned as ParseError outcomes."""
    from app.layers.overlay import OutcomeKind
    from app.layers.vector_layer import VectorOverlay

    overlay = VectorOverlay("bad.json", FakeFetcher({"bad.json": doc}))
    outcome = asyncio.run(overlay.load())
    assert outcome.kind is OutcomeKind.ERROR
    assert isinstance(outcome.error, ParseError)


def test_vector_empty_collection_is_unusable():
    """Test that an empty FeatureCollection loads but has no usable extent."""
    from app.layers.overlay import OutcomeKind
    from app.layers.vector_layer import VectorOverlay

    overlay = VectorOverlay("empty.json", FakeFetcher({"empty.json": {"type": "FeatureCollection", "features": []}}))
    outcome = asyncio.run(overlay.load())
    assert outcome.kind is OutcomeKind.UNUSABLE
    assert overlay.to_folium() is None


def test_parse_features_keeps_absent_values_as_nan():
    """Test that features without a value keep NaN instead of zero."""
    from app.layers.vector_layer import parse_features

    gdf = parse_features(square_collection((0, 0, 1, 1, None), (1, 0, 2, 1, 0.4)))
    assert gdf["value"].isna().tolist() == [True, False]


def test_style_for_uses_ramp_and_fixed_stroke():
    """Test that the fill follows the ramp and the stroke is fixed."""
    from app.layers.vector_layer import style_for

    style = style_for({"properties": {"value": 0.5}})
    assert style["fillColor"] == "#808000"
    assert style["color"] == "#000000"
    assert style["opacity"] == 0.2
    assert style["weight"] == 1

    assert style_for({"properties": {}})["fillColor"] == "#ff0000"


def test_vector_renders_geojson_with_labels(docs):
    """Test that the stress map renders as GeoJson carrying the NDVI label."""
    from app.layers.vector_layer import VectorOverlay

    overlay = VectorOverlay("a.json", FakeFetcher(docs))
    asyncio.run(overlay.load())
    layer = overlay.to_folium()
    assert isinstance(layer, folium.GeoJson)
    m = folium.Map(tiles=None)
    layer.add_to(m)
    assert "ndvi_label" in m.get_root().render()


def test_raster_ready_with_valid_extent():
    """Test that a raster with a lon/lat extent is Ready and renders."""
    from app.layers.overlay import OutcomeKind
    from app.layers.raster_layer import RasterOverlay

    overlay = RasterOverlay("sample.tif", "EPSG:32755", reader=fake_reader((144.4, -37.7, 144.5, -37.6)))
    outcome = asyncio.run(overlay.load())
    assert outcome.kind is OutcomeKind.READY
    assert overlay.to_folium() is not None


def test_raster_bogus_extent_is_unusable_but_still_rendered():
    """Test that an out-of-range extent is Unusable while the image still renders."""
    from app.errors import ExtentUnusable
    from app.layers.overlay import OutcomeKind, OverlayState
    from app.layers.raster_layer import RasterOverlay

    overlay = RasterOverlay("sample.tif", "EPSG:32642", reader=fake_reader((-200, -37, -199, -36)))
    outcome = asyncio.run(overlay.load())
    assert outcome.kind is OutcomeKind.UNUSABLE
    assert overlay.state is OverlayState.READY
    assert isinstance(outcome.error, ExtentUnusable)
    assert overlay.to_folium() is not None


def test_raster_without_extent_is_unusable():
    """Test that a raster with no georeferencing is Unusable and not drawn."""
    from app.layers.overlay import OutcomeKind
    from app.layers.raster_layer import RasterOverlay

    overlay = RasterOverlay("sample.tif", reader=fake_reader(None))
    outcome = asyncio.run(overlay.load())
    assert outcome.kind is OutcomeKind.UNUSABLE
    assert overlay.to_folium() is None


def test_raster_read_failure_is_listener_state_error():
    """Test that a rasterio read error becomes a ListenerStateError outcome."""
    from rasterio.errors import RasterioIOError

    from app.errors import ListenerStateError
    from app.layers.overlay import OutcomeKind, OverlayState
    from app.layers.raster_layer import RasterOverlay

    overlay = RasterOverlay("sample.tif", reader=failing_reader(RasterioIOError("not a tiff")))
    outcome = asyncio.run(overlay.load())
    assert outcome.kind is OutcomeKind.ERROR
    assert isinstance(outcome.error, ListenerStateError)
    assert overlay.state is OverlayState.ERROR


def test_listener_fires_once_and_not_after_discard():
    """Test that the state listener fires once and is silent after discard."""
    from app.layers.overlay import OverlayState
    from app.layers.raster_layer import RasterOverlay

    seen = []
    first = RasterOverlay("one.tif", reader=fake_reader((0, 0, 1, 1)))
    first.on_change(lambda o: seen.append(o.state))
    asyncio.run(first.load())
    assert seen == [OverlayState.READY]

    second = RasterOverlay("two.tif", reader=fake_reader((0, 0, 1, 1)))
    second.on_change(lambda o: seen.append(("second", o.state)))
    second.discard()
    asyncio.run(second.load())
    assert seen == [OverlayState.READY]
