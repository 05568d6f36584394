# tests/conftest.py
"""Shared fakes for the overlay / lifecycle tests."""
import asyncio
import copy

import numpy as np
import pytest

from app.config import DEFAULT_CONFIG
from app.errors import ResourceFetchError
from app.map_view import MapCanvas, MapViewState
from etl.utils.raster_tools import RasterGrid


def square_collection(*boxes):
    """FeatureCollection of axis-aligned squares given as (min_x, min_y, max_x, max_y, value)."""
    features = []
    for min_x, min_y, max_x, max_y, value in boxes:
        props = {} if value is None else {"value": value}
        features.append({
            "type": "Feature",
            "properties": props,
            "geometry": {
                "type": "Polygon",
                "coordinates": [[[min_x, min_y], [max_x, min_y], [max_x, max_y], [min_x, max_y], [min_x, min_y]]],
            },
        })
    return {"type": "FeatureCollection", "features": features}


class FakeFetcher:
    """Async stand-in for AsyncFetcher; records every URL it is asked for."""

    def __init__(self, docs, delays=None):
        self.docs = docs
        self.delays = delays or {}
        self.calls = []

    async def fetch_json(self, url):
        self.calls.append(url)
        await asyncio.sleep(self.delays.get(url, 0))
        doc = self.docs.get(url)
        if isinstance(doc, Exception):
            raise doc
        if doc is None:
            raise ResourceFetchError(f"Failed to fetch {url}: 404 Not Found", url=url)
        return doc


def fake_reader(extent):
    """Raster reader returning a 2x2 grid with a fixed extent."""
    def read(url, source_crs):
        return RasterGrid(np.full((2, 2, 4), 255, dtype=np.uint8), extent)
    return read


def failing_reader(exc):
    def read(url, source_crs):
        raise exc
    return read


@pytest.fixture
def cfg():
    c = copy.deepcopy(DEFAULT_CONFIG)
    c["stress_maps"] = {"Stress Map 1": "a.json", "Stress Map 2": "b.json"}
    c["raster"]["url"] = "sample.tif"
    c["fallback"]["center"] = tuple(c["fallback"]["center"])
    return c


@pytest.fixture
def canvas():
    return MapCanvas(width=900, height=500, view=MapViewState(center=(0.0, 0.0), zoom=18))


@pytest.fixture
def docs():
    return {
        "a.json": square_collection((10, 10, 15, 20, 0.2), (15, 10, 20, 20, 0.9)),
        "b.json": square_collection((144.4, -37.7, 144.5, -37.6, 0.5)),
    }
