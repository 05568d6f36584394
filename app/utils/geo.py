# app/utils/geo.py
"""Extent helpers used to decide whether a dataset can drive the map view."""
import math

import geopandas as gpd

# (min_x, min_y, max_x, max_y) in EPSG:4326 degrees
LON_RANGE = (-180.0, 180.0)
LAT_RANGE = (-90.0, 90.0)


def _coords(extent):
    """Return the extent as four floats, or None if it is absent or malformed."""
    if extent is None:
        return None
    try:
        if len(extent) != 4:
            return None
        coords = tuple(float(c) for c in extent)
    except (TypeError, ValueError):
        return None
    if not all(math.isfinite(c) for c in coords):
        return None
    return coords


def is_empty(extent) -> bool:
    """True if the extent is absent or has zero/negative span on either axis."""
    coords = _coords(extent)
    if coords is None:
        return True
    min_x, min_y, max_x, max_y = coords
    return max_x <= min_x or max_y <= min_y


def is_plausible_geographic(extent) -> bool:
    """True iff every coordinate lies within [-180,180] x [-90,90]."""
    coords = _coords(extent)
    if coords is None:
        return False
    min_x, min_y, max_x, max_y = coords
    return (
        LON_RANGE[0] <= min_x <= LON_RANGE[1]
        and LON_RANGE[0] <= max_x <= LON_RANGE[1]
        and LAT_RANGE[0] <= min_y <= LAT_RANGE[1]
        and LAT_RANGE[0] <= max_y <= LAT_RANGE[1]
    )


def fittable(extent) -> bool:
    """An extent can be handed to the view only if non-empty and geographic.

    Projected coordinates that slipped through without reprojection (metres,
    or the odd -200 longitude) fail here and send the caller to the fallback.
    """
    return not is_empty(extent) and is_plausible_geographic(extent)


def extent_of(gdf: gpd.GeoDataFrame):
    """
    Bounding rectangle of every geometry in a GeoDataFrame.

    Args:
        gdf: GeoDataFrame in EPSG:4326

    Returns:
        Tuple (min_x, min_y, max_x, max_y), or None when there is nothing to bound
    """
    if gdf is None or gdf.empty:
        return None
    geoms = gdf.geometry
    geoms = geoms[geoms.notna() & ~geoms.is_empty]
    if geoms.empty:
        return None
    return tuple(float(v) for v in geoms.total_bounds)


def to_leaflet_bounds(extent):
    """Convert (min_x, min_y, max_x, max_y) to Leaflet's [[south, west], [north, east]]."""
    coords = _coords(extent)
    if coords is None:
        raise ValueError(f"Not an extent: {extent!r}")
    min_x, min_y, max_x, max_y = coords
    return [[min_y, min_x], [max_y, max_x]]
