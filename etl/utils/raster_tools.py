# etl/utils/raster_tools.py
"""GeoTIFF reading for the map overlay and the standalone viewer."""
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import rasterio
from rasterio.crs import CRS
from rasterio.errors import CRSError
from rasterio.io import MemoryFile
from rasterio.warp import calculate_default_transform, reproject, Resampling, transform_bounds

from app.utils.geo import fittable

DISPLAY_CRS = "EPSG:4326"


@dataclass
class RasterGrid:
    rgba: np.ndarray                      # (height, width, 4) uint8
    extent: Optional[Tuple[float, float, float, float]]  # EPSG:4326, None if not derivable


def to_grayscale_rgba(band) -> np.ndarray:
    """
    Map a single band to grayscale RGBA.

    Values are clamped to 0..255 and copied into R, G and B; alpha is opaque
    except for nodata/NaN pixels, which become transparent.

    Args:
        band: 2D array (plain or masked)

    Returns:
        uint8 array of shape (height, width, 4)
    """
    arr = np.ma.asarray(band).astype("float64").filled(np.nan)
    if arr.ndim != 2:
        raise ValueError(f"Expected a single band, got shape {arr.shape}")
    missing = np.isnan(arr)
    gray = np.clip(np.nan_to_num(arr, nan=0.0), 0, 255).astype(np.uint8)
    out = np.empty(arr.shape + (4,), dtype=np.uint8)
    out[..., 0] = gray
    out[..., 1] = gray
    out[..., 2] = gray
    out[..., 3] = np.where(missing, 0, 255)
    return out


def _display_extent(src_crs, bounds):
    if src_crs is None:
        return None
    try:
        return tuple(float(v) for v in transform_bounds(src_crs, DISPLAY_CRS, *bounds, densify_pts=21))
    except (CRSError, ValueError):
        return None


def read_raster_grid(url: str, source_crs: str = None) -> RasterGrid:
    """
    Read band 1 of a GeoTIFF and reproject it into EPSG:4326 for display.

    A declared `source_crs` takes precedence over the CRS tagged in the file.
    When the bounds cannot be transformed into plausible lon/lat the pixels
    are returned unprojected along with whatever extent was derived.

    Raises:
        rasterio.errors.RasterioIOError: if the file cannot be opened
    """
    with rasterio.open(url) as src:
        band = src.read(1, masked=True)
        try:
            src_crs = CRS.from_user_input(source_crs) if source_crs else src.crs
        except CRSError:
            src_crs = None
        extent = _display_extent(src_crs, src.bounds)
        if not fittable(extent):
            return RasterGrid(to_grayscale_rgba(band), extent)

        dst_transform, dst_width, dst_height = calculate_default_transform(
            src_crs, DISPLAY_CRS, src.width, src.height, *src.bounds
        )
        dst = np.full((int(dst_height), int(dst_width)), np.nan, dtype="float32")
        reproject(
            source=band.astype("float32").filled(np.nan),
            destination=dst,
            src_transform=src.transform,
            src_crs=src_crs,
            src_nodata=np.nan,
            dst_transform=dst_transform,
            dst_crs=DISPLAY_CRS,
            dst_nodata=np.nan,
            resampling=Resampling.nearest,
        )
    return RasterGrid(to_grayscale_rgba(dst), extent)


def read_tiff_bytes(data: bytes) -> np.ndarray:
    """Decode an in-memory TIFF and return band 1 as a masked array."""
    with MemoryFile(data) as mem:
        with mem.open() as src:
            return src.read(1, masked=True)
