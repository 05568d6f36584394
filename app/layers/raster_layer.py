# app/layers/raster_layer.py
"""GeoTIFF overlay drawn under the stress map."""
import asyncio

from folium.raster_layers import ImageOverlay
from rasterio.errors import RasterioError

from app.errors import ListenerStateError
from app.layers.overlay import OverlaySource
from app.utils.geo import is_empty, to_leaflet_bounds
from etl.utils.raster_tools import read_raster_grid


class RasterOverlay(OverlaySource):
    """
    Georeferenced grid read with rasterio.

    The file is read in a worker thread so the event loop stays free. Opacity
    is the same whatever the state: a raster whose extent turned out unusable
    is still drawn, only the viewport ignores it.

    Args:
        url: path or http(s) URL of the GeoTIFF
        source_crs: CRS the grid is declared in, e.g. "EPSG:32642"
        opacity: 0..1
        reader: callable(url, source_crs) -> RasterGrid
    """

    kind = "raster"

    def __init__(self, url: str, source_crs: str = None, opacity: float = 0.5,
                 reader=read_raster_grid, name: str = None):
        super().__init__(url, name=name)
        self.source_crs = source_crs
        self.opacity = opacity
        self.reader = reader
        self.grid = None

    async def _load(self):
        try:
            self.grid = await asyncio.to_thread(self.reader, self.url, self.source_crs)
        except (RasterioError, OSError, ValueError) as e:
            raise ListenerStateError(f"GeoTIFF source failed to load: {e}", url=self.url) from e
        return self.grid.extent

    def to_folium(self):
        if self.grid is None or is_empty(self.grid.extent):
            return None
        return ImageOverlay(
            image=self.grid.rgba,
            bounds=to_leaflet_bounds(self.grid.extent),
            opacity=self.opacity,
            name=self.name,
            interactive=False,
        )
