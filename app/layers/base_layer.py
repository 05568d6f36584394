# app/layers/base_layer.py
"""Base tile layers (satellite imagery under the overlays)."""
import folium


class BaseTileLayer:
    """An XYZ tile source shown beneath every overlay."""

    kind = "base"

    def __init__(self, name: str, url: str, attr: str = "", max_zoom: int = 23):
        self.name = name
        self.url = url
        self.attr = attr
        self.max_zoom = max_zoom

    def to_folium(self):
        return folium.TileLayer(
            tiles=self.url,
            attr=self.attr or self.name,
            name=self.name,
            max_zoom=self.max_zoom,
            max_native_zoom=min(self.max_zoom, 20),
            overlay=False,
            control=False,
        )

    def __repr__(self):
        return f"BaseTileLayer({self.name!r})"


def build_base_layers(base_maps: dict) -> dict:
    """
    Create one layer object per configured base map.

    Layers are built once and reused, so switching back and forth re-attaches
    the same object instead of piling up new ones.

    Args:
        base_maps: name -> {url, attr, max_zoom}

    Returns:
        dict name -> BaseTileLayer
    """
    return {
        name: BaseTileLayer(name, opts["url"], opts.get("attr", ""), int(opts.get("max_zoom", 23)))
        for name, opts in base_maps.items()
    }
