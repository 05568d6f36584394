import argparse
import asyncio
import sys
from pathlib import Path

# Ensure repository root is on sys.path so we can import local packages
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from app.components.legends import ndvi_colormap
from app.config import load_viewer_config
from app.lifecycle import LayerLifecycleManager
from app.map_view import MapCanvas
from etl.utils.api_clients import AsyncFetcher


async def build(cfg, stress: str):
    canvas = MapCanvas(width=cfg["map"]["width"], height=cfg["map"]["height"])
    fetcher = AsyncFetcher()
    manager = LayerLifecycleManager(canvas, cfg, fetcher)
    try:
        await manager.initialize()
        if stress != cfg["default_stress"]:
            await manager.set_stress(stress)
    finally:
        await fetcher.close()
    for level, text in manager.messages:
        print(f"{level}: {text}")
    return manager


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Render the stress map viewer to a static HTML page")
    parser.add_argument("--config", type=str, default=None)
    parser.add_argument("--stress", type=str, default=None, help="stress map name, or None")
    parser.add_argument("--out", type=str, default="data/processed/stress_map.html")
    args = parser.parse_args()

    cfg = load_viewer_config(args.config)
    manager = asyncio.run(build(cfg, args.stress or cfg["default_stress"]))
    m = manager.canvas.to_folium()
    m.add_child(ndvi_colormap())
    Path(args.out).parent.mkdir(parents=True, exist_ok=True)
    m.save(args.out)
    print(args.out)
