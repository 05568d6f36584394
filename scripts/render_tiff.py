import argparse
import sys
from pathlib import Path

# Ensure repository root is on sys.path so we can import local packages
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

import matplotlib.pyplot as plt

from app.components.tiff_viewer import load_tiff_rgba


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Save band 1 of a TIFF as a grayscale PNG")
    parser.add_argument("tiff", type=str, help="path or http(s) URL of the TIFF")
    parser.add_argument("--out", type=str, default="data/processed/tiff_preview.png")
    args = parser.parse_args()

    rgba = load_tiff_rgba(args.tiff)
    if rgba is None:
        sys.exit(1)
    Path(args.out).parent.mkdir(parents=True, exist_ok=True)
    plt.imsave(args.out, rgba)
    print(args.out)
