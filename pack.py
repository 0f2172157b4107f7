#!python3
"""Pack rendered icon PNGs into a square sprite-sheet texture."""

import argparse
import logging
from pathlib import Path
from typing import List, Sequence, Tuple

from PIL import Image

from utils import TilePlacement, setup_logging

TILE_SIZE = 64
TEXTURE_SIZE = 2048


def tiles_per_row(tile_size: int = TILE_SIZE, texture_size: int = TEXTURE_SIZE) -> int:
    return texture_size // tile_size


def sheet_capacity(tile_size: int = TILE_SIZE, texture_size: int = TEXTURE_SIZE) -> int:
    return tiles_per_row(tile_size, texture_size) ** 2


def tile_position(
    index: int, tile_size: int = TILE_SIZE, texture_size: int = TEXTURE_SIZE
) -> Tuple[int, int]:
    per_row = tiles_per_row(tile_size, texture_size)
    row, col = divmod(index, per_row)
    return col * tile_size, row * tile_size


def pack(
    icons: Sequence[Path],
    output: Path,
    tile_size: int = TILE_SIZE,
    texture_size: int = TEXTURE_SIZE,
) -> List[TilePlacement]:
    capacity = sheet_capacity(tile_size, texture_size)
    if len(icons) > capacity:
        raise ValueError(
            f"{len(icons)} icons do not fit on one {texture_size}px sheet (max {capacity})"
        )

    canvas = Image.new("RGBA", (texture_size, texture_size), (0, 0, 0, 0))

    tiles = []
    for index, icon_path in enumerate(icons):
        icon_path = Path(icon_path)
        x, y = tile_position(index, tile_size, texture_size)
        with Image.open(icon_path) as tile:
            canvas.alpha_composite(tile.convert("RGBA"), dest=(x, y))
        tiles.append(TilePlacement(name=icon_path.stem, x=x, y=y))

    output = Path(output)
    output.parent.mkdir(parents=True, exist_ok=True)
    canvas.save(output, "PNG")
    logging.info(f"Written icon texture: {output}")

    return tiles


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Pack rendered icons into one sheet. The directory must hold at most "
        "(texture-size / tile-size)^2 icons; use tiler.py to spread more over several sheets."
    )
    parser.add_argument(
        "--icon-dir",
        type=Path,
        default=Path("output/icons"),
        help="Directory containing rendered icon PNGs",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("output/icons_0.png"),
        help="Output sheet",
    )
    parser.add_argument("--tile-size", type=int, default=TILE_SIZE)
    parser.add_argument("--texture-size", type=int, default=TEXTURE_SIZE)
    args = parser.parse_args()

    if args.tile_size <= 0 or args.texture_size % args.tile_size or args.texture_size < args.tile_size:
        parser.error("--texture-size must be a positive multiple of --tile-size")

    icons = sorted(args.icon_dir.glob("*.png"))
    capacity = sheet_capacity(args.tile_size, args.texture_size)
    if len(icons) > capacity:
        parser.error(f"{len(icons)} icons in {args.icon_dir}, one sheet holds {capacity}")

    setup_logging()
    pack(icons, args.output, args.tile_size, args.texture_size)
