#!python3
import argparse
import json
import logging
import math
from pathlib import Path
from typing import Iterable, List, Sequence

from tqdm import tqdm

from pack import TEXTURE_SIZE, TILE_SIZE, pack, sheet_capacity
from sources import load_icons
from svg import render_icons
from utils import RenderedIcon, SheetLayout, get_sheet_name, setup_logging

SOURCES = Path("sources/")
DEFAULT_SOURCES = [
    SOURCES / "free-solid-svg-icons.json",
    SOURCES / "free-brands-svg-icons.json",
]
OUTPUT = Path("output/")
MANIFEST_NAME = "icons.icon.json"


def sheet_count(total: int, capacity: int) -> int:
    return math.ceil(total / capacity)


def batched(items: Sequence, capacity: int) -> Iterable[Sequence]:
    for i in range(sheet_count(len(items), capacity)):
        yield items[i * capacity : (i + 1) * capacity]


def build_sheets(
    rendered: Sequence[RenderedIcon],
    output_dir: Path,
    tile_size: int = TILE_SIZE,
    texture_size: int = TEXTURE_SIZE,
) -> List[SheetLayout]:
    """Pack the rendered icons into as many sheets as needed, one after another.

    Sheet i holds icons [i * capacity, (i + 1) * capacity) and is written to
    output_dir/icons_<i>.png; only the last sheet may be partially filled.
    """
    capacity = sheet_capacity(tile_size, texture_size)
    batches = list(batched(list(rendered), capacity))

    sheets = []
    for index, batch in enumerate(tqdm(batches, desc="Packing sheets", unit=" sheets")):
        filename = Path(output_dir) / get_sheet_name(index)
        tiles = pack([r.path for r in batch], filename, tile_size, texture_size)
        sheets.append(
            SheetLayout(
                filename=filename.name,
                width=texture_size,
                height=texture_size,
                tile_width=tile_size,
                tile_height=tile_size,
                tiles=tiles,
            )
        )

    return sheets


def write_manifest(sheets: Iterable[SheetLayout], output_dir: Path) -> Path:
    output = Path(output_dir) / MANIFEST_NAME
    output.write_text(json.dumps([s.to_json() for s in sheets]))
    return output


def main(args):
    # Ensure dirs exist.
    icon_dir = args.output / "icons"
    icon_dir.mkdir(parents=True, exist_ok=True)

    icons = load_icons(args.source)
    logging.info(f"Loaded {len(icons)} icon definitions.")

    rendered = render_icons(icons, icon_dir, args.tile_size, args.workers)
    logging.info(f"Rendered {len(rendered)} icons.")

    sheets = build_sheets(rendered, args.output, args.tile_size, args.texture_size)
    manifest = write_manifest(sheets, args.output)

    print(f"Icon sheets written: {len(sheets)}, manifest: {manifest}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Render icon libraries to PNG tiles and pack them into sprite sheets."
    )
    parser.add_argument(
        "--source",
        type=Path,
        action="append",
        help="Icon library export (JSON, optionally gzipped); repeat for more. Later sources win.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=OUTPUT,
        help="Output directory",
    )
    parser.add_argument("--tile-size", type=int, default=TILE_SIZE)
    parser.add_argument("--texture-size", type=int, default=TEXTURE_SIZE)
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Concurrent renders (default: ThreadPoolExecutor's default)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    args = parser.parse_args()

    if args.source is None:
        args.source = DEFAULT_SOURCES
    if args.tile_size <= 0 or args.texture_size < args.tile_size:
        parser.error("--texture-size must be at least --tile-size, both positive")
    if args.texture_size % args.tile_size:
        parser.error("--texture-size must be a multiple of --tile-size")

    setup_logging()
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    main(args)
