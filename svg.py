import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import cairosvg
from lxml import etree
from tqdm import tqdm

from utils import IconDefinition, RenderedIcon, get_png_name

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"


def _format_number(value) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


def icon_svg(icon: IconDefinition, fill: str = "white") -> bytes:
    """Minimal SVG document: the icon's box as the viewBox and its path as one filled shape."""
    width = _format_number(icon.width)
    height = _format_number(icon.height)

    root = etree.Element(f"{{{SVG_NS}}}svg", nsmap={None: SVG_NS, "xlink": XLINK_NS})
    root.set("width", width)
    root.set("height", height)
    root.set("viewBox", f"0 0 {width} {height}")

    path = etree.SubElement(root, f"{{{SVG_NS}}}path")
    path.set("d", icon.path)
    path.set("fill", fill)

    return etree.tostring(
        root, xml_declaration=True, encoding="UTF-8", standalone=False
    )


def render_icon(icon: IconDefinition, output_dir: Path, size: int) -> RenderedIcon:
    """Render the icon to a size x size PNG in output_dir.

    Scaling to the square output is left to CairoSVG (the viewBox keeps the
    icon's aspect ratio and centres it).
    """
    output = Path(output_dir) / get_png_name(icon)
    png = cairosvg.svg2png(
        bytestring=icon_svg(icon), output_width=size, output_height=size
    )
    output.write_bytes(png)
    return RenderedIcon(name=icon.name, path=output)


def render_icons(
    icons: Iterable[IconDefinition],
    output_dir: Path,
    size: int,
    workers: Optional[int] = None,
) -> List[RenderedIcon]:
    """Render every icon concurrently and wait for all of them.

    Icons sharing a name are rendered once, from the last definition (later
    sources win), so every output file has a single writer. Results keep the
    order in which each name first appeared. The first failure, in input
    order, is re-raised after the pool shuts down.
    """
    unique: Dict[str, IconDefinition] = {}
    for icon in icons:
        if icon.name in unique:
            logging.debug(f"Icon {icon.name} duplicately defined, keeping the last.")
        unique[icon.name] = icon

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(render_icon, icon, output_dir, size)
            for icon in unique.values()
        ]
        try:
            rendered = [
                f.result()
                for f in tqdm(futures, desc="Rendering icons", unit=" icons")
            ]
        except BaseException:
            for f in futures:
                f.cancel()
            raise

    return rendered
