from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import List


COLORS = {
    "DEBUG": "\033[36m",  # cyan
    "INFO": "\033[32m",  # green
    "WARNING": "\033[33m",  # yellow
    "ERROR": "\033[31m",  # red
    "CRITICAL": "\033[1;31m",  # bold red
}
COLOR_RESET = "\033[0m"


class ColorFormatter(logging.Formatter):
    def format(self, record):
        color = COLORS.get(record.levelname, "")
        record.levelname = f"{color}{record.levelname}{COLOR_RESET}"
        return super().format(record)


def setup_logging():
    handler = logging.StreamHandler()
    handler.setFormatter(ColorFormatter("%(levelname)s %(message)s"))
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.INFO)


@dataclass(frozen=True)
class IconDefinition:
    name: str
    width: float
    height: float
    path: str

    def __post_init__(self):
        if not self.name:
            raise ValueError(f"Icon name must not be empty (path={self.path[:20]})")


@dataclass(frozen=True)
class RenderedIcon:
    name: str
    path: Path


@dataclass(frozen=True)
class TilePlacement:
    name: str
    x: int
    y: int


@dataclass(frozen=True)
class SheetLayout:
    """One entry of the icons.icon.json manifest."""

    filename: str
    width: int
    height: int
    tile_width: int
    tile_height: int
    tiles: List[TilePlacement] = field(default_factory=list)

    def to_json(self) -> dict:
        return {
            "filename": self.filename,
            "width": self.width,
            "height": self.height,
            "tiles": [{"name": t.name, "x": t.x, "y": t.y} for t in self.tiles],
            "tileWidth": self.tile_width,
            "tileHeight": self.tile_height,
        }


def get_png_name(icon: IconDefinition) -> str:
    return f"{icon.name}.png"


def get_sheet_name(index: int) -> str:
    return f"icons_{index}.png"
