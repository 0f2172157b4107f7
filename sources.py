"""Load icon definitions from JSON exports of the icon libraries.

Each export maps an export name (e.g. ``faHouse``) to a record shaped like
``{"iconName": "house", "icon": [width, height, ligatures, unicode, path]}``.
Non-icon exports (prefixes, version strings, ...) are filtered out.
"""

import gzip
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from utils import IconDefinition


def load_source(path: Path) -> Dict[str, Any]:
    path = Path(path)
    if path.suffix == ".gz":
        with gzip.open(path, "rt", encoding="utf-8") as f:
            return json.load(f)
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _is_dimension(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0


def to_definition(record: Any) -> Optional[IconDefinition]:
    """Build an IconDefinition from a source record, or None if it is not an icon."""
    if not isinstance(record, Mapping) or not record.get("iconName"):
        return None
    if not isinstance(record["iconName"], str):
        return None

    icon = record.get("icon")
    if not isinstance(icon, (list, tuple)) or len(icon) < 5:
        return None

    width, height, _ligatures, _unicode, path = icon[:5]
    # Multi-path (duotone) icons carry a list of paths.
    if isinstance(path, (list, tuple)):
        path = " ".join(p for p in path if isinstance(p, str) and p)

    if not isinstance(path, str) or not path:
        return None
    if not all(_is_dimension(v) for v in (width, height)):
        return None

    return IconDefinition(
        name=record["iconName"], width=width, height=height, path=path
    )


def get_only_icons(*libraries: Mapping[str, Any]) -> Tuple[IconDefinition, ...]:
    """Merge the libraries (later ones win on the same key) and keep only icons."""
    merged: Dict[str, Any] = {}
    for library in libraries:
        merged.update(library)

    icons = []
    skipped = 0
    for record in merged.values():
        icon = to_definition(record)
        if icon is None:
            skipped += 1
            continue
        icons.append(icon)

    if skipped:
        logging.debug(f"Skipped {skipped} entries that are not icons.")

    return tuple(icons)


def load_icons(paths: Iterable[Path]) -> Tuple[IconDefinition, ...]:
    libraries = []
    for path in paths:
        logging.debug(f"Loading icon source {path}")
        libraries.append(load_source(path))
    return get_only_icons(*libraries)
