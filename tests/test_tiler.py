import argparse
import json
import tempfile
import unittest
from pathlib import Path

from PIL import Image

from tiler import MANIFEST_NAME, batched, build_sheets, main, sheet_count, write_manifest
from sources import get_only_icons
from svg import render_icons
from utils import RenderedIcon


def record(name):
    return {"iconName": name, "icon": [10, 10, [], "f000", "M0 0H10V10H0Z"]}


class BatchingTests(unittest.TestCase):
    def test_sheet_count_is_ceiling(self) -> None:
        self.assertEqual(sheet_count(0, 4), 0)
        self.assertEqual(sheet_count(4, 4), 1)
        self.assertEqual(sheet_count(5, 4), 2)
        self.assertEqual(sheet_count(8, 4), 2)

    def test_batches_fill_all_but_last(self) -> None:
        batches = list(batched(list(range(10)), 4))
        self.assertEqual([len(b) for b in batches], [4, 4, 2])
        self.assertEqual([x for b in batches for x in b], list(range(10)))

        full = list(batched(list(range(8)), 4))
        self.assertEqual([len(b) for b in full], [4, 4])


class BuildSheetsTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.out = Path(self._tmp.name)
        self.icon_dir = self.out / "icons"
        self.icon_dir.mkdir()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _tiles(self, names):
        rendered = []
        for name in names:
            path = self.icon_dir / f"{name}.png"
            Image.new("RGBA", (64, 64), (255, 255, 255, 255)).save(path)
            rendered.append(RenderedIcon(name=name, path=path))
        return rendered

    def test_five_icons_make_two_sheets(self) -> None:
        sheets = build_sheets(self._tiles("abcde"), self.out, 64, 128)

        self.assertEqual([s.filename for s in sheets], ["icons_0.png", "icons_1.png"])
        self.assertEqual(len(sheets[0].tiles), 4)
        self.assertEqual(
            [(t.name, t.x, t.y) for t in sheets[1].tiles], [("e", 0, 0)]
        )

    def test_manifest_matches_written_sheets(self) -> None:
        names = [f"i{n}" for n in range(9)]
        sheets = build_sheets(self._tiles(names), self.out, 64, 128)
        manifest = write_manifest(sheets, self.out)

        self.assertEqual(manifest, self.out / MANIFEST_NAME)
        data = json.loads(manifest.read_text())
        self.assertEqual(len(data), 3)

        seen = []
        for entry in data:
            self.assertEqual(
                set(entry), {"filename", "width", "height", "tiles", "tileWidth", "tileHeight"}
            )
            self.assertEqual(entry["tileWidth"], 64)
            self.assertEqual(entry["tileHeight"], 64)
            self.assertTrue((self.out / entry["filename"]).is_file())
            with Image.open(self.out / entry["filename"]) as sheet:
                self.assertEqual(sheet.size, (entry["width"], entry["height"]))
            for tile in entry["tiles"]:
                self.assertLess(tile["x"], entry["width"])
                self.assertLess(tile["y"], entry["height"])
                seen.append(tile["name"])

        self.assertEqual(seen, names)


class EndToEndTests(unittest.TestCase):
    def test_duplicate_names_collapse_to_one_tile(self) -> None:
        solid = {"faA": record("a"), "faB": record("b")}
        brands = {"faAlt": record("a")}

        with tempfile.TemporaryDirectory() as td:
            out = Path(td)
            icon_dir = out / "icons"
            icon_dir.mkdir()

            icons = get_only_icons(solid, brands)
            self.assertEqual(len(icons), 3)

            rendered = render_icons(icons, icon_dir, 64)
            sheets = build_sheets(rendered, out, 64, 128)
            data = json.loads(write_manifest(sheets, out).read_text())

        self.assertEqual(len(data), 1)
        self.assertEqual(data[0]["filename"], "icons_0.png")
        self.assertEqual(
            data[0]["tiles"],
            [{"name": "a", "x": 0, "y": 0}, {"name": "b", "x": 64, "y": 0}],
        )


class MainTests(unittest.TestCase):
    def test_main_writes_icons_sheets_and_manifest(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            tmp = Path(td)
            solid = tmp / "solid.json"
            solid.write_text(json.dumps({f"fa{n}": record(f"i{n}") for n in range(4)}))
            brands = tmp / "brands.json"
            brands.write_text(json.dumps({"faI0": record("i0"), "faExtra": record("extra"), "prefix": "fab"}))
            out = tmp / "output"

            main(
                argparse.Namespace(
                    source=[solid, brands],
                    output=out,
                    tile_size=64,
                    texture_size=128,
                    workers=None,
                )
            )

            names = sorted(p.stem for p in (out / "icons").glob("*.png"))
            self.assertEqual(names, ["extra", "i0", "i1", "i2", "i3"])
            self.assertEqual(
                sorted(p.name for p in out.glob("icons_*.png")), ["icons_0.png", "icons_1.png"]
            )

            manifest = out / MANIFEST_NAME
            self.assertTrue(manifest.is_file())
            data = json.loads(manifest.read_text())
            self.assertEqual([e["filename"] for e in data], ["icons_0.png", "icons_1.png"])
            self.assertEqual([len(e["tiles"]) for e in data], [4, 1])

            tiled = sorted(t["name"] for e in data for t in e["tiles"])
            self.assertEqual(tiled, names)
            for entry in data:
                with Image.open(out / entry["filename"]) as sheet:
                    self.assertEqual(sheet.size, (128, 128))
                self.assertEqual((entry["tileWidth"], entry["tileHeight"]), (64, 64))


if __name__ == "__main__":
    unittest.main()
