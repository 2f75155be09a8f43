"""__main__.py のテスト。"""

from pathlib import Path

import numpy as np

from riso_palette_dither.__main__ import main
from riso_palette_dither.infrastructure.image_io import load_image, save_image


def _source(tmp_path: Path) -> Path:
    rng = np.random.default_rng(0)
    path = tmp_path / "in.png"
    save_image(rng.integers(0, 256, size=(12, 16, 3), dtype=np.uint8), path)
    return path


class TestMain:
    def test_writes_dithered_and_layers(self, tmp_path: Path) -> None:
        out = tmp_path / "out"
        code = main([str(_source(tmp_path)), "-o", str(out), "--size", "10", "--method", "burkes"])

        assert code == 0
        assert load_image(out / "dithered.png").shape == (10, 10, 4)
        layer_files = sorted(p.name for p in out.glob("risograph-layer-*.png"))
        assert layer_files == [
            "risograph-layer-1-black.png",
            "risograph-layer-2-orange.png",
            "risograph-layer-3-blue.png",
            "risograph-layer-4-pink.png",
            "risograph-layer-5-red.png",
        ]

    def test_no_layers(self, tmp_path: Path) -> None:
        out = tmp_path / "out"
        code = main([str(_source(tmp_path)), "-o", str(out), "--size", "8", "--no-layers"])
        assert code == 0
        assert (out / "dithered.png").exists()
        assert not list(out.glob("risograph-layer-*.png"))

    def test_custom_colors(self, tmp_path: Path) -> None:
        out = tmp_path / "out"
        code = main([
            str(_source(tmp_path)), "-o", str(out), "--size", "8", "--method", "threshold",
            "--colors", "black", "#ff0000", "#00ff00", "#0000ff", "yellow",
        ])
        assert code == 0
        assert (out / "risograph-layer-2-_ff0000.png").exists()

    def test_unknown_color_fails(self, tmp_path: Path) -> None:
        code = main([
            str(_source(tmp_path)), "-o", str(tmp_path / "out"),
            "--colors", "black", "nope", "blue", "pink", "red",
        ])
        assert code == 1

    def test_missing_input_fails(self, tmp_path: Path) -> None:
        code = main([str(tmp_path / "missing.png"), "-o", str(tmp_path / "out")])
        assert code == 1

    def test_non_positive_size_fails(self, tmp_path: Path) -> None:
        source = _source(tmp_path)
        assert main([str(source), "-o", str(tmp_path / "out"), "--size", "0"]) == 1
        assert main([str(source), "-o", str(tmp_path / "out"), "--size", "-3"]) == 1
        assert not (tmp_path / "out" / "dithered.png").exists()

    def test_transparent_input_is_paper(self, tmp_path: Path) -> None:
        source = tmp_path / "clear.png"
        save_image(np.zeros((4, 4, 4), dtype=np.uint8), source)
        out = tmp_path / "out"
        code = main([str(source), "-o", str(out), "--size", "4", "--method", "threshold"])

        assert code == 0
        dithered = load_image(out / "dithered.png")
        assert np.all(dithered == 255)
        black = load_image(out / "risograph-layer-1-black.png")
        assert not np.any(black[..., 0] == 0)
