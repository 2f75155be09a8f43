"""layer_export_service.py のテスト。"""

from pathlib import Path

import numpy as np

from riso_palette_dither.application.layer_export_service import export_layers, save_layers
from riso_palette_dither.application.palette_builder import build_palette
from riso_palette_dither.infrastructure.image_io import buffer_from_array, load_image

COLORS = ("black", "orange", "blue", "pink", "red")


def _quantized() -> np.ndarray:
    """1x6 画像。ピクセル k がパレット index k の色。"""
    palette = build_palette(*COLORS)
    rgb = np.array([[c.to_tuple() for c in palette]], dtype=np.uint8)
    alpha = np.full((1, 6, 1), 255, dtype=np.uint8)
    return np.concatenate([rgb, alpha], axis=-1)


class TestExportLayers:
    def setup_method(self) -> None:
        self.palette = build_palette(*COLORS)
        self.image = _quantized()

    def test_labels_with_names(self) -> None:
        layers = export_layers(self.image, self.palette, COLORS)
        assert [label for label, _ in layers] == [
            "1-black", "2-orange", "3-blue", "4-pink", "5-red",
        ]

    def test_labels_default_to_hex(self) -> None:
        layers = export_layers(self.image, self.palette)
        assert [label for label, _ in layers] == [
            "1-#000000", "2-#ffa500", "3-#0000ff", "4-#ffc0cb", "5-#ff0000",
        ]

    def test_accepts_pixel_buffer(self) -> None:
        layers = export_layers(buffer_from_array(self.image), self.palette, COLORS)
        assert len(layers) == 5

    def test_each_layer_marks_its_ink(self) -> None:
        layers = export_layers(self.image, self.palette, COLORS)
        for k, (_, mask) in enumerate(layers, start=1):
            for x in range(6):
                expected = (0, 0, 0, 255) if x == k else (255, 255, 255, 255)
                assert mask.pixel(x, 0) == expected


class TestSaveLayers:
    def test_files_written(self, tmp_path: Path) -> None:
        palette = build_palette(*COLORS)
        layers = export_layers(_quantized(), palette, COLORS)
        paths = save_layers(layers, tmp_path)

        assert [p.name for p in paths] == [
            "risograph-layer-1-black.png",
            "risograph-layer-2-orange.png",
            "risograph-layer-3-blue.png",
            "risograph-layer-4-pink.png",
            "risograph-layer-5-red.png",
        ]
        for path in paths:
            assert path.exists()

    def test_saved_mask_content(self, tmp_path: Path) -> None:
        palette = build_palette(*COLORS)
        layers = export_layers(_quantized(), palette, COLORS)
        paths = save_layers(layers, tmp_path / "out", prefix="layer")

        loaded = load_image(paths[0])
        assert loaded.shape == (1, 6, 4)
        np.testing.assert_array_equal(loaded[0, 1], [0, 0, 0, 255])
        np.testing.assert_array_equal(loaded[0, 0], [255, 255, 255, 255])

    def test_hex_label_is_filename_safe(self, tmp_path: Path) -> None:
        palette = build_palette(*COLORS)
        layers = export_layers(_quantized(), palette)
        paths = save_layers(layers, tmp_path)
        assert paths[0].name == "risograph-layer-1-_000000.png"
