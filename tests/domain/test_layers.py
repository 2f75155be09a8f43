"""layers.py のテスト。"""

from riso_palette_dither.domain.color import RGB, make_palette
from riso_palette_dither.domain.image_model import PixelBuffer
from riso_palette_dither.domain.layers import layer_label, layer_mask, separate_layers

PALETTE = make_palette([
    RGB(0, 0, 0), RGB(255, 165, 0), RGB(0, 0, 255), RGB(255, 192, 203), RGB(255, 0, 0),
])

BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)


def _palette_image() -> PixelBuffer:
    """3x2 画像。ピクセル k がパレット index k の色。"""
    data = bytearray()
    for color in PALETTE:
        data += bytes(color.to_tuple() + (255,))
    return PixelBuffer(data, 3, 2)


def _ink_pixels(mask: PixelBuffer) -> set[int]:
    return {
        i // 4 for i in range(0, len(mask.data), 4)
        if tuple(mask.data[i:i + 4]) == BLACK
    }


class TestSeparateLayers:
    def setup_method(self) -> None:
        self.image = _palette_image()
        self.masks = separate_layers(self.image, PALETTE)

    def test_one_mask_per_ink(self) -> None:
        assert len(self.masks) == 5
        for mask in self.masks:
            assert (mask.width, mask.height) == (3, 2)

    def test_masks_are_binary_and_opaque(self) -> None:
        for mask in self.masks:
            for i in range(0, len(mask.data), 4):
                assert tuple(mask.data[i:i + 4]) in (BLACK, WHITE)

    def test_mask_order_matches_palette(self) -> None:
        for k, mask in enumerate(self.masks, start=1):
            assert _ink_pixels(mask) == {k}

    def test_union_covers_non_paper_pixels_exclusively(self) -> None:
        seen: list[int] = []
        for mask in self.masks:
            seen.extend(_ink_pixels(mask))
        assert sorted(seen) == [1, 2, 3, 4, 5]
        assert len(seen) == len(set(seen))

    def test_source_untouched(self) -> None:
        assert bytes(self.image.data) == bytes(_palette_image().data)

    def test_non_palette_pixel_in_no_layer(self) -> None:
        image = PixelBuffer(bytearray([12, 34, 56, 255]), 1, 1)
        for mask in separate_layers(image, PALETTE):
            assert mask.pixel(0, 0) == WHITE

    def test_duplicate_inks_give_duplicate_masks(self) -> None:
        palette = make_palette([RGB(0, 0, 0), RGB(0, 0, 0), RGB(0, 0, 255), RGB(0, 255, 0), RGB(255, 0, 0)])
        image = PixelBuffer(bytearray([0, 0, 0, 255, 255, 255, 255, 255]), 2, 1)
        masks = separate_layers(image, palette)
        assert bytes(masks[0].data) == bytes(masks[1].data)
        assert masks[0].pixel(0, 0) == BLACK

    def test_exact_match_only(self) -> None:
        image = PixelBuffer(bytearray([1, 0, 0, 255]), 1, 1)
        assert layer_mask(image, RGB(0, 0, 0)).pixel(0, 0) == WHITE

    def test_alpha_ignored_for_matching(self) -> None:
        image = PixelBuffer(bytearray([0, 0, 0, 0]), 1, 1)
        assert layer_mask(image, RGB(0, 0, 0)).pixel(0, 0) == BLACK


class TestLayerLabel:
    def test_label(self) -> None:
        assert layer_label(1, "black") == "1-black"
        assert layer_label(5, "#ff0000") == "5-#ff0000"
