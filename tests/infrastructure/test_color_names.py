"""color_names.py のテスト。"""

import pytest

from riso_palette_dither.domain.color import RGB
from riso_palette_dither.infrastructure.color_names import resolve_color


class TestResolveColor:
    def test_named_colors(self) -> None:
        assert resolve_color("black") == RGB(0, 0, 0)
        assert resolve_color("orange") == RGB(255, 165, 0)
        assert resolve_color("pink") == RGB(255, 192, 203)
        assert resolve_color("Red") == RGB(255, 0, 0)

    def test_hex(self) -> None:
        assert resolve_color("#FF8800") == RGB(255, 136, 0)
        assert resolve_color("#f80") == RGB(255, 136, 0)

    def test_alpha_dropped(self) -> None:
        assert resolve_color("#ff880080") == RGB(255, 136, 0)

    def test_rgb_function(self) -> None:
        assert resolve_color("rgb(1, 2, 3)") == RGB(1, 2, 3)

    def test_rgb_passthrough(self) -> None:
        color = RGB(9, 8, 7)
        assert resolve_color(color) is color

    def test_unknown_raises(self) -> None:
        with pytest.raises(ValueError, match="not-a-color"):
            resolve_color("not-a-color")
