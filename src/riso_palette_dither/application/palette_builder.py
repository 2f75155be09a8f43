"""パレット構築ユースケース。

設定されたインク 5 色（色指定文字列）から 6 色パレットを作る。
"""

from __future__ import annotations

from riso_palette_dither.domain.color import RGB, Palette, make_palette
from riso_palette_dither.infrastructure.color_names import resolve_color


def build_palette(
    color1: str | RGB,
    color2: str | RGB,
    color3: str | RGB,
    color4: str | RGB,
    color5: str | RGB,
) -> Palette:
    """インク 5 色から紙の白 + 5 色のパレットを構築。

    Args:
        color1〜color5: "#RRGGBB" や CSS 色名などの色指定

    Returns:
        index 0 が (255, 255, 255) の長さ 6 のパレット

    Raises:
        ValueError: 解決できない色指定が含まれる
    """
    return make_palette([
        resolve_color(spec) for spec in (color1, color2, color3, color4, color5)
    ])


def ink_name(spec: str | RGB) -> str:
    """レイヤー名に使う色名。文字列指定はそのまま、RGB は16進表記。"""
    if isinstance(spec, RGB):
        return spec.to_hex()
    return spec.strip()
