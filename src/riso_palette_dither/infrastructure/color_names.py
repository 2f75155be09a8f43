"""色指定の解決（Pillow ImageColor ベース）。

"#RRGGBB" / "#RGB" / CSS色名 / "rgb(...)" / "hsl(...)" を RGB に変換する。
"""

from __future__ import annotations

from PIL import ImageColor

from riso_palette_dither.domain.color import RGB


def resolve_color(spec: str | RGB) -> RGB:
    """色指定を RGB に解決する。

    Args:
        spec: 色指定文字列、または解決済みの RGB

    Returns:
        RGB（アルファ成分は捨てる）

    Raises:
        ValueError: 解決できない色指定
    """
    if isinstance(spec, RGB):
        return spec
    try:
        rgb = ImageColor.getrgb(spec.strip())
    except (ValueError, AttributeError) as exc:
        raise ValueError(f"色指定を解決できません: {spec!r}") from exc
    return RGB(rgb[0], rgb[1], rgb[2])
