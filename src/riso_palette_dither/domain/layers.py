"""印刷レイヤー分解。

量子化済みバッファをインク色ごとの 2 値マスクに分ける。
インクあり = 不透明の黒、インクなし = 不透明の白。
"""

from __future__ import annotations

from typing import Sequence

from riso_palette_dither.domain.color import RGB
from riso_palette_dither.domain.image_model import PixelBuffer

INK_PIXEL = bytes((0, 0, 0, 255))
PAPER_PIXEL = bytes((255, 255, 255, 255))


def layer_mask(buffer: PixelBuffer, target: RGB) -> PixelBuffer:
    """target と RGB が完全一致するピクセルだけ黒にしたマスクを作る。

    許容誤差なしの完全一致。パレット外の色はどのレイヤーにも入らない。
    """
    data = buffer.data
    tr, tg, tb = target.to_tuple()
    out = bytearray(PAPER_PIXEL * (buffer.width * buffer.height))

    for i in range(0, len(data), 4):
        if data[i] == tr and data[i + 1] == tg and data[i + 2] == tb:
            out[i:i + 4] = INK_PIXEL

    return PixelBuffer(out, buffer.width, buffer.height)


def separate_layers(buffer: PixelBuffer, palette: Sequence[RGB]) -> list[PixelBuffer]:
    """パレット index 1〜5 の順に、インクごとのマスクを返す。

    Args:
        buffer: パレット色のみで構成された RGBA バッファ
        palette: index 0 が紙の白のパレット

    Returns:
        len(palette) - 1 枚のマスク（紙の白は含まない）
    """
    return [layer_mask(buffer, color) for color in palette[1:]]


def layer_label(index: int, name: str) -> str:
    """レイヤー名 "<index>-<色名>"。"""
    return f"{index}-{name}"
