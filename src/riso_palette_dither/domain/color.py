"""リソグラフ用パレット定義と色距離計算。

Pure Pythonで実装（外部ライブラリ依存なし）。
パレットは常に 6 色: index 0 が紙の白、1〜5 がインク色。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True)
class RGB:
    """RGB色空間の色。各チャンネル 0-255。"""

    r: int
    g: int
    b: int

    def to_tuple(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


Palette = Tuple[RGB, ...]
"""紙の白 + インク 5 色の計 6 色。"""

# --- 紙（インクなし） ---

PAPER_WHITE = RGB(255, 255, 255)

INK_COUNT = 5
PALETTE_SIZE = INK_COUNT + 1


def make_palette(inks: Sequence[RGB]) -> Palette:
    """インク 5 色の先頭に紙の白を付けたパレットを作る。

    Args:
        inks: インク色（順序がそのままレイヤー番号になる）

    Returns:
        長さ 6 のパレット
    """
    if len(inks) != INK_COUNT:
        raise ValueError(f"インク色は {INK_COUNT} 色必要です (指定: {len(inks)} 色)")
    return (PAPER_WHITE, *inks)


def color_distance(a: RGB, b: RGB) -> float:
    """RGB空間のユークリッド距離。"""
    return math.sqrt((a.r - b.r) ** 2 + (a.g - b.g) ** 2 + (a.b - b.b) ** 2)


def nearest_index_rgb(
    r: int,
    g: int,
    b: int,
    palette_rgb: Sequence[tuple[int, int, int]],
) -> int:
    """タプル化済みパレットに対する最近傍検索。ディザリングループ用。

    二乗距離で比較する（sqrt は単調なので順位・同点は変わらない）。
    同距離の場合は index の小さい方を返す。
    """
    best_idx = 0
    pr, pg, pb = palette_rgb[0]
    best_dist = (r - pr) ** 2 + (g - pg) ** 2 + (b - pb) ** 2

    for i in range(1, len(palette_rgb)):
        pr, pg, pb = palette_rgb[i]
        dist = (r - pr) ** 2 + (g - pg) ** 2 + (b - pb) ** 2
        if dist < best_dist:
            best_dist = dist
            best_idx = i

    return best_idx


def find_nearest_color_index(color: RGB, palette: Sequence[RGB]) -> int:
    """パレットから最も近い色のインデックスをユークリッド距離で検索。

    Args:
        color: 検索対象の色
        palette: カラーパレット

    Returns:
        最近傍色のインデックス。同距離なら先に現れた方（白が最優先）
    """
    best_idx = 0
    best_dist = color_distance(color, palette[0])

    for i in range(1, len(palette)):
        dist = color_distance(color, palette[i])
        if dist < best_dist:
            best_dist = dist
            best_idx = i

    return best_idx


def find_nearest_color(color: RGB, palette: Sequence[RGB]) -> RGB:
    """パレットから最も近い色をユークリッド距離で検索。"""
    return palette[find_nearest_color_index(color, palette)]
