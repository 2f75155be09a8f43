"""NumPyベースの一括パレット量子化（しきい値モード）。

ピクセル間に依存がないため、画像全体をまとめて最近傍検索できる。
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import numpy.typing as npt

from riso_palette_dither.domain.color import RGB


def nearest_palette_indices(
    rgb_array: npt.NDArray[np.uint8],
    palette: Sequence[RGB],
) -> npt.NDArray[np.intp]:
    """各ピクセルの最近傍パレットインデックスを返す。

    整数の二乗距離で比較し、argmin は最初の最小値を返すため
    同距離なら index の小さい方（紙の白）が選ばれる。

    Args:
        rgb_array: (H, W, 3) または (H, W, 4) の uint8 配列
        palette: カラーパレット

    Returns:
        (H, W) のインデックス配列
    """
    pal = np.array([c.to_tuple() for c in palette], dtype=np.int32)  # (P, 3)
    pixels = rgb_array[..., :3].astype(np.int32)  # (H, W, 3)

    # (H, W, 1, 3) - (P, 3) → (H, W, P)
    diff = pixels[..., np.newaxis, :] - pal
    dist_sq = np.sum(diff * diff, axis=-1)
    return np.argmin(dist_sq, axis=-1)


def quantize_array(
    rgba_array: npt.NDArray[np.uint8],
    palette: Sequence[RGB],
) -> npt.NDArray[np.uint8]:
    """RGB を最近傍のパレット色に置き換えた新しい配列を返す。アルファは保持。

    Args:
        rgba_array: (H, W, 4) の uint8 配列
        palette: カラーパレット

    Returns:
        (H, W, 4) の uint8 配列
    """
    pal = np.array([c.to_tuple() for c in palette], dtype=np.uint8)
    indices = nearest_palette_indices(rgba_array, palette)
    result = rgba_array.copy()
    result[..., :3] = pal[indices]
    return result
