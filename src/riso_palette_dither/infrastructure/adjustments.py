"""画像調整（CSS filter 相当、NumPyベース）。

saturate() → brightness() → contrast() → hue-rotate() の順に適用する。
行列は W3C Filter Effects の定義に従い、各段で [0, 1] にクランプする。
"""

from __future__ import annotations

import math

import numpy as np
import numpy.typing as npt

from riso_palette_dither.domain.image_model import ImageAdjustments

# 輝度係数 (Filter Effects の feColorMatrix 定義)
_LUM_R = 0.213
_LUM_G = 0.715
_LUM_B = 0.072


def saturate_matrix(amount: float) -> npt.NDArray[np.float64]:
    """saturate(amount) の 3x3 行列。amount=1 で恒等。"""
    s = amount
    return np.array([
        [_LUM_R + (1.0 - _LUM_R) * s, _LUM_G - _LUM_G * s, _LUM_B - _LUM_B * s],
        [_LUM_R - _LUM_R * s, _LUM_G + (1.0 - _LUM_G) * s, _LUM_B - _LUM_B * s],
        [_LUM_R - _LUM_R * s, _LUM_G - _LUM_G * s, _LUM_B + (1.0 - _LUM_B) * s],
    ], dtype=np.float64)


def hue_rotate_matrix(degrees: float) -> npt.NDArray[np.float64]:
    """hue-rotate(degrees) の 3x3 行列。"""
    rad = math.radians(degrees)
    c = math.cos(rad)
    s = math.sin(rad)
    return np.array([
        [0.213 + c * 0.787 - s * 0.213, 0.715 - c * 0.715 - s * 0.715, 0.072 - c * 0.072 + s * 0.928],
        [0.213 - c * 0.213 + s * 0.143, 0.715 + c * 0.285 + s * 0.140, 0.072 - c * 0.072 - s * 0.283],
        [0.213 - c * 0.213 - s * 0.787, 0.715 - c * 0.715 + s * 0.715, 0.072 + c * 0.928 + s * 0.072],
    ], dtype=np.float64)


def _apply_matrix(
    rgb: npt.NDArray[np.float64],
    matrix: npt.NDArray[np.float64],
) -> npt.NDArray[np.float64]:
    # (H, W, 3) @ (3, 3)^T
    return np.clip(rgb @ matrix.T, 0.0, 1.0)


def apply_adjustments(
    rgba_array: npt.NDArray[np.uint8],
    adjustments: ImageAdjustments,
) -> npt.NDArray[np.uint8]:
    """画像調整を適用。

    Args:
        rgba_array: (H, W, 4) の uint8 配列 (RGBA)
        adjustments: 調整値（パーセント / 度数）

    Returns:
        (H, W, 4) の uint8 配列。アルファは入力のまま
    """
    if adjustments.is_identity:
        return rgba_array.copy()

    rgb = rgba_array[..., :3].astype(np.float64) / 255.0

    if adjustments.saturation != 100.0:
        rgb = _apply_matrix(rgb, saturate_matrix(adjustments.saturation / 100.0))

    if adjustments.brightness != 100.0:
        rgb = np.clip(rgb * (adjustments.brightness / 100.0), 0.0, 1.0)

    if adjustments.contrast != 100.0:
        k = adjustments.contrast / 100.0
        rgb = np.clip((rgb - 0.5) * k + 0.5, 0.0, 1.0)

    if adjustments.hue % 360.0 != 0.0:
        rgb = _apply_matrix(rgb, hue_rotate_matrix(adjustments.hue))

    result = rgba_array.copy()
    result[..., :3] = np.clip(rgb * 255.0 + 0.5, 0, 255).astype(np.uint8)
    return result
