"""画像I/O（Pillow ベース）。

画像の読み込み、保存、リサイズと、ドメインの PixelBuffer との相互変換を担当。
配列はすべて (H, W, 4) の RGBA uint8。
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image

from riso_palette_dither.domain.image_model import PixelBuffer

PAPER_RGBA = (255, 255, 255, 255)
"""用紙の色。透過ピクセルはこの上に合成する。"""


def ensure_rgba(array: npt.NDArray[np.uint8]) -> npt.NDArray[np.uint8]:
    """(H, W, 3) なら不透明アルファを付けて (H, W, 4) にする。"""
    if array.ndim != 3 or array.shape[2] not in (3, 4):
        raise ValueError(f"(H, W, 3) または (H, W, 4) の配列が必要です: {array.shape}")
    if array.shape[2] == 4:
        return array
    alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
    return np.concatenate([array, alpha], axis=-1)


def load_image(path: str | Path) -> npt.NDArray[np.uint8]:
    """画像ファイルを読み込み、RGBA配列として返す。

    Args:
        path: 画像ファイルパス (JPEG, PNG等)

    Returns:
        (H, W, 4) の uint8 配列 (RGBA)
    """
    with Image.open(path) as img:
        img = img.convert("RGBA")
        return np.array(img, dtype=np.uint8)


def save_image(array: npt.NDArray[np.uint8], path: str | Path) -> None:
    """RGBA または RGB 配列を画像ファイルとして保存。

    Args:
        array: (H, W, 4) または (H, W, 3) の uint8 配列
        path: 保存先パス (PNG等)
    """
    img = Image.fromarray(np.ascontiguousarray(array, dtype=np.uint8))
    img.save(path)


def resize_image(
    array: npt.NDArray[np.uint8],
    target_width: int,
    target_height: int,
    keep_aspect_ratio: bool = True,
) -> npt.NDArray[np.uint8]:
    """画像をリサイズ。

    Args:
        array: (H, W, 4) または (H, W, 3) の uint8 配列
        target_width: 目標幅
        target_height: 目標高さ
        keep_aspect_ratio: アスペクト比を維持するか

    Returns:
        リサイズ済みの (target_height, target_width, 4) uint8 配列。
        透過部分は白い紙の上に合成され、アルファは常に 255。
    """
    if target_width <= 0 or target_height <= 0:
        raise ValueError(f"出力サイズは正の整数が必要です: {target_width}x{target_height}")

    img = Image.fromarray(np.ascontiguousarray(ensure_rgba(array)))
    canvas = Image.new("RGBA", (target_width, target_height), PAPER_RGBA)

    if keep_aspect_ratio:
        img.thumbnail((target_width, target_height), Image.Resampling.LANCZOS)
        # 目標サイズのキャンバスに中央配置
        offset_x = (target_width - img.width) // 2
        offset_y = (target_height - img.height) // 2
        canvas.alpha_composite(img, (offset_x, offset_y))
    else:
        img = img.resize((target_width, target_height), Image.Resampling.LANCZOS)
        canvas.alpha_composite(img)
    return np.array(canvas, dtype=np.uint8)


def buffer_from_array(array: npt.NDArray[np.uint8]) -> PixelBuffer:
    """NumPy配列から独立した PixelBuffer を作る（コピー）。"""
    if array.dtype != np.uint8:
        raise ValueError(f"uint8 配列が必要です: {array.dtype}")
    rgba = ensure_rgba(array)
    h, w = rgba.shape[:2]
    return PixelBuffer(bytearray(np.ascontiguousarray(rgba).tobytes()), w, h)


def array_from_buffer(buffer: PixelBuffer) -> npt.NDArray[np.uint8]:
    """PixelBuffer から (H, W, 4) の uint8 配列を作る（コピー）。"""
    flat = np.frombuffer(bytes(buffer.data), dtype=np.uint8)
    return flat.reshape(buffer.height, buffer.width, 4).copy()
