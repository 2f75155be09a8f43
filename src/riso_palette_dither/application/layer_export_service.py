"""リソグラフ用レイヤー書き出しユースケース。

ディザリング済み画像をインク色ごとのマスクに分け、
"<index>-<色名>" のラベルを付けて返す。ファイル保存は save_layers。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import numpy as np
import numpy.typing as npt

from riso_palette_dither.domain.color import RGB
from riso_palette_dither.domain.image_model import PixelBuffer
from riso_palette_dither.domain.layers import layer_label, separate_layers
from riso_palette_dither.infrastructure.image_io import (
    array_from_buffer,
    buffer_from_array,
    save_image,
)

logger = logging.getLogger(__name__)

DEFAULT_LAYER_PREFIX = "risograph-layer"


def export_layers(
    buffer: PixelBuffer | npt.NDArray[np.uint8],
    palette: Sequence[RGB],
    ink_names: Sequence[str] | None = None,
) -> list[tuple[str, PixelBuffer]]:
    """ラベル付きのインクレイヤーを返す。

    Args:
        buffer: ディザリング済みの PixelBuffer または (H, W, 4) 配列
        palette: index 0 が紙の白のパレット
        ink_names: index 1〜5 の色名。省略時は16進表記

    Returns:
        [("1-black", mask), ("2-orange", mask), ...]
    """
    if not isinstance(buffer, PixelBuffer):
        buffer = buffer_from_array(buffer)

    inks = palette[1:]
    if ink_names is None or len(ink_names) != len(inks):
        ink_names = [c.to_hex() for c in inks]

    masks = separate_layers(buffer, palette)
    return [
        (layer_label(i, name), mask)
        for i, (name, mask) in enumerate(zip(ink_names, masks), start=1)
    ]


def save_layers(
    layers: Sequence[tuple[str, PixelBuffer]],
    directory: str | Path,
    prefix: str = DEFAULT_LAYER_PREFIX,
) -> list[Path]:
    """レイヤーを "<prefix>-<label>.png" として保存。

    Returns:
        保存したファイルパス（レイヤー順）
    """
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)

    paths: list[Path] = []
    for label, mask in layers:
        path = out_dir / f"{prefix}-{_safe_filename(label)}.png"
        save_image(array_from_buffer(mask), path)
        paths.append(path)

    logger.info("Exported %d risograph layers to %s", len(paths), out_dir)
    return paths


def _safe_filename(label: str) -> str:
    # "#ff8800" や "rgb(1, 2, 3)" をファイル名に使える形へ
    return "".join(c if c.isalnum() or c in "-_" else "_" for c in label)
