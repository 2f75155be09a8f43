"""ディザリング実行ユースケース。

現在のパレットと方式でフレームをディザリングするサービス。
パレット・方式は DitherConfig にまとめ、各呼び出しに明示的に渡せる。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from riso_palette_dither.application.palette_builder import build_palette, ink_name
from riso_palette_dither.domain.color import RGB, Palette
from riso_palette_dither.domain.dithering import algorithm_for
from riso_palette_dither.domain.image_model import DitherMethod, PixelBuffer
from riso_palette_dither.infrastructure.image_io import (
    array_from_buffer,
    buffer_from_array,
    ensure_rgba,
)
from riso_palette_dither.infrastructure.palette_quantize import quantize_array

logger = logging.getLogger(__name__)


class PaletteNotSetError(RuntimeError):
    """パレット未設定のままディザリングを要求された。"""


@dataclass(frozen=True)
class DitherConfig:
    """1 回のディザリングに必要な設定一式。"""

    palette: Palette
    method: DitherMethod = DitherMethod.FLOYD_STEINBERG
    ink_names: tuple[str, ...] = ()


def apply_dithering(buffer: PixelBuffer, config: DitherConfig) -> PixelBuffer:
    """buffer を in-place でディザリング。

    Args:
        buffer: RGBA ピクセルバッファ（書き換えられる）
        config: パレットと方式

    Returns:
        同じ buffer
    """
    return algorithm_for(config.method).dither(buffer, config.palette)


def dither_array(
    rgba_array: npt.NDArray[np.uint8],
    config: DitherConfig,
) -> npt.NDArray[np.uint8]:
    """NumPy配列に対してディザリングを実行。入力は変更しない。

    しきい値モードは NumPy で一括処理し、誤差拡散は
    作業用コピーの PixelBuffer に domain 層の実装を適用する。

    Args:
        rgba_array: (H, W, 4) または (H, W, 3) の uint8 配列
        config: パレットと方式

    Returns:
        ディザリング済みの (H, W, 4) uint8 配列

    Raises:
        ValueError: uint8 以外の配列
    """
    if rgba_array.dtype != np.uint8:
        raise ValueError(f"uint8 配列が必要です: {rgba_array.dtype}")

    if config.method is DitherMethod.THRESHOLD:
        return quantize_array(ensure_rgba(rgba_array), config.palette)

    work = buffer_from_array(rgba_array)
    apply_dithering(work, config)
    return array_from_buffer(work)


class DitherService:
    """ディザリングサービス。現在のパレットと方式を保持する。"""

    def __init__(self, method: DitherMethod | str = DitherMethod.FLOYD_STEINBERG) -> None:
        self._palette: Palette | None = None
        self._ink_names: tuple[str, ...] = ()
        self._method = DitherMethod.from_name(method)

    @property
    def palette(self) -> Palette | None:
        return self._palette

    @property
    def ink_names(self) -> tuple[str, ...]:
        return self._ink_names

    @property
    def method(self) -> DitherMethod:
        return self._method

    def set_palette(
        self,
        color1: str | RGB,
        color2: str | RGB,
        color3: str | RGB,
        color4: str | RGB,
        color5: str | RGB,
    ) -> Palette:
        """インク 5 色からパレットを再構築して保持。"""
        specs = (color1, color2, color3, color4, color5)
        self._palette = build_palette(*specs)
        self._ink_names = tuple(ink_name(s) for s in specs)
        logger.debug(
            "Palette updated: %s -> %s",
            self._ink_names,
            [c.to_hex() for c in self._palette],
        )
        return self._palette

    def set_dither_method(self, name: DitherMethod | str) -> DitherMethod:
        """方式を設定。未知の名前は Floyd-Steinberg にフォールバック。"""
        method = DitherMethod.from_name(name)
        if not isinstance(name, DitherMethod) and method.value != str(name).strip().lower():
            logger.warning(
                "Unknown dither method %r, falling back to %s", name, method.value,
            )
        self._method = method
        return method

    @property
    def config(self) -> DitherConfig:
        """現在の設定のスナップショット。

        Raises:
            PaletteNotSetError: set_palette() が未実行
        """
        if self._palette is None:
            raise PaletteNotSetError("パレットが未設定です。先に set_palette() を呼んでください。")
        return DitherConfig(self._palette, self._method, self._ink_names)

    def apply_dithering(self, buffer: PixelBuffer) -> PixelBuffer:
        """現在の方式・パレットで buffer を in-place ディザリング。"""
        config = self.config
        logger.debug("Dithering with method: %s", config.method.value)
        return apply_dithering(buffer, config)

    def dither_array(self, rgba_array: npt.NDArray[np.uint8]) -> npt.NDArray[np.uint8]:
        """現在の方式・パレットで配列のコピーをディザリング。"""
        config = self.config
        logger.debug("Dithering with method: %s", config.method.value)
        return dither_array(rgba_array, config)
