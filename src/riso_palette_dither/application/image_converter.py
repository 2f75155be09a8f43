"""画像変換パイプライン。

リサイズ→画像調整→ディザリング→出力の一連処理。
進捗コールバック対応。
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import numpy as np
import numpy.typing as npt

from riso_palette_dither.application.dither_service import DitherService
from riso_palette_dither.application.layer_export_service import export_layers
from riso_palette_dither.domain.image_model import ImageAdjustments, ImageSpec, PixelBuffer
from riso_palette_dither.infrastructure.adjustments import apply_adjustments
from riso_palette_dither.infrastructure.image_io import load_image, resize_image, save_image


ProgressCallback = Callable[[str, float], None]
"""進捗コールバック: (stage_name, progress_0_to_1)"""


class ImageConverter:
    """画像変換パイプライン。"""

    def __init__(self, dither_service: DitherService | None = None) -> None:
        self._dither_service = dither_service or DitherService()
        self._contrast: float = 100.0
        self._saturation: float = 100.0
        self._brightness: float = 100.0
        self._hue: float = 0.0

    @property
    def dither_service(self) -> DitherService:
        return self._dither_service

    @property
    def contrast(self) -> float:
        return self._contrast

    @contrast.setter
    def contrast(self, value: float) -> None:
        self._contrast = max(0.0, min(300.0, value))

    @property
    def saturation(self) -> float:
        return self._saturation

    @saturation.setter
    def saturation(self, value: float) -> None:
        self._saturation = max(0.0, min(300.0, value))

    @property
    def brightness(self) -> float:
        return self._brightness

    @brightness.setter
    def brightness(self, value: float) -> None:
        self._brightness = max(0.0, min(300.0, value))

    @property
    def hue(self) -> float:
        return self._hue

    @hue.setter
    def hue(self, value: float) -> None:
        self._hue = max(0.0, min(360.0, value))

    @property
    def adjustments(self) -> ImageAdjustments:
        return ImageAdjustments(
            contrast=self._contrast,
            saturation=self._saturation,
            brightness=self._brightness,
            hue=self._hue,
        )

    def convert_array(
        self,
        rgba_array: npt.NDArray[np.uint8],
        spec: ImageSpec,
        progress: ProgressCallback | None = None,
    ) -> npt.NDArray[np.uint8]:
        """NumPy配列を変換。

        Args:
            rgba_array: (H, W, 4) または (H, W, 3) の uint8 配列
            spec: 変換仕様
            progress: 進捗コールバック

        Returns:
            ディザリング済みの (H, W, 4) uint8 配列
        """
        # パレット未設定ならリサイズ前に失敗させる
        config = self._dither_service.config

        def _report(stage: str, value: float) -> None:
            if progress:
                progress(stage, value)

        _report("リサイズ中...", 0.0)
        resized = resize_image(
            rgba_array, spec.target_width, spec.target_height, spec.keep_aspect_ratio,
        )

        _report("画像調整中...", 0.2)
        adjusted = apply_adjustments(resized, self.adjustments)

        _report(f"ディザリング中 ({config.method.label})...", 0.4)
        result = self._dither_service.dither_array(adjusted)

        _report("完了", 1.0)
        return result

    def convert(
        self,
        input_path: str | Path,
        spec: ImageSpec,
        output_path: str | Path | None = None,
        progress: ProgressCallback | None = None,
    ) -> npt.NDArray[np.uint8]:
        """ファイルから画像を読み込み変換。output_path 指定時は保存もする。"""
        image = load_image(input_path)
        result = self.convert_array(image, spec, progress)
        if output_path is not None:
            save_image(result, output_path)
        return result

    def export_layers(
        self,
        dithered: npt.NDArray[np.uint8],
    ) -> list[tuple[str, PixelBuffer]]:
        """ディザリング済み画像を現在のパレットでレイヤー分解。"""
        config = self._dither_service.config
        return export_layers(dithered, config.palette, config.ink_names)
