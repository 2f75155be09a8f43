"""画像ドメインモデル。"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


CHANNELS = 4


@dataclass
class PixelBuffer:
    """RGBA 8bit のフラットなピクセル列（行優先）。

    canvas の ImageData と同じレイアウト。
    ピクセル (x, y) の先頭は (y * width + x) * 4。
    """

    data: bytearray
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"不正なサイズ: {self.width}x{self.height}")
        expected = self.width * self.height * CHANNELS
        if len(self.data) != expected:
            raise ValueError(
                f"バッファ長が一致しません: {len(self.data)} != "
                f"{self.width}x{self.height}x{CHANNELS} ({expected})"
            )

    @classmethod
    def blank(
        cls,
        width: int,
        height: int,
        fill: tuple[int, int, int, int] = (255, 255, 255, 255),
    ) -> PixelBuffer:
        """単色で塗りつぶしたバッファを作る。"""
        return cls(bytearray(bytes(fill) * (width * height)), width, height)

    def index(self, x: int, y: int) -> int:
        return (y * self.width + x) * CHANNELS

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        i = self.index(x, y)
        d = self.data
        return (d[i], d[i + 1], d[i + 2], d[i + 3])

    def copy(self) -> PixelBuffer:
        return PixelBuffer(bytearray(self.data), self.width, self.height)


class DitherMethod(Enum):
    """ディザリング方式。threshold 以外は誤差拡散カーネル名。"""

    FLOYD_STEINBERG = "floyd-steinberg"
    ATKINSON = "atkinson"
    BURKES = "burkes"
    SIERRA = "sierra"
    STUCKI = "stucki"
    JARVIS = "jarvis"
    THRESHOLD = "threshold"

    @classmethod
    def from_name(cls, name: str | DitherMethod) -> DitherMethod:
        """名前から方式を引く。未知の名前は Floyd-Steinberg にフォールバック。"""
        if isinstance(name, DitherMethod):
            return name
        try:
            return cls(name.strip().lower())
        except (ValueError, AttributeError):
            return cls.FLOYD_STEINBERG

    @property
    def label(self) -> str:
        return _METHOD_LABELS[self]

    @property
    def is_diffusion(self) -> bool:
        return self is not DitherMethod.THRESHOLD


_METHOD_LABELS: dict[DitherMethod, str] = {
    DitherMethod.FLOYD_STEINBERG: "Floyd-Steinberg",
    DitherMethod.ATKINSON: "Atkinson",
    DitherMethod.BURKES: "Burkes",
    DitherMethod.SIERRA: "Sierra",
    DitherMethod.STUCKI: "Stucki",
    DitherMethod.JARVIS: "Jarvis-Judice-Ninke",
    DitherMethod.THRESHOLD: "Simple Threshold",
}


@dataclass(frozen=True)
class ImageAdjustments:
    """ディザリング前の画像調整（CSS filter 相当）。

    contrast / saturation / brightness はパーセント (100 = 無変化)、
    hue は度数 (0 = 無変化)。
    """

    contrast: float = 100.0
    saturation: float = 100.0
    brightness: float = 100.0
    hue: float = 0.0

    @property
    def is_identity(self) -> bool:
        return (
            self.contrast == 100.0
            and self.saturation == 100.0
            and self.brightness == 100.0
            and self.hue % 360.0 == 0.0
        )


@dataclass
class ImageSpec:
    """画像変換の仕様。"""

    target_width: int
    target_height: int
    keep_aspect_ratio: bool = True

    def __post_init__(self) -> None:
        if self.target_width <= 0 or self.target_height <= 0:
            raise ValueError(
                f"出力サイズは正の整数が必要です: {self.target_width}x{self.target_height}"
            )
