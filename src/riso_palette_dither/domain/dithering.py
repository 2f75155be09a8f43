"""ディザリングアルゴリズム定義。

Protocol + しきい値 / 誤差拡散の 2 実装。
domain層のためPure Python（typing依存のみ）。
誤差拡散カーネルは名前付きの定数テーブルで、1 つの実装を共有する。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, NamedTuple, Protocol, Sequence

from riso_palette_dither.domain.color import RGB, nearest_index_rgb
from riso_palette_dither.domain.image_model import DitherMethod, PixelBuffer


class DitherAlgorithm(Protocol):
    """ディザリングアルゴリズムのProtocol。"""

    def dither(self, buffer: PixelBuffer, palette: Sequence[RGB]) -> PixelBuffer:
        """RGBAバッファを in-place でパレット色に変換。

        Args:
            buffer: RGBA ピクセルバッファ（書き換えられる）
            palette: 使用するカラーパレット

        Returns:
            同じ buffer（呼び出し側の利便のため）
        """
        ...


class DiffusionTap(NamedTuple):
    """誤差の配分先。(dx, dy) は現在ピクセルからの相対位置。"""

    dx: int
    dy: int
    weight: float


@dataclass(frozen=True)
class DiffusionKernel:
    """誤差拡散カーネル。

    タップは走査順で未処理のピクセル (dy > 0、または dy == 0 かつ dx > 0)
    のみを指す。重みの合計は 1 とは限らない（Atkinson は 3/4）。
    """

    name: str
    taps: tuple[DiffusionTap, ...]

    @property
    def total_weight(self) -> float:
        return sum(t.weight for t in self.taps)


def _kernel(name: str, divisor: int, taps: Sequence[tuple[int, int, int]]) -> DiffusionKernel:
    return DiffusionKernel(
        name,
        tuple(DiffusionTap(dx, dy, w / divisor) for dx, dy, w in taps),
    )


# Floyd-Steinberg (1976)
#         [*] [7]
#    [3] [5] [1]      (/16)
FLOYD_STEINBERG = _kernel("floyd-steinberg", 16, [
    (1, 0, 7),
    (-1, 1, 3), (0, 1, 5), (1, 1, 1),
])

# Atkinson (1987): 誤差の 1/4 は捨てる
ATKINSON = _kernel("atkinson", 8, [
    (1, 0, 1), (2, 0, 1),
    (-1, 1, 1), (0, 1, 1), (1, 1, 1),
    (0, 2, 1),
])

# Burkes (1988)
BURKES = _kernel("burkes", 32, [
    (1, 0, 8), (2, 0, 4),
    (-2, 1, 2), (-1, 1, 4), (0, 1, 8), (1, 1, 4), (2, 1, 2),
])

# Sierra (1990)
SIERRA = _kernel("sierra", 32, [
    (1, 0, 5), (2, 0, 3),
    (-2, 1, 2), (-1, 1, 4), (0, 1, 5), (1, 1, 4), (2, 1, 2),
    (-1, 2, 2), (0, 2, 3), (1, 2, 2),
])

# Stucki (1981)
STUCKI = _kernel("stucki", 42, [
    (1, 0, 8), (2, 0, 4),
    (-2, 1, 2), (-1, 1, 4), (0, 1, 8), (1, 1, 4), (2, 1, 2),
    (-2, 2, 1), (-1, 2, 2), (0, 2, 4), (1, 2, 2), (2, 2, 1),
])

# Jarvis-Judice-Ninke (1976)
JARVIS = _kernel("jarvis", 48, [
    (1, 0, 7), (2, 0, 5),
    (-2, 1, 3), (-1, 1, 5), (0, 1, 7), (1, 1, 5), (2, 1, 3),
    (-2, 2, 1), (-1, 2, 3), (0, 2, 5), (1, 2, 3), (2, 2, 1),
])

DIFFUSION_KERNELS: Mapping[DitherMethod, DiffusionKernel] = {
    DitherMethod.FLOYD_STEINBERG: FLOYD_STEINBERG,
    DitherMethod.ATKINSON: ATKINSON,
    DitherMethod.BURKES: BURKES,
    DitherMethod.SIERRA: SIERRA,
    DitherMethod.STUCKI: STUCKI,
    DitherMethod.JARVIS: JARVIS,
}


def _to_byte(value: float) -> int:
    """Uint8ClampedArray への代入と同じ変換: クランプ後、偶数丸め。"""
    if value <= 0:
        return 0
    if value >= 255:
        return 255
    return round(value)


class ThresholdDither:
    """単純しきい値（誤差拡散なし）。各ピクセルを最近傍色に置き換えるだけ。"""

    def dither(self, buffer: PixelBuffer, palette: Sequence[RGB]) -> PixelBuffer:
        data = buffer.data
        pal_rgb = [c.to_tuple() for c in palette]
        cache: dict[tuple[int, int, int], tuple[int, int, int]] = {}

        for i in range(0, len(data), 4):
            key = (data[i], data[i + 1], data[i + 2])
            new = cache.get(key)
            if new is None:
                new = pal_rgb[nearest_index_rgb(key[0], key[1], key[2], pal_rgb)]
                cache[key] = new
            data[i] = new[0]
            data[i + 1] = new[1]
            data[i + 2] = new[2]
            # アルファはそのまま

        return buffer


class ErrorDiffusionDither:
    """カーネルテーブル駆動の誤差拡散ディザリング。

    走査は上→下、左→右。量子化誤差は都度クランプしながら
    未処理の近傍ピクセルへ直接書き込む（後で合算しない）。
    """

    def __init__(self, kernel: DiffusionKernel = FLOYD_STEINBERG) -> None:
        self._kernel = kernel

    @property
    def kernel(self) -> DiffusionKernel:
        return self._kernel

    def dither(self, buffer: PixelBuffer, palette: Sequence[RGB]) -> PixelBuffer:
        data = buffer.data
        width = buffer.width
        height = buffer.height
        pal_rgb = [c.to_tuple() for c in palette]
        taps = self._kernel.taps
        to_byte = _to_byte

        for y in range(height):
            for x in range(width):
                i = (y * width + x) * 4
                old_r = data[i]
                old_g = data[i + 1]
                old_b = data[i + 2]

                new_r, new_g, new_b = pal_rgb[nearest_index_rgb(old_r, old_g, old_b, pal_rgb)]
                data[i] = new_r
                data[i + 1] = new_g
                data[i + 2] = new_b

                # 量子化誤差
                err_r = old_r - new_r
                err_g = old_g - new_g
                err_b = old_b - new_b
                if err_r == 0 and err_g == 0 and err_b == 0:
                    continue

                # エラー拡散（範囲外のタップは捨てる）
                for dx, dy, weight in taps:
                    x2 = x + dx
                    y2 = y + dy
                    if 0 <= x2 < width and y2 < height:
                        j = (y2 * width + x2) * 4
                        data[j] = to_byte(data[j] + err_r * weight)
                        data[j + 1] = to_byte(data[j + 1] + err_g * weight)
                        data[j + 2] = to_byte(data[j + 2] + err_b * weight)

        return buffer


def algorithm_for(method: DitherMethod | str) -> DitherAlgorithm:
    """方式に対応するアルゴリズムを返す。未知の名前は Floyd-Steinberg。"""
    method = DitherMethod.from_name(method)
    if method is DitherMethod.THRESHOLD:
        return ThresholdDither()
    return ErrorDiffusionDither(DIFFUSION_KERNELS[method])


def dither(
    buffer: PixelBuffer,
    palette: Sequence[RGB],
    method: DitherMethod | str = DitherMethod.FLOYD_STEINBERG,
) -> PixelBuffer:
    """buffer を in-place でディザリングして返す。"""
    return algorithm_for(method).dither(buffer, palette)
