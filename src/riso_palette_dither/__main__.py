"""エントリーポイント: uv run python -m riso_palette_dither INPUT -o OUTDIR"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from riso_palette_dither.application.dither_service import DitherService
from riso_palette_dither.application.image_converter import ImageConverter
from riso_palette_dither.application.layer_export_service import save_layers
from riso_palette_dither.config import SETTINGS, configure_logging
from riso_palette_dither.domain.image_model import DitherMethod, ImageSpec
from riso_palette_dither.infrastructure.image_io import save_image

logger = logging.getLogger("riso_palette_dither")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="riso_palette_dither",
        description="画像を 6 色パレットにディザリングし、リソグラフ用レイヤーを書き出す。",
    )
    parser.add_argument("input", type=Path, help="入力画像")
    parser.add_argument("-o", "--output-dir", type=Path, default=Path("."), help="出力先ディレクトリ")
    parser.add_argument(
        "--method",
        default=SETTINGS.dither_method,
        help="ディザリング方式: " + " | ".join(m.value for m in DitherMethod),
    )
    parser.add_argument(
        "--colors",
        nargs=5,
        metavar=("C1", "C2", "C3", "C4", "C5"),
        default=list(SETTINGS.ink_colors),
        help="インク 5 色 (#RRGGBB または色名)",
    )
    parser.add_argument("--size", type=int, default=SETTINGS.eye_size, help="出力キャンバスの一辺 (px)")
    parser.add_argument("--contrast", type=float, default=SETTINGS.contrast, help="コントラスト %% (0-300)")
    parser.add_argument("--saturation", type=float, default=SETTINGS.saturation, help="彩度 %% (0-300)")
    parser.add_argument("--brightness", type=float, default=SETTINGS.brightness, help="明るさ %% (0-300)")
    parser.add_argument("--hue", type=float, default=SETTINGS.hue, help="色相回転 (0-360 度)")
    parser.add_argument("--no-layers", action="store_true", help="レイヤーを書き出さない")
    parser.add_argument("--log-level", default=SETTINGS.log_level)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    service = DitherService()
    service.set_dither_method(args.method)
    converter = ImageConverter(service)
    converter.contrast = args.contrast
    converter.saturation = args.saturation
    converter.brightness = args.brightness
    converter.hue = args.hue

    try:
        service.set_palette(*args.colors)
        spec = ImageSpec(target_width=args.size, target_height=args.size)
        result = converter.convert(
            args.input,
            spec,
            progress=lambda stage, p: logger.debug("%s (%.0f%%)", stage, p * 100),
        )

        args.output_dir.mkdir(parents=True, exist_ok=True)
        dithered_path = args.output_dir / "dithered.png"
        save_image(result, dithered_path)
        logger.info("Saved %s", dithered_path)

        if not args.no_layers:
            save_layers(converter.export_layers(result), args.output_dir, SETTINGS.layer_prefix)
    except (ValueError, OSError, RuntimeError) as e:
        logger.error("%s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
