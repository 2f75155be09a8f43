import logging
import os
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Settings:
    ink_colors: Tuple[str, str, str, str, str]
    dither_method: str
    eye_size: int
    contrast: float
    saturation: float
    brightness: float
    hue: float
    layer_prefix: str
    log_level: str

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            ink_colors=(
                os.getenv("RISO_COLOR_1", "black"),
                os.getenv("RISO_COLOR_2", "orange"),
                os.getenv("RISO_COLOR_3", "blue"),
                os.getenv("RISO_COLOR_4", "pink"),
                os.getenv("RISO_COLOR_5", "red"),
            ),
            dither_method=os.getenv("RISO_DITHER_METHOD", "floyd-steinberg").lower(),
            eye_size=int(os.getenv("RISO_EYE_SIZE", "900")),
            contrast=float(os.getenv("RISO_CONTRAST", "100")),
            saturation=float(os.getenv("RISO_SATURATION", "100")),
            brightness=float(os.getenv("RISO_BRIGHTNESS", "100")),
            hue=float(os.getenv("RISO_HUE", "0")),
            layer_prefix=os.getenv("RISO_LAYER_PREFIX", "risograph-layer"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


SETTINGS = Settings.from_env()


def configure_logging(level: str | None = None) -> logging.Logger:
    logging.basicConfig(
        level=(level or SETTINGS.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return logging.getLogger("riso_palette_dither")
