"""Configuration for icokit.

Settings can be overridden through environment variables:

    ICOKIT_DEFAULT_SIZES: comma separated icon sizes (default: 16,32,48)
    ICOKIT_RESAMPLE: Pillow resampling filter name (default: LANCZOS)
    ICOKIT_OPTIMIZE_PNG: optimize embedded PNGs (default: true)
    ICOKIT_LOG_LEVEL: logging level for the command line (default: WARNING)
"""

import logging
import os
from dataclasses import dataclass
from typing import Tuple

from PIL import Image

MAX_ICON_SIZE = 256

# Size choices offered by the converter
AVAILABLE_SIZES = (16, 24, 32, 48, 64, 96, 128, 256)
DEFAULT_SIZES = (16, 32, 48)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IcoConfig:
    default_sizes: Tuple[int, ...] = DEFAULT_SIZES
    resample: str = 'LANCZOS'
    optimize_png: bool = True
    log_level: str = 'WARNING'

    @classmethod
    def from_env(cls) -> "IcoConfig":
        return cls(
            default_sizes=cls._get_sizes_env("ICOKIT_DEFAULT_SIZES", DEFAULT_SIZES),
            resample=cls._get_resample_env("ICOKIT_RESAMPLE", 'LANCZOS'),
            optimize_png=cls._get_bool_env("ICOKIT_OPTIMIZE_PNG", True),
            log_level=cls._get_level_env("ICOKIT_LOG_LEVEL", 'WARNING'),
        )

    @staticmethod
    def _get_bool_env(key: str, default: bool) -> bool:
        value = os.getenv(key)
        if value is None:
            return default
        return value.strip().lower() in ("true", "1", "yes", "on")

    @staticmethod
    def _get_sizes_env(key: str, default: Tuple[int, ...]) -> Tuple[int, ...]:
        value = os.getenv(key)
        if not value:
            return default
        try:
            sizes = tuple(sorted({int(part) for part in value.split(",") if part.strip()}))
        except ValueError:
            logger.warning(f"Ignoring invalid {key}={value!r}")
            return default
        if not sizes or any(s < 1 or s > MAX_ICON_SIZE for s in sizes):
            logger.warning(f"Ignoring invalid {key}={value!r}")
            return default
        return sizes

    @staticmethod
    def _get_resample_env(key: str, default: str) -> str:
        value = os.getenv(key)
        if not value:
            return default
        if value.upper() not in Image.Resampling.__members__:
            logger.warning(f"Ignoring unknown resampling filter {key}={value!r}")
            return default
        return value.upper()

    @staticmethod
    def _get_level_env(key: str, default: str) -> str:
        value = os.getenv(key)
        if not value:
            return default
        if not isinstance(logging.getLevelName(value.upper()), int):
            logger.warning(f"Ignoring unknown log level {key}={value!r}")
            return default
        return value.upper()
