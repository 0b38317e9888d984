import logging
from pathlib import Path
from typing import List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from hue_icon.config.logging_config import LoggingConfigModel
from hue_icon.models.color_model import HueBand

logger = logging.getLogger(__name__)

DEFAULT_ICON_SIZES = [256, 128, 64, 48, 32, 24, 16]


class RecolorConfig(BaseModel):
    """Полоса оттенков для перекраски и оттенок-заменитель.

    По умолчанию синие оттенки (180°–260°) становятся оранжевыми (30°).
    """

    band_lo: float = Field(180.0, ge=0.0, le=360.0, description="Нижняя граница полосы, градусы")
    band_hi: float = Field(260.0, ge=0.0, le=360.0, description="Верхняя граница полосы, градусы")
    substitute_hue: float = Field(30.0, ge=0.0, lt=360.0, description="Новый оттенок, градусы")

    @model_validator(mode="after")
    def _check_band_order(self) -> "RecolorConfig":
        if self.band_lo > self.band_hi:
            raise ValueError(f"band_lo ({self.band_lo}) не может быть больше band_hi ({self.band_hi})")
        return self

    @property
    def band(self) -> HueBand:
        return HueBand(self.band_lo, self.band_hi)


class IconConfig(BaseModel):
    """Набор длин сторон; порядок определяет порядок записей в контейнере."""

    sizes: List[int] = Field(default_factory=lambda: list(DEFAULT_ICON_SIZES), min_length=1)

    @field_validator("sizes")
    @classmethod
    def _check_sizes(cls, value: List[int]) -> List[int]:
        bad = [s for s in value if s <= 0]
        if bad:
            raise ValueError(f"Размеры должны быть положительными: {bad}")
        return value


class RenderConfig(BaseModel):
    """Параметры рендера отдельных размеров."""

    max_workers: int = Field(4, ge=1, description="Число потоков; 1 — последовательная обработка")
    resample: Literal["lanczos", "bicubic", "bilinear", "nearest"] = "lanczos"
    square_canvas: bool = Field(False, description="Дополнять исходник до квадрата прозрачными полями")


class GlobalAppConfig(BaseModel):
    """Корневая конфигурация, передаётся явно во все сервисы."""

    recolor: RecolorConfig = Field(default_factory=RecolorConfig)
    icon: IconConfig = Field(default_factory=IconConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    logging: LoggingConfigModel = Field(default_factory=LoggingConfigModel)


def load_app_config(config_path: Optional[str | Path] = None) -> GlobalAppConfig:
    """Загружает конфигурацию из YAML (корневой ключ `app`) с откатом на значения по умолчанию.

    Отсутствующий файл, пустой файл или файл без ключа `app` дают конфигурацию по
    умолчанию. Ошибки разбора YAML и валидации пробрасываются.
    """
    if config_path is None:
        return GlobalAppConfig()

    logger.debug(f"Loading configuration from: {config_path}")
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.warning(f"Configuration file not found at {config_path}. Using default GlobalAppConfig.")
        return GlobalAppConfig()
    except yaml.YAMLError as e:
        logger.error(f"Error parsing YAML configuration file {config_path}: {e}")
        raise

    if not config_data or "app" not in config_data:
        logger.warning(f"Configuration file {config_path} is empty or missing 'app' root. Using default GlobalAppConfig.")
        return GlobalAppConfig()
    return GlobalAppConfig(**(config_data.get("app") or {}))
