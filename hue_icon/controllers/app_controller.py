"""Контроллер приложения: оркестрация сервисов сборки иконки.

SOLID:
- SRP: класс связывает загрузку, рендер, сборку контейнера и запись файла (без логики обработки пикселей).
- DIP: зависит от сервисов как от ролей; конфигурация передаётся явно.
Clean Code:
- Любая ошибка прерывает сборку до записи: частично записанный контейнер не появляется.
"""
from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from hue_icon.config.app_config import GlobalAppConfig
from hue_icon.errors import HueIconError, IOWriteError
from hue_icon.models.image_model import ImageData
from hue_icon.services.icon_service import IconService
from hue_icon.services.image_service import ImageService
from hue_icon.services.render_service import RenderService

logger = logging.getLogger(__name__)


@dataclass
class AppController:
    """Связывает сервисы в конвейер «исходник -> ICO».

    Ответственности:
    - Загрузка исходника через `ImageService`.
    - Рендер всех размеров через `RenderService`.
    - Сборка контейнера через `IconService`.
    - Атомарная запись результата на диск.
    """
    config: GlobalAppConfig = field(default_factory=GlobalAppConfig)

    _image_service: ImageService = field(default_factory=ImageService)
    _icon_service: IconService = field(default_factory=IconService)
    _render_service: Optional[RenderService] = None
    _current_image: Optional[ImageData] = None

    def __post_init__(self) -> None:
        if self._render_service is None:
            self._render_service = RenderService(config=self.config, image_service=self._image_service)

    # ---- Public API ----
    def build_icon(self, input_path: str | Path) -> bytes:
        """Загружает исходник и возвращает готовый контейнер в памяти."""
        try:
            self._current_image = self._image_service.load_image(input_path)
            rendered = self._render_service.render(self._current_image.pil_image, self.config.icon.sizes)
            return self._icon_service.build(rendered)
        except HueIconError as exc:
            logger.error(f"Icon build failed for {input_path}: {exc}")
            raise

    def convert(self, input_path: str | Path, output_path: str | Path) -> Path:
        """Полный цикл: сборка контейнера и атомарная запись в `output_path`."""
        blob = self.build_icon(input_path)
        target = Path(output_path)
        self._write_atomic(target, blob)
        logger.info(f"Wrote {target} ({len(blob)} bytes)")
        return target

    # ---- Helpers ----
    def _write_atomic(self, target: Path, blob: bytes) -> None:
        """Пишет во временный файл рядом с целью и заменяет цель через `os.replace`.

        Временный файл удаляется при любой ошибке.
        """
        directory = target.parent
        tmp_name: Optional[str] = None
        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "wb") as fh:
                fh.write(blob)
            os.replace(tmp_name, target)
            tmp_name = None
        except OSError as exc:
            logger.error(f"Failed to write {target}: {exc}")
            raise IOWriteError(f"Не удалось записать файл: {target}", path=target) from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.remove(tmp_name)
