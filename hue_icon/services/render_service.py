"""Рендер набора размеров: масштабирование, перекраска и кодирование в PNG.

Принципы:
- SRP: оркестрирует ImageService и ProcessService для одного исходника.
- DIP: сервисы и конфигурация передаются явно, глобального состояния нет.

Каждый размер обрабатывается независимо на своей копии буфера, поэтому размеры
считаются параллельно в пуле потоков. При первой ошибке оставшиеся задачи
отменяются, а ошибка пробрасывается (fail-fast): неполный контейнер бесполезен.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Sequence

from PIL import Image

from hue_icon.config.app_config import GlobalAppConfig
from hue_icon.errors import EncodeError, RecolorError, ResizeError
from hue_icon.models.image_model import RenderedImage
from hue_icon.services.image_service import ImageService
from hue_icon.services.process_service import ProcessService

logger = logging.getLogger(__name__)


@dataclass
class RenderService:
    config: GlobalAppConfig = field(default_factory=GlobalAppConfig)
    image_service: ImageService = field(default_factory=ImageService)
    process_service: ProcessService = field(default_factory=ProcessService)

    def render(self, source: Image.Image, sizes: Sequence[int]) -> List[RenderedImage]:
        """Рендерит все размеры и возвращает результаты в порядке `sizes`.

        Raises:
            ValueError: если список пуст или содержит неположительный размер.
            ResizeError: если масштабирование какого-либо размера не удалось.
            RecolorError: если перекраска какого-либо размера не удалась.
            EncodeError: если кодирование какого-либо размера не удалось.
        """
        sizes = list(sizes)
        if not sizes:
            raise ValueError("Список размеров пуст")
        bad = [s for s in sizes if s <= 0]
        if bad:
            raise ValueError(f"Размеры должны быть положительными: {bad}")

        base = source if source.mode == "RGBA" else source.convert("RGBA")
        if self.config.render.square_canvas:
            base = self.image_service.pad_to_square(base)

        workers = min(self.config.render.max_workers, len(sizes))
        if workers <= 1:
            return [self.render_one(base, size) for size in sizes]

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="render") as executor:
            futures: List[Future] = [executor.submit(self.render_one, base, size) for size in sizes]
            results: List[RenderedImage] = []
            try:
                for future in futures:
                    results.append(future.result())
            except Exception:
                for pending in futures:
                    pending.cancel()
                raise
        return results

    def render_one(self, source: Image.Image, size: int) -> RenderedImage:
        """Масштабирует копию исходника, перекрашивает её на месте и кодирует в PNG."""
        render_cfg = self.config.render
        recolor_cfg = self.config.recolor

        try:
            resized = self.image_service.resize_to_max(source, size, render_cfg.resample)
        except (ValueError, OSError, MemoryError) as exc:
            raise ResizeError(f"Не удалось масштабировать изображение: {exc}", size=size) from exc

        try:
            recolored = self.process_service.recolor_image(resized, recolor_cfg.band, recolor_cfg.substitute_hue)
        except (ValueError, MemoryError) as exc:
            raise RecolorError(f"Не удалось перекрасить изображение: {exc}", size=size) from exc

        try:
            data = self.image_service.encode_png(recolored)
        except (ValueError, OSError) as exc:
            raise EncodeError(f"Не удалось закодировать PNG: {exc}", size=size) from exc

        logger.info(f"Rendered {size}px -> {recolored.width}x{recolored.height}, {len(data)} bytes")
        return RenderedImage(size=size, data=data, width=recolored.width, height=recolored.height)
