"""Модели данных для изображений.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image


@dataclass(frozen=True)
class ImageData:
    """Неизменяемая модель исходного изображения и его метаданные.

    Fields:
        path: Путь к исходному файлу.
        pil_image: Декодированное изображение PIL (всегда RGBA).
        width: Ширина, px.
        height: Высота, px.
        mode: Режим PIL исходного файла до конвертации, например "P" или "RGBA".
        size_bytes: Размер файла, если доступен.
    """
    path: Path
    pil_image: Image.Image
    width: int
    height: int
    mode: str
    size_bytes: Optional[int]


@dataclass(frozen=True)
class RenderedImage:
    """Результат рендера одного размера: закодированный PNG и его фактические габариты.

    `size` — запрошенная длина стороны иконки; `width`/`height` могут быть меньше
    по одной из осей, если исходник не квадратный.
    """
    size: int
    data: bytes
    width: int
    height: int
