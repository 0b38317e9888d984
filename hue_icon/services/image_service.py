"""Загрузка, масштабирование и кодирование изображений.

Принципы:
- SRP: класс отвечает только за ввод-вывод пикселей через Pillow; цветовой логики здесь нет.
- LSP/ISP: возвращает `ImageData` с предсказуемыми полями; интерфейс узкий и конкретный.
"""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from hue_icon.errors import DecodeError
from hue_icon.models.image_model import ImageData

logger = logging.getLogger(__name__)

RESAMPLE_FILTERS = {
    "lanczos": Image.Resampling.LANCZOS,
    "bicubic": Image.Resampling.BICUBIC,
    "bilinear": Image.Resampling.BILINEAR,
    "nearest": Image.Resampling.NEAREST,
}


class ImageService:
    def load_image(self, file_path: str | Path) -> ImageData:
        """Загружает изображение с диска и возвращает его вместе с метаданными.

        Args:
            file_path: Путь до файла изображения (PNG, ICO и любой формат, известный Pillow).

        Returns:
            `ImageData` c `PIL.Image.Image` (в режиме RGBA), размерами, режимом и размером файла.

        Raises:
            DecodeError: если файл отсутствует или не распознан как изображение.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise DecodeError(f"Файл не найден: {path}", path=path)

        try:
            with Image.open(path) as src:
                mode = src.mode
                pil_image = src.convert("RGBA")
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
            raise DecodeError(f"Файл не является изображением: {path}", path=path) from exc

        width, height = pil_image.size
        try:
            size_bytes: Optional[int] = path.stat().st_size
        except OSError:
            size_bytes = None

        logger.info(f"Loaded {path} ({width}x{height}, mode={mode})")
        return ImageData(
            path=path,
            pil_image=pil_image,
            width=width,
            height=height,
            mode=mode,
            size_bytes=size_bytes,
        )

    @staticmethod
    def fit_within(width: int, height: int, max_edge: int) -> Tuple[int, int]:
        """Размер, вписанный в квадрат `max_edge`: большая сторона становится `max_edge`."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Некорректный размер изображения: {width}x{height}")
        scale = min(max_edge / width, max_edge / height)
        return max(1, round(width * scale)), max(1, round(height * scale))

    def resize_to_max(self, image: Image.Image, max_edge: int, resample: str = "lanczos") -> Image.Image:
        """Копия изображения, масштабированная с сохранением пропорций (режим «max»).

        Всегда возвращает новый объект, даже если размер не меняется.
        Цвет и альфа RGBA масштабируются раздельно, без премультипликации:
        RGB под полностью прозрачными пикселями не обнуляется.
        """
        if max_edge <= 0:
            raise ValueError(f"Длина стороны должна быть положительной: {max_edge}")
        if resample not in RESAMPLE_FILTERS:
            raise ValueError(f"Неизвестный фильтр: {resample}")

        target = self.fit_within(image.width, image.height, max_edge)
        if target == image.size:
            return image.copy()
        if image.mode != "RGBA":
            return image.resize(target, RESAMPLE_FILTERS[resample])

        rgb = image.convert("RGB").resize(target, RESAMPLE_FILTERS[resample])
        alpha = image.getchannel("A").resize(target, RESAMPLE_FILTERS[resample])
        return Image.merge("RGBA", (*rgb.split(), alpha))

    def pad_to_square(self, image: Image.Image, fill_color: Tuple[int, int, int, int] = (0, 0, 0, 0)) -> Image.Image:
        """Размещает изображение по центру прозрачного квадратного холста."""
        width, height = image.size
        if width == height:
            return image.copy()
        size = max(width, height)
        canvas = Image.new("RGBA", (size, size), fill_color)
        canvas.paste(image, ((size - width) // 2, (size - height) // 2))
        return canvas

    def encode_png(self, image: Image.Image) -> bytes:
        """Кодирует изображение в PNG без потерь."""
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return buffer.getvalue()
