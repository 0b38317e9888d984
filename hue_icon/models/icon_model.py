"""Модели структуры ICO-контейнера."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class IconDirectoryEntry:
    """Одна 16-байтная запись ICONDIRENTRY.

    Fields:
        width: Байт ширины (0 означает 256).
        height: Байт высоты (0 означает 256).
        color_count: Число цветов палитры, 0 — не задано.
        reserved: Всегда 0.
        planes: Цветовые плоскости, для PNG-записей 1.
        bit_count: Бит на пиксель, 32 для RGBA.
        size_bytes: Длина полезной нагрузки.
        offset: Абсолютное смещение нагрузки от начала файла.
    """
    width: int
    height: int
    color_count: int
    reserved: int
    planes: int
    bit_count: int
    size_bytes: int
    offset: int

    @property
    def end(self) -> int:
        return self.offset + self.size_bytes


@dataclass(frozen=True)
class IconHeader:
    """Заголовок ICONDIR: reserved, type (1 = иконка), count."""
    reserved: int
    image_type: int
    count: int


@dataclass(frozen=True)
class IconContainer:
    """Разобранный контейнер: заголовок и записи каталога в порядке следования."""
    header: IconHeader
    entries: Tuple[IconDirectoryEntry, ...]
