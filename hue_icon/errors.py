"""Иерархия ошибок конвейера сборки иконки.

Принципы:
- Каждая ошибка несёт контекст (путь, размер, стадия), достаточный для диагностики.
- Все ошибки наследуют `HueIconError`, чтобы CLI мог перехватить их одним блоком.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class HueIconError(Exception):
    """Базовая ошибка проекта."""


class DecodeError(HueIconError):
    """Исходное изображение отсутствует или не декодируется."""

    def __init__(self, message: str, path: Optional[str | Path] = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class RenderError(HueIconError):
    """Сбой обработки одного размера."""

    stage: str = "render"

    def __init__(self, message: str, size: int) -> None:
        super().__init__(message)
        self.size = size

    def __str__(self) -> str:
        return f"[{self.stage} {self.size}px] {super().__str__()}"


class ResizeError(RenderError):
    stage = "resize"


class RecolorError(RenderError):
    stage = "recolor"


class EncodeError(RenderError):
    stage = "encode"


class SizeOverflowError(HueIconError):
    """Размер нельзя записать в байтовое поле записи каталога."""

    def __init__(self, message: str, size: int) -> None:
        super().__init__(message)
        self.size = size


class IOWriteError(HueIconError):
    """Готовый контейнер не удалось сохранить."""

    def __init__(self, message: str, path: str | Path) -> None:
        super().__init__(message)
        self.path = Path(path)
