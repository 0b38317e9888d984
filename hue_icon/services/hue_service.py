"""Классификация оттенков и замена полосы оттенков.

Принципы:
- SRP: решение «перекрашивать ли пиксель» и расчёт нового цвета; без знания о буферах.
- Чистые функции, без разделяемого состояния.
"""
from __future__ import annotations

from typing import Dict, Sequence, Tuple

from hue_icon.models.color_model import HueBand
from hue_icon.services.color_space import hsl_to_rgb, rgb_to_hsl, to_byte

# Основные цветовые диапазоны (градусы оттенка, приблизительно).
# Красный переходит через 360 -> 0 и хранится как (345, 15).
COLOR_BUCKETS: Dict[str, Tuple[float, float]] = {
    "red": (345.0, 15.0),
    "orange": (15.0, 45.0),
    "yellow": (45.0, 75.0),
    "green": (75.0, 165.0),
    "cyan": (165.0, 195.0),
    "blue": (195.0, 255.0),
    "purple": (255.0, 285.0),
    "magenta": (285.0, 330.0),
    "pink": (330.0, 345.0),
}

BLACK_MAX_LIGHTNESS = 0.05
WHITE_MIN_LIGHTNESS = 0.95
GRAY_MAX_SATURATION = 0.10


def remap_pixel(rgb: Sequence[int], band: HueBand, substitute_hue: float) -> Tuple[int, int, int]:
    """Заменяет оттенок пикселя на `substitute_hue`, если он попадает в `band`.

    Насыщенность и светлота сохраняются. Пиксели вне полосы возвращаются без
    конвертации туда-обратно, чтобы не терять точность.

    Args:
        rgb: Каналы (r, g, b) в 0..255; лишние элементы (альфа) игнорируются.
        band: Полоса оттенков для перекраски.
        substitute_hue: Новый оттенок в градусах.

    Returns:
        Кортеж (r, g, b) в 0..255.
    """
    r8, g8, b8 = int(rgb[0]), int(rgb[1]), int(rgb[2])
    h, s, l = rgb_to_hsl(r8 / 255.0, g8 / 255.0, b8 / 255.0)
    if not band.contains(h):
        return r8, g8, b8

    nr, ng, nb = hsl_to_rgb(substitute_hue, s, l)
    return to_byte(nr), to_byte(ng), to_byte(nb)


def classify_color(h: float, s: float, l: float) -> str:
    """Возвращает имя основного цвета для HSL-тройки.

    Сначала проверяются чёрный/белый по светлоте, затем серый/серебристый по
    насыщенности, и только потом корзина оттенка.
    """
    if l <= BLACK_MAX_LIGHTNESS:
        return "black"
    if l >= WHITE_MIN_LIGHTNESS:
        return "white"
    if s <= GRAY_MAX_SATURATION:
        return "silver" if l >= 0.5 else "gray"

    hue = h % 360.0
    for name, (lo, hi) in COLOR_BUCKETS.items():
        if lo > hi:
            if hue >= lo or hue < hi:
                return name
        elif lo <= hue < hi:
            return name
    # недостижимо: корзины покрывают весь круг
    return "red"


def band_for_color(name: str) -> HueBand:
    """Полоса оттенков для именованного цвета.

    Raises:
        ValueError: для неизвестного имени или полосы, проходящей через 0° (красный).
    """
    lo, hi = _bucket(name)
    if lo > hi:
        raise ValueError(f"Диапазон «{name}» переходит через 0° и не может быть полосой перекраски")
    return HueBand(lo, hi)


def hue_for_color(name: str) -> float:
    """Центральный оттенок именованного цвета в градусах."""
    lo, hi = _bucket(name)
    if lo > hi:
        return ((lo + hi + 360.0) / 2.0) % 360.0
    return (lo + hi) / 2.0


def _bucket(name: str) -> Tuple[float, float]:
    key = name.strip().lower()
    if key not in COLOR_BUCKETS:
        known = ", ".join(COLOR_BUCKETS)
        raise ValueError(f"Неизвестный цвет: {name!r}. Допустимо: {known}")
    return COLOR_BUCKETS[key]
