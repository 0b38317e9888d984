"""Преобразования RGB <-> HSL.

Принципы:
- Чистые функции без состояния; каналы RGB в диапазоне [0, 1], оттенок в градусах.
- Векторные версии (`*_array`) повторяют скалярные формулы в том же порядке операций,
  поэтому результаты совпадают бит в бит.

Ветка оттенка выбирается по тому, какой канал равен максимуму (с точностью `EPSILON`),
в порядке красный, зелёный, синий.
"""
from __future__ import annotations

import math
from typing import Tuple

import numpy as np

EPSILON = 1e-10

ONE_SIXTH = 1.0 / 6.0
ONE_THIRD = 1.0 / 3.0
ONE_HALF = 1.0 / 2.0
TWO_THIRDS = 2.0 / 3.0


def rgb_to_hsl(r: float, g: float, b: float) -> Tuple[float, float, float]:
    """RGB в [0, 1] -> (h в градусах [0, 360), s в [0, 1], l в [0, 1]).

    Для ахроматических цветов (max ≈ min) возвращает h = 0, s = 0.
    """
    mx = max(r, max(g, b))
    mn = min(r, min(g, b))
    l = (mx + mn) / 2.0

    if abs(mx - mn) < EPSILON:
        return 0.0, 0.0, l

    d = mx - mn
    s = d / (2.0 - mx - mn) if l > 0.5 else d / (mx + mn)

    if abs(mx - r) < EPSILON:
        h = (g - b) / d + (6.0 if g < b else 0.0)
    elif abs(mx - g) < EPSILON:
        h = (b - r) / d + 2.0
    else:
        h = (r - g) / d + 4.0

    return h * 60.0, s, l


def hue_to_channel(p: float, q: float, t: float) -> float:
    """Кусочно-линейная интерполяция канала по дробной позиции оттенка `t`."""
    if t < 0:
        t += 1.0
    if t > 1:
        t -= 1.0
    if t < ONE_SIXTH:
        return p + (q - p) * 6.0 * t
    if t < ONE_HALF:
        return q
    if t < TWO_THIRDS:
        return p + (q - p) * (TWO_THIRDS - t) * 6.0
    return p


def hsl_to_rgb(h: float, s: float, l: float) -> Tuple[float, float, float]:
    """(h в градусах, s, l) -> RGB в [0, 1]."""
    if s == 0.0:
        return l, l, l

    hf = h / 360.0
    q = l * (1.0 + s) if l < 0.5 else l + s - l * s
    p = 2.0 * l - q
    return (
        hue_to_channel(p, q, hf + ONE_THIRD),
        hue_to_channel(p, q, hf),
        hue_to_channel(p, q, hf - ONE_THIRD),
    )


def to_byte(value: float) -> int:
    """[0, 1] -> 0..255: масштабирование, ограничение и округление половины вверх."""
    v = value * 255.0
    v = 0.0 if v < 0.0 else 255.0 if v > 255.0 else v
    return int(math.floor(v + 0.5))


# ---------- Векторные версии ----------
def rgb_to_hsl_array(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Поэлементный аналог `rgb_to_hsl` для массивов float64."""
    mx = np.maximum(r, np.maximum(g, b))
    mn = np.minimum(r, np.minimum(g, b))
    l = (mx + mn) / 2.0
    d = mx - mn
    chromatic = np.abs(d) >= EPSILON

    # для ахроматических пикселей делители могут быть нулевыми; их результат отбрасывается
    with np.errstate(divide="ignore", invalid="ignore"):
        s = np.where(l > 0.5, d / (2.0 - mx - mn), d / (mx + mn))
        h_red = (g - b) / d + np.where(g < b, 6.0, 0.0)
        h_green = (b - r) / d + 2.0
        h_blue = (r - g) / d + 4.0

    h = np.select(
        [np.abs(mx - r) < EPSILON, np.abs(mx - g) < EPSILON],
        [h_red, h_green],
        default=h_blue,
    )
    h = np.where(chromatic, h * 60.0, 0.0)
    s = np.where(chromatic, s, 0.0)
    return h, s, l


def hue_to_channel_array(p: np.ndarray, q: np.ndarray, t: np.ndarray) -> np.ndarray:
    t = np.where(t < 0, t + 1.0, t)
    t = np.where(t > 1, t - 1.0, t)
    return np.select(
        [t < ONE_SIXTH, t < ONE_HALF, t < TWO_THIRDS],
        [p + (q - p) * 6.0 * t, q, p + (q - p) * (TWO_THIRDS - t) * 6.0],
        default=p,
    )


def hsl_to_rgb_array(h: np.ndarray, s: np.ndarray, l: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Поэлементный аналог `hsl_to_rgb` для массивов float64."""
    h, s, l = np.broadcast_arrays(
        np.asarray(h, dtype=np.float64), np.asarray(s, dtype=np.float64), np.asarray(l, dtype=np.float64)
    )
    hf = h / 360.0
    q = np.where(l < 0.5, l * (1.0 + s), l + s - l * s)
    p = 2.0 * l - q
    gray = s == 0.0
    r = np.where(gray, l, hue_to_channel_array(p, q, hf + ONE_THIRD))
    g = np.where(gray, l, hue_to_channel_array(p, q, hf))
    b = np.where(gray, l, hue_to_channel_array(p, q, hf - ONE_THIRD))
    return r, g, b


def to_byte_array(values: np.ndarray) -> np.ndarray:
    """Векторный аналог `to_byte`; возвращает uint8."""
    v = np.clip(values * 255.0, 0.0, 255.0)
    return np.floor(v + 0.5).astype(np.uint8)
