"""Модели цветовых параметров перекраски."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HueBand:
    """Замкнутый интервал оттенков `[lo, hi]` в градусах, без перехода через 0.

    Raises:
        ValueError: если границы вне [0, 360] или `lo > hi`.
    """
    lo: float
    hi: float

    def __post_init__(self) -> None:
        if not (0.0 <= self.lo <= 360.0 and 0.0 <= self.hi <= 360.0):
            raise ValueError(f"Границы диапазона должны лежать в [0, 360]: {self.lo}..{self.hi}")
        if self.lo > self.hi:
            raise ValueError(f"Нижняя граница больше верхней: {self.lo} > {self.hi}")

    def contains(self, hue: float) -> bool:
        return self.lo <= hue <= self.hi
