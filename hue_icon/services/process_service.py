from __future__ import annotations

import numpy as np
from PIL import Image

from hue_icon.models.color_model import HueBand
from hue_icon.services.color_space import hsl_to_rgb_array, rgb_to_hsl_array, to_byte_array


class ProcessService:
    # ---------- Вспомогательные функции ----------
    def _image_to_rgba_np(self, image: Image.Image) -> np.ndarray:
        """
        Возвращает изменяемую копию пикселей (H, W, 4) uint8.
        """
        rgba = image if image.mode == "RGBA" else image.convert("RGBA")
        return np.array(rgba, dtype=np.uint8)

    def _check_buffer(self, arr: np.ndarray) -> None:
        if arr.dtype != np.uint8 or arr.ndim != 3 or arr.shape[2] != 4:
            raise ValueError(f"Ожидался буфер (H, W, 4) uint8, получено {arr.shape} {arr.dtype}")

    # ---------- Перекраска полосы оттенков ----------
    def recolor_array(self, arr: np.ndarray, band: HueBand, substitute_hue: float) -> np.ndarray:
        """
        Перекрашивает на месте все непрозрачные пиксели, оттенок которых попадает в `band`.
        Полностью прозрачные пиксели (A == 0) и альфа-канал не изменяются.
        Пиксели независимы, поэтому вычисление векторизовано по всему буферу.
        """
        self._check_buffer(arr)
        opaque = arr[..., 3] != 0
        if not opaque.any():
            return arr

        rgb = arr[opaque, :3].astype(np.float64)
        r = rgb[:, 0] / 255.0
        g = rgb[:, 1] / 255.0
        b = rgb[:, 2] / 255.0
        h, s, l = rgb_to_hsl_array(r, g, b)

        in_band = (h >= band.lo) & (h <= band.hi)
        if not in_band.any():
            return arr

        nr, ng, nb = hsl_to_rgb_array(np.full(int(in_band.sum()), float(substitute_hue)), s[in_band], l[in_band])
        recolored = np.stack([to_byte_array(nr), to_byte_array(ng), to_byte_array(nb)], axis=-1)

        # индексы непрозрачных пикселей, попавших в полосу
        ys, xs = np.nonzero(opaque)
        arr[ys[in_band], xs[in_band], :3] = recolored
        return arr

    def recolor_image(self, image: Image.Image, band: HueBand, substitute_hue: float) -> Image.Image:
        """
        Возвращает новое RGBA-изображение с перекрашенной полосой; исходное не мутирует.
        """
        arr = self._image_to_rgba_np(image)
        self.recolor_array(arr, band, substitute_hue)
        return Image.fromarray(arr)
