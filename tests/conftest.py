import io

import numpy as np
import pytest
from PIL import Image

from hue_icon.config.app_config import GlobalAppConfig, IconConfig, RenderConfig

BLUE = (0, 0, 255, 255)


@pytest.fixture
def make_png(tmp_path):
    """Фабрика: сохраняет однотонное RGBA-изображение в PNG и возвращает путь."""

    def _make(color=BLUE, size=(16, 16), name="source.png"):
        path = tmp_path / name
        Image.new("RGBA", size, color).save(path, format="PNG")
        return path

    return _make


@pytest.fixture
def rng():
    return np.random.default_rng(20240518)


@pytest.fixture
def random_rgba(rng):
    """Случайный буфер 24x24 RGBA, около четверти пикселей полностью прозрачные."""
    arr = rng.integers(0, 256, size=(24, 24, 4), dtype=np.uint8)
    transparent = rng.random((24, 24)) < 0.25
    arr[transparent, 3] = 0
    return arr


@pytest.fixture
def small_config():
    """Конфигурация с двумя размерами и последовательным рендером."""
    return GlobalAppConfig(icon=IconConfig(sizes=[32, 16]), render=RenderConfig(max_workers=1))


@pytest.fixture
def decode_png():
    """Декодирует PNG-байты в RGBA-изображение."""

    def _decode(data: bytes) -> Image.Image:
        with Image.open(io.BytesIO(data)) as img:
            return img.convert("RGBA")

    return _decode
