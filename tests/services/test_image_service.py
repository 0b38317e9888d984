import io

import pytest
from PIL import Image

from hue_icon.errors import DecodeError
from hue_icon.services.image_service import ImageService


@pytest.fixture
def service():
    return ImageService()


def test_load_image_returns_rgba(service, make_png):
    path = make_png(size=(20, 10))
    data = service.load_image(path)
    assert data.pil_image.mode == "RGBA"
    assert (data.width, data.height) == (20, 10)
    assert data.mode == "RGBA"
    assert data.size_bytes == path.stat().st_size


def test_load_image_missing_file(service, tmp_path):
    with pytest.raises(DecodeError) as exc_info:
        service.load_image(tmp_path / "missing.png")
    assert exc_info.value.path == tmp_path / "missing.png"


def test_load_image_corrupt_file(service, tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"definitely not an image")
    with pytest.raises(DecodeError):
        service.load_image(path)


def test_load_image_accepts_ico(service, tmp_path):
    path = tmp_path / "source.ico"
    Image.new("RGBA", (32, 32), (0, 0, 255, 255)).save(path, format="ICO", sizes=[(32, 32)])
    data = service.load_image(path)
    assert data.pil_image.mode == "RGBA"
    assert data.width == 32


@pytest.mark.parametrize(
    "size,max_edge,expected",
    [
        ((200, 100), 64, (64, 32)),
        ((100, 200), 16, (8, 16)),
        ((1, 1), 16, (16, 16)),
        ((300, 1), 16, (16, 1)),
        ((48, 48), 48, (48, 48)),
    ],
)
def test_fit_within(size, max_edge, expected):
    assert ImageService.fit_within(*size, max_edge) == expected


def test_resize_to_max_same_size_returns_copy(service):
    img = Image.new("RGBA", (16, 16), (1, 2, 3, 0))
    out = service.resize_to_max(img, 16)
    assert out is not img
    assert out.tobytes() == img.tobytes()


def test_resize_to_max_keeps_color_under_transparent_pixels(service):
    """RGBA масштабируется без премультипликации: цвет под A == 0 не обнуляется."""
    img = Image.new("RGBA", (4, 4), (10, 20, 200, 0))
    for max_edge in (16, 2):
        out = service.resize_to_max(img, max_edge)
        assert out.mode == "RGBA"
        assert set(out.getdata()) == {(10, 20, 200, 0)}


def test_resize_to_max_keeps_opaque_alpha(service):
    img = Image.new("RGBA", (8, 4), (0, 0, 255, 255))
    out = service.resize_to_max(img, 16)
    assert out.size == (16, 8)
    assert {px[3] for px in out.getdata()} == {255}


def test_resize_to_max_rejects_bad_arguments(service):
    img = Image.new("RGBA", (16, 16))
    with pytest.raises(ValueError):
        service.resize_to_max(img, 0)
    with pytest.raises(ValueError):
        service.resize_to_max(img, 8, resample="sinc")


def test_pad_to_square_centers_image(service):
    img = Image.new("RGBA", (20, 10), (255, 0, 0, 255))
    out = service.pad_to_square(img)
    assert out.size == (20, 20)
    assert out.getpixel((0, 0))[3] == 0
    assert out.getpixel((10, 10)) == (255, 0, 0, 255)


def test_encode_png_is_lossless(service):
    img = Image.new("RGBA", (3, 3), (10, 20, 30, 0))
    data = service.encode_png(img)
    assert data.startswith(b"\x89PNG\r\n\x1a\n")
    assert service.encode_png(img) == data
    with Image.open(io.BytesIO(data)) as decoded:
        assert decoded.convert("RGBA").getpixel((1, 1)) == (10, 20, 30, 0)
