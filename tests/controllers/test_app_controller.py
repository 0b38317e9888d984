import pytest

from hue_icon.config.app_config import DEFAULT_ICON_SIZES, GlobalAppConfig, IconConfig, RenderConfig
from hue_icon.controllers.app_controller import AppController
from hue_icon.errors import DecodeError, EncodeError, IOWriteError, SizeOverflowError
from hue_icon.services.color_space import hsl_to_rgb, to_byte
from hue_icon.services.icon_service import IconService
from hue_icon.services.image_service import ImageService


class BrokenEncoder(ImageService):
    def encode_png(self, image):
        raise OSError("encoder unavailable")


def config_with(sizes, workers=1):
    return GlobalAppConfig(icon=IconConfig(sizes=sizes), render=RenderConfig(max_workers=workers))


def test_convert_writes_valid_container(make_png, tmp_path, decode_png):
    """Сценарий: один размер 16, чистый синий -> оранжевый с теми же s и l."""
    source = make_png((0, 0, 255, 255), size=(16, 16))
    output = tmp_path / "out.ico"

    written = AppController(config=config_with([16])).convert(source, output)

    assert written == output
    blob = output.read_bytes()
    icons = IconService()
    container = icons.parse(blob)
    assert container.header.count == 1
    pixel = decode_png(icons.payload(blob, container.entries[0])).getpixel((3, 3))
    assert pixel == tuple(to_byte(c) for c in hsl_to_rgb(30.0, 1.0, 0.5)) + (255,)


def test_default_sizes_produce_seven_entries(make_png, tmp_path):
    source = make_png((0, 128, 255, 255), size=(64, 64))
    output = tmp_path / "default.ico"
    AppController(config=GlobalAppConfig(render=RenderConfig(max_workers=2))).convert(source, output)

    container = IconService().parse(output.read_bytes())
    widths = [e.width for e in container.entries]
    assert widths == [0, 128, 64, 48, 32, 24, 16]


def test_size_256_uses_zero_convention(make_png, tmp_path):
    source = make_png(size=(256, 256))
    output = tmp_path / "big.ico"
    AppController(config=config_with([256])).convert(source, output)

    entry = IconService().parse(output.read_bytes()).entries[0]
    assert (entry.width, entry.height) == (0, 0)


@pytest.mark.parametrize("sizes", [[1], [16], list(DEFAULT_ICON_SIZES)])
def test_transparent_pixel_survives_byte_identical(make_png, tmp_path, decode_png, sizes):
    """Прозрачный пиксель 1x1 остаётся байт-в-байт при любом наборе размеров."""
    source = make_png((10, 20, 200, 0), size=(1, 1))
    output = tmp_path / "clear.ico"
    AppController(config=config_with(sizes, workers=2)).convert(source, output)

    blob = output.read_bytes()
    icons = IconService()
    entries = icons.parse(blob).entries
    assert len(entries) == len(sizes)
    for entry in entries:
        assert decode_png(icons.payload(blob, entry)).getpixel((0, 0)) == (10, 20, 200, 0)


def test_missing_input_raises_decode_error(tmp_path):
    output = tmp_path / "never.ico"
    with pytest.raises(DecodeError):
        AppController(config=config_with([16])).convert(tmp_path / "missing.png", output)
    assert not output.exists()


def test_render_failure_leaves_no_output(make_png, tmp_path):
    source = make_png()
    output = tmp_path / "never.ico"
    controller = AppController(config=config_with([16, 8], workers=2), _image_service=BrokenEncoder())
    with pytest.raises(EncodeError):
        controller.convert(source, output)
    assert not output.exists()
    assert not list(tmp_path.glob("*.tmp"))


def test_oversized_icon_leaves_no_output(make_png, tmp_path):
    source = make_png(size=(8, 8))
    output = tmp_path / "never.ico"
    with pytest.raises(SizeOverflowError):
        AppController(config=config_with([300])).convert(source, output)
    assert not output.exists()


def test_existing_output_is_replaced(make_png, tmp_path):
    source = make_png()
    output = tmp_path / "out.ico"
    output.write_bytes(b"stale")
    AppController(config=config_with([16])).convert(source, output)
    assert output.read_bytes()[:4] == b"\x00\x00\x01\x00"


def test_unwritable_destination_raises_io_write_error(make_png, tmp_path):
    source = make_png()
    output = tmp_path / "no" / "such" / "dir" / "out.ico"
    with pytest.raises(IOWriteError) as exc_info:
        AppController(config=config_with([16])).convert(source, output)
    assert exc_info.value.path == output
