"""Сборка и разбор ICO-контейнера с PNG-записями.

Формат (little-endian):
- ICONDIR, 6 байт: reserved=0 (u16), type=1 (u16), count (u16);
- count записей ICONDIRENTRY по 16 байт: width, height, colors, reserved (u8),
  planes, bit count (u16), длина нагрузки, смещение нагрузки (u32);
- нагрузки подряд, в порядке записей, без промежутков.

Байт ширины/высоты 0 означает 256; размеры вне 1..256 не представимы.
"""
from __future__ import annotations

import logging
import struct
from typing import List, Sequence, Tuple, Union

from hue_icon.errors import SizeOverflowError
from hue_icon.models.icon_model import IconContainer, IconDirectoryEntry, IconHeader
from hue_icon.models.image_model import RenderedImage

logger = logging.getLogger(__name__)

HEADER_FORMAT = "<HHH"
ENTRY_FORMAT = "<BBBBHHII"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)
ENTRY_SIZE = struct.calcsize(ENTRY_FORMAT)

ICON_TYPE = 1
MAX_EDGE = 256
MAX_ENTRIES = 0xFFFF
PNG_PLANES = 1
PNG_BIT_COUNT = 32

ImagePayload = Union[RenderedImage, Tuple[int, bytes]]


def size_to_byte(size: int) -> int:
    """Длина стороны -> значение байта записи каталога (256 -> 0).

    Raises:
        SizeOverflowError: если размер вне 1..256.
    """
    if not 1 <= size <= MAX_EDGE:
        raise SizeOverflowError(f"Размер {size}px не помещается в запись каталога (допустимо 1..{MAX_EDGE})", size=size)
    return 0 if size == MAX_EDGE else size


class IconService:
    def entries_for(self, images: Sequence[ImagePayload]) -> List[IconDirectoryEntry]:
        """Вычисляет записи каталога со смещениями, не сериализуя контейнер."""
        pairs = [self._as_pair(item) for item in images]
        if not pairs:
            raise ValueError("Нельзя собрать контейнер без изображений")
        if len(pairs) > MAX_ENTRIES:
            raise SizeOverflowError(f"Слишком много записей: {len(pairs)} > {MAX_ENTRIES}", size=len(pairs))

        offset = HEADER_SIZE + ENTRY_SIZE * len(pairs)
        entries: List[IconDirectoryEntry] = []
        for size, data in pairs:
            edge = size_to_byte(size)
            entries.append(
                IconDirectoryEntry(
                    width=edge,
                    height=edge,
                    color_count=0,
                    reserved=0,
                    planes=PNG_PLANES,
                    bit_count=PNG_BIT_COUNT,
                    size_bytes=len(data),
                    offset=offset,
                )
            )
            offset += len(data)
        return entries

    def build(self, images: Sequence[ImagePayload]) -> bytes:
        """Собирает контейнер из пар (размер, PNG-байты) в заданном порядке."""
        pairs = [self._as_pair(item) for item in images]
        entries = self.entries_for(pairs)

        header = struct.pack(HEADER_FORMAT, 0, ICON_TYPE, len(entries))
        directory = b"".join(
            struct.pack(
                ENTRY_FORMAT,
                e.width,
                e.height,
                e.color_count,
                e.reserved,
                e.planes,
                e.bit_count,
                e.size_bytes,
                e.offset,
            )
            for e in entries
        )
        for (size, _), e in zip(pairs, entries):
            logger.debug(f"Entry {size}px: offset={e.offset}, length={e.size_bytes}")

        blob = header + directory + b"".join(data for _, data in pairs)
        logger.info(f"Assembled icon container: {len(entries)} images, {len(blob)} bytes")
        return blob

    def parse(self, blob: bytes) -> IconContainer:
        """Разбирает заголовок и каталог контейнера.

        Raises:
            ValueError: если данные короче заявленного каталога или поля заголовка неверны.
        """
        if len(blob) < HEADER_SIZE:
            raise ValueError(f"Слишком короткие данные для ICONDIR: {len(blob)} байт")
        reserved, image_type, count = struct.unpack_from(HEADER_FORMAT, blob, 0)
        if reserved != 0 or image_type != ICON_TYPE:
            raise ValueError(f"Неверный заголовок ICO: reserved={reserved}, type={image_type}")
        if len(blob) < HEADER_SIZE + ENTRY_SIZE * count:
            raise ValueError(f"Каталог на {count} записей не помещается в {len(blob)} байт")

        entries = tuple(
            IconDirectoryEntry(*struct.unpack_from(ENTRY_FORMAT, blob, HEADER_SIZE + ENTRY_SIZE * i))
            for i in range(count)
        )
        for e in entries:
            if e.end > len(blob):
                raise ValueError(f"Запись выходит за пределы данных: {e.offset}+{e.size_bytes} > {len(blob)}")
        return IconContainer(header=IconHeader(reserved, image_type, count), entries=entries)

    def payload(self, blob: bytes, entry: IconDirectoryEntry) -> bytes:
        return blob[entry.offset:entry.end]

    @staticmethod
    def _as_pair(item: ImagePayload) -> Tuple[int, bytes]:
        if isinstance(item, RenderedImage):
            return item.size, item.data
        size, data = item
        return int(size), bytes(data)
