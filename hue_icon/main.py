"""Точка входа в приложение: `hue-icon INPUT OUTPUT [опции]`."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import ValidationError

from hue_icon.config.app_config import GlobalAppConfig, load_app_config
from hue_icon.config.logging_config import setup_logging
from hue_icon.controllers.app_controller import AppController
from hue_icon.errors import HueIconError
from hue_icon.services.hue_service import COLOR_BUCKETS, band_for_color, hue_for_color

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hue-icon",
        description="Собирает многоразмерный ICO из изображения, перекрашивая полосу оттенков.",
    )
    parser.add_argument("input", help="Исходное изображение (PNG, ICO, ...)")
    parser.add_argument("output", help="Путь к итоговому .ico")
    parser.add_argument("--config", help="YAML-файл конфигурации (корневой ключ app)")
    parser.add_argument("--sizes", type=int, nargs="+", metavar="N", help="Длины сторон, например 256 48 16")
    parser.add_argument("--band", type=float, nargs=2, metavar=("LO", "HI"), help="Полоса оттенков, градусы")
    parser.add_argument("--hue", type=float, metavar="DEG", help="Оттенок-заменитель, градусы")
    colors = sorted(COLOR_BUCKETS)
    parser.add_argument("--from-color", choices=colors, help="Перекрашиваемый цвет вместо --band")
    parser.add_argument("--to-color", choices=colors, help="Цвет-заменитель вместо --hue")
    parser.add_argument("--workers", type=int, metavar="N", help="Число потоков рендера")
    parser.add_argument("--square", action="store_true", help="Дополнить исходник до квадрата")
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], help="Уровень логирования"
    )
    return parser


def apply_overrides(config: GlobalAppConfig, args: argparse.Namespace) -> GlobalAppConfig:
    """Накладывает флаги командной строки поверх загруженной конфигурации.

    Результат перепроверяется валидаторами моделей.
    """
    recolor = config.recolor.model_dump()
    if args.from_color:
        band = band_for_color(args.from_color)
        recolor.update(band_lo=band.lo, band_hi=band.hi)
    if args.band:
        recolor.update(band_lo=args.band[0], band_hi=args.band[1])
    if args.to_color:
        recolor["substitute_hue"] = hue_for_color(args.to_color)
    if args.hue is not None:
        recolor["substitute_hue"] = args.hue

    data = config.model_dump()
    data["recolor"] = recolor
    if args.sizes:
        data["icon"]["sizes"] = args.sizes
    if args.workers is not None:
        data["render"]["max_workers"] = args.workers
    if args.square:
        data["render"]["square_canvas"] = True
    if args.log_level:
        data["logging"]["level"] = args.log_level
    return GlobalAppConfig(**data)


def main(argv: Optional[List[str]] = None) -> int:
    """Разбирает аргументы, собирает иконку и возвращает код выхода."""
    args = build_parser().parse_args(argv)

    try:
        config = apply_overrides(load_app_config(args.config), args)
    except (ValidationError, ValueError, yaml.YAMLError) as exc:
        print(f"Ошибка конфигурации: {exc}", file=sys.stderr)
        return 2
    setup_logging(config=config.logging)
    logger.debug(f"Effective configuration: {config.model_dump()}")

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"Файл не найден: {input_path}", file=sys.stderr)
        return 1

    try:
        written = AppController(config=config).convert(input_path, args.output)
    except HueIconError as exc:
        print(f"Ошибка: {exc}", file=sys.stderr)
        return 1

    print(written)
    return 0


if __name__ == "__main__":
    sys.exit(main())
