import logging
import sys
from typing import Any, Literal

from pydantic import BaseModel, Field

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class LoggingConfigModel(BaseModel):
    """Настройки логирования: уровень, формат и включение вывода.

    При `enable_logs=False` ставится `NullHandler` и вывод полностью подавляется.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Уровень логирования"
    )
    format: str = Field(default=DEFAULT_LOG_FORMAT, description="Формат сообщения logging")
    enable_logs: bool = Field(default=True, description="Писать ли логи в stderr")


def setup_logging(config: Any) -> None:
    """Настраивает корневой логгер по конфигурации.

    Логи идут в stderr: stdout зарезервирован под путь к результату.

    Args:
        config: Объект с атрибутами enable_logs, level и format.
    """
    enable_logs = getattr(config, "enable_logs", False)
    level = config.level.upper() if hasattr(config, "level") else "INFO"
    log_format = config.format if hasattr(config, "format") else DEFAULT_LOG_FORMAT

    if not enable_logs:
        logging.basicConfig(level=logging.CRITICAL + 1, handlers=[logging.NullHandler()], force=True)
        return

    console_handler = logging.StreamHandler(sys.stderr)
    logging.basicConfig(level=level, format=log_format, handlers=[console_handler], force=True)

    logging.getLogger(__name__).debug(f"Logging configured: level={level}")
