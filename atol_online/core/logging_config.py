import logging
import sys
from pathlib import Path

from .config import Settings, settings as default_settings


def setup_logging(config: Settings | None = None) -> None:
    """Настройка логирования для клиента АТОЛ Онлайн"""

    config = config or default_settings
    log_level = getattr(logging, config.log_level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    # Пустой log_dir отключает запись в файл
    if config.log_dir:
        log_dir = Path(config.log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.FileHandler(
                log_dir / "atol.log",
                encoding="utf-8",
            )
        )

    logging.basicConfig(
        level=log_level,
        format=config.log_format,
        handlers=handlers,
        force=True,
    )

    # Отключаем избыточное логирование библиотек
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
