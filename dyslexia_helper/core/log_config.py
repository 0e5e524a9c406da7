# dyslexia_helper/core/log_config.py
import logging

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Один basicConfig на процесс; повторный вызов только меняет уровень."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    logging.getLogger().setLevel(level.upper())
    # httpx пишет INFO на каждый запрос к LLM: глушим
    logging.getLogger("httpx").setLevel(logging.WARNING)
