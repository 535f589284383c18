# utils/log.py — logging setup (stdout, once per process)
import logging
import sys

from utils.config import Settings

_CONFIGURED = False


class StructuredFormatter(logging.Formatter):
    """key=value lines for non-dev environments."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return " ".join(f"{k}={v}" for k, v in log_data.items())


def setup_logging(settings: Settings, force: bool = False) -> None:
    # Streamlit re-executes app.py on every interaction
    global _CONFIGURED
    if _CONFIGURED and not force:
        return

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    if settings.is_dev:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    else:
        formatter = StructuredFormatter()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("watchdog").setLevel(logging.WARNING)
    _CONFIGURED = True
