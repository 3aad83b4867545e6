from loguru import logger
from labstock.config import get_config

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[component]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
DEFAULT_COMPONENT = "labstock"


class AppLogger:
    """Console logging for labstock.

    One sink at get_config().log_level. Each record shows the component that
    emitted it, so engine and store messages can be told apart in batch output.
    """
    def __init__(self) -> None:
        log_level = get_config().log_level.upper()
        logger.remove()
        logger.configure(extra={"component": DEFAULT_COMPONENT})
        logger.add(
            sink=lambda msg: print(msg, end=""),
            level=log_level,
            format=LOG_FORMAT,
        )
        self.logger = logger

    def get_logger(self, name: str = None):
        """Logger bound to a component.

        Args:
            name (str, optional): shown in the component column; "labstock" when omitted.
        Returns:
            loguru.Logger
        """
        if name:
            return self.logger.bind(component=name)
        return self.logger

def get_logger(name: str = None):
    """Get a new application logger using the latest config."""
    return AppLogger().get_logger(name)
