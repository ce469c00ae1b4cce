# Backend/evaluator/logging_config.py
import logging

from .config import Settings


class LoggingConfig:
    """Logging configuration and setup."""

    LOGGER_NAME = "evaluator"

    @staticmethod
    def setup_logging(settings: Settings) -> logging.Logger:
        """Set up the package logger based on settings."""
        logger = logging.getLogger(LoggingConfig.LOGGER_NAME)
        logger.setLevel(getattr(logging, settings.LOG_LEVEL))

        # Clear existing handlers so repeated setup does not duplicate output
        logger.handlers.clear()

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        if settings.ENABLE_CONSOLE_LOGGING:
            console_handler = logging.StreamHandler()
            console_handler.setLevel(getattr(logging, settings.LOG_LEVEL))
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

        if settings.ENABLE_FILE_LOGGING and settings.LOG_FILE:
            try:
                file_handler = logging.FileHandler(settings.LOG_FILE, encoding='utf-8')
                file_handler.setLevel(getattr(logging, settings.LOG_LEVEL))
                file_handler.setFormatter(formatter)
                logger.addHandler(file_handler)
            except OSError as e:
                logger.warning(f"Could not set up file logging: {e}")

        return logger


def get_logger() -> logging.Logger:
    """Get the package logger, configuring it on first use."""
    from .config import settings

    logger = logging.getLogger(LoggingConfig.LOGGER_NAME)
    if not logger.handlers:
        LoggingConfig.setup_logging(settings)
    return logger
