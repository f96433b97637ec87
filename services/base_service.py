"""
Base service for the business logic layer.
Services orchestrate business operations using repositories.
"""

from abc import ABC
import logging


class BaseService(ABC):
    """
    Base service providing structured logging helpers.
    Messages are rendered as ``event key=value ...``.
    """

    def __init__(self, logger_name: str):
        self.logger = logging.getLogger(logger_name)

    @staticmethod
    def _format(message: str, **kwargs) -> str:
        extra_data = " ".join([f"{k}={v}" for k, v in kwargs.items()])
        return f"{message} {extra_data}".strip()

    def log_info(self, message: str, **kwargs):
        """Log info message with structured data"""
        self.logger.info(self._format(message, **kwargs))

    def log_warning(self, message: str, **kwargs):
        """Log warning message with structured data"""
        self.logger.warning(self._format(message, **kwargs))
