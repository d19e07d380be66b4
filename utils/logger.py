"""
Process-wide logger shared by the conversion modules and the command line tools.
"""

import logging

LOGGER_NAME = "mgrs_conversion"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class Logger:
    _logger = logging.getLogger(LOGGER_NAME)

    @staticmethod
    def configure(level: str = "INFO") -> None:
        """
        Attach a stream handler to the shared logger and set its level.
        Calling this more than once only updates the level.

        :param level: A standard logging level name, e.g. "DEBUG" or "WARNING".
        """
        if not Logger._logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(LOG_FORMAT))
            Logger._logger.addHandler(handler)
        Logger._logger.setLevel(level.upper())

    @staticmethod
    def log(level: str, message: str) -> None:
        """
        Log a message at the given level.

        :param level: A standard logging level name, e.g. "INFO" or "ERROR".
        :param message: The message to log.
        """
        numeric_level = logging.getLevelName(level.upper())
        if not isinstance(numeric_level, int):
            raise ValueError(f"Invalid log level: {level}")
        Logger._logger.log(numeric_level, message)
