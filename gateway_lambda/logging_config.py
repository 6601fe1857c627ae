"""JSON logging configuration for Lambda functions built on gateway_lambda."""

import logging
import os
from typing import Optional, Union

from pythonjsonlogger.json import JsonFormatter

LOGGER_NAME = "gateway_lambda"
LOG_LEVEL_ENV_VAR = "GATEWAY_LAMBDA_LOG_LEVEL"


class CustomJsonFormatter(JsonFormatter):
    """JSON formatter with a focused field set.

    Keeps timestamp, level, message, exc_info, funcName, lineno and logger.
    Drops verbose fields like module, process, thread, processName and threadName.
    """

    allowed_fields = {
        "timestamp",
        "level",
        "message",
        "exc_info",
        "funcName",
        "lineno",
        "logger",
    }

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        if "levelname" in log_record:
            log_record["level"] = log_record.pop("levelname")
        if "name" in log_record:
            log_record["logger"] = log_record.pop("name")

        for key in [key for key in log_record if key not in self.allowed_fields]:
            log_record.pop(key)


def configure_logging(level: Optional[Union[int, str]] = None) -> logging.Logger:
    """Attach a JSON stream handler to the gateway_lambda logger.

    Call once from the Lambda entry module. The level comes from `level`, else the
    GATEWAY_LAMBDA_LOG_LEVEL environment variable, else INFO.

    Returns:
        The configured package logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO").upper()
    logger.setLevel(level)

    # Prevent duplicate handlers on warm starts
    if any(isinstance(h.formatter, CustomJsonFormatter) for h in logger.handlers):
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(
        CustomJsonFormatter(
            fmt="%(timestamp)s %(levelname)s %(name)s %(funcName)s %(lineno)d %(message)s",
            timestamp=True,
        )
    )
    logger.addHandler(handler)
    logger.propagate = False  # Don't propagate to root logger

    return logger
