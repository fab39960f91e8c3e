from datetime import datetime
import os
import logging
import json
import sys

# Configure JSON logging


class JsonLogger(logging.Formatter):
    """Formatter that renders each log record as a single JSON object."""

    def format(self, record):
        """
        Format the log record as a JSON string.

        Args:
            record: The log record to format

        Returns:
            str: JSON formatted log string
        """
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'path': record.pathname,
            'line': record.lineno,
            'function': record.funcName
        }

        # Structured payload passed through extra={"metrics": ...}
        if hasattr(record, 'metrics'):
            log_data['metrics'] = record.metrics

        if record.exc_info:
            log_data['exception'] = {
                'type': record.exc_info[0].__name__,
                'message': str(record.exc_info[1]),
                'traceback': self.formatException(record.exc_info)
            }

        # Tokens are not guaranteed to be JSON types
        return json.dumps(log_data, default=str)


def determine_log_path(log_file):
    """
    Create the directory of a log file if needed.

    Args:
        log_file (str): Log file path

    Returns:
        str: Path to use for logging
    """
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    return log_file


def get_logger(logger_name, log_file=None, level=logging.INFO, console_json=True):
    """
    Get a logger writing JSON records to stdout and, optionally, to a file.

    Calling it again with the same name replaces the handlers installed by
    the previous call.

    Args:
        logger_name (str): Name for the logger
        log_file (str, optional): Path to the log file; no file handler if None
        level (int or str): Console level, e.g. ``logging.INFO`` or ``"DEBUG"``
        console_json (bool): Whether to use JSON formatting for console output

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.DEBUG)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    if console_json:
        console_handler.setFormatter(JsonLogger())
    else:
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))

    logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(determine_log_path(log_file))
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JsonLogger())
        logger.addHandler(file_handler)

    return logger


def log_json(logger, message, data=None):
    """
    Log a message with optional JSON data.

    Args:
        logger (logging.Logger): Logger instance
        message (str): Log message
        data (dict, optional): Data to include in the log
    """
    if data is None:
        logger.info(message)
    else:
        logger.info(message, extra={"metrics": data})
