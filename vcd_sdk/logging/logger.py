# vcd-sdk
# Copyright (c) 2023 VMware, Inc. All Rights Reserved.
# SPDX-License-Identifier: BSD-2-Clause

from collections import namedtuple
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from vcd_sdk.common.utils.init_utils import run_once
from vcd_sdk.logging.redacting_filter import RedactingFilter

# max size for log files (8MB)
_MAX_BYTES = 2**23
_BACKUP_COUNT = 10

# standard formatters used by handlers
INFO_LOG_FORMATTER = logging.Formatter(fmt='%(asctime)s | '
                                       '%(levelname)s :: '
                                       '%(message)s',
                                       datefmt='%y-%m-%d %H:%M:%S')
DEBUG_LOG_FORMATTER = logging.Formatter(fmt='%(asctime)s | '
                                        '%(module)s:%(lineno)s - %(funcName)s | '  # noqa: E501
                                        '%(levelname)s :: '
                                        '%(message)s',
                                        datefmt='%y-%m-%d %H:%M:%S')

# default directory for all sdk logs
LOGS_DIR_NAME = Path.home() / '.vcd-sdk-logs'

# sdk logger
# logs info level and debug level logs to:
# ~/.vcd-sdk-logs/vcd-sdk-info.log
# ~/.vcd-sdk-logs/vcd-sdk-debug.log
# .log files are always the most current, with .log.9 being the oldest
SDK_LOGGER_NAME = 'vcd_sdk.client'
SDK_INFO_LOG_FILENAME = 'vcd-sdk-info.log'
SDK_DEBUG_LOG_FILENAME = 'vcd-sdk-debug.log'
SDK_LOGGER = logging.getLogger(SDK_LOGGER_NAME)

# request and response dumps of every call made to vCD are logged to:
# ~/.vcd-sdk-logs/vcd-sdk-wire.log
SDK_WIRE_LOGGER_NAME = 'vcd_sdk.client-wire'
SDK_WIRE_LOG_FILENAME = 'vcd-sdk-wire.log'
SDK_WIRE_LOGGER = logging.getLogger(SDK_WIRE_LOGGER_NAME)

# NullLogger doesn't perform logging.
NULL_LOGGER = logging.getLogger('vcd_sdk.null-logger')


@run_once
def configure_null_logger():
    """Configure null logger if it is not configured."""
    nullhandler = logging.NullHandler()
    NULL_LOGGER.addHandler(nullhandler)
    NULL_LOGGER.propagate = False


@run_once
def configure_library_loggers():
    """Make sure sdk loggers don't complain when the app configures none."""
    for logger in (SDK_LOGGER, SDK_WIRE_LOGGER):
        logger.addHandler(logging.NullHandler())
        logger.addFilter(RedactingFilter())


@run_once
def configure_all_file_loggers(log_dir=None):
    """Configure rotating file handlers for all sdk loggers.

    :param str log_dir: directory to write the log files to, defaults to
        ~/.vcd-sdk-logs

    :return: list of the configured LoggerConfig tuples
    """
    log_dir = Path(log_dir).expanduser() if log_dir else LOGS_DIR_NAME
    log_dir.mkdir(parents=True, exist_ok=True)
    LoggerConfig = namedtuple('LoggerConfig', 'name filepath formatter logger')
    logger_configs = [
        LoggerConfig(SDK_LOGGER_NAME, log_dir / SDK_INFO_LOG_FILENAME,
                     INFO_LOG_FORMATTER, SDK_LOGGER),
        LoggerConfig(SDK_LOGGER_NAME, log_dir / SDK_DEBUG_LOG_FILENAME,
                     DEBUG_LOG_FORMATTER, SDK_LOGGER),
        LoggerConfig(SDK_WIRE_LOGGER_NAME, log_dir / SDK_WIRE_LOG_FILENAME,
                     DEBUG_LOG_FORMATTER, SDK_WIRE_LOGGER),
    ]

    for logger_config in logger_configs:
        file_handler = RotatingFileHandler(str(logger_config.filepath),
                                           maxBytes=_MAX_BYTES,
                                           backupCount=_BACKUP_COUNT,
                                           delay=True)
        # the debug handler of a logger decides the logger level
        logger_config.logger.setLevel(logging.DEBUG)
        if logger_config.formatter == INFO_LOG_FORMATTER:
            file_handler.setLevel(logging.INFO)
            file_handler.setFormatter(INFO_LOG_FORMATTER)
        elif logger_config.formatter == DEBUG_LOG_FORMATTER:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(DEBUG_LOG_FORMATTER)
        logger_config.logger.addHandler(file_handler)
    return logger_configs
