#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SYMKDF logging utilities with colored console output support.

The command-line application installs a colored console handler and a rotating
debug log file through :func:`install`.
"""

import logging
import logging.handlers
import os
import platform
import re
import sys
from datetime import datetime
from typing import Optional, TextIO

import colorama

from symkdf import SYMKDF_DEBUG_LOG_FILE, SYMKDF_DEBUG_LOGGING_DISABLED, __version__

colorama.just_fix_windows_console()


class ColoredFormatter(logging.Formatter):
    """SYMKDF Colored Logging Formatter.

    Formats records with a color per logging level, or as plain text for files and
    non-console streams.

    :cvar COLORED_FORMATS: Color-coded format strings for each logging level.
    :cvar FORMATS: Plain text format strings for each logging level.
    """

    FORMAT = logging.BASIC_FORMAT
    FORMAT_DEBUG = FORMAT + " (%(relativeCreated)dms since start, %(filename)s:%(lineno)d)"

    COLORED_FORMATS = {
        logging.DEBUG: colorama.Fore.BLUE + FORMAT_DEBUG + colorama.Fore.RESET,
        logging.INFO: colorama.Fore.WHITE
        + colorama.Style.BRIGHT
        + FORMAT
        + colorama.Fore.RESET
        + colorama.Style.RESET_ALL,
        logging.WARNING: colorama.Fore.YELLOW + FORMAT_DEBUG + colorama.Fore.RESET,
        logging.ERROR: colorama.Fore.RED + FORMAT_DEBUG + colorama.Fore.RESET,
        logging.CRITICAL: colorama.Fore.RED
        + colorama.Style.BRIGHT
        + FORMAT_DEBUG
        + colorama.Fore.RESET
        + colorama.Style.RESET_ALL,
    }
    FORMATS = {
        logging.DEBUG: FORMAT_DEBUG,
        logging.INFO: FORMAT,
        logging.WARNING: FORMAT_DEBUG,
        logging.ERROR: FORMAT_DEBUG,
        logging.CRITICAL: FORMAT_DEBUG,
    }

    def __init__(self, colored: bool = True) -> None:
        """Initialize the formatter.

        :param colored: Use colored output.
        """
        super().__init__()
        self.colored = colored
        self.formats = self.COLORED_FORMATS if colored else self.FORMATS

    def format(self, record: logging.LogRecord) -> str:
        """Format the record with the format of its level.

        :param record: Input logging record to print.
        :return: Formatted logging string.
        """
        formatter = logging.Formatter(self.formats.get(record.levelno))
        if not self.colored and isinstance(record.msg, str):
            record.msg = re.sub(r"\x1b\[\d{1,3}m", "", record.msg)
        return formatter.format(record)


def _install_debug_handler(target_logger: logging.Logger) -> None:
    for handler in target_logger.handlers:
        if (
            isinstance(handler, logging.handlers.RotatingFileHandler)
            and handler.baseFilename == os.path.abspath(SYMKDF_DEBUG_LOG_FILE)
        ):
            return
    os.makedirs(os.path.dirname(os.path.abspath(SYMKDF_DEBUG_LOG_FILE)), exist_ok=True)
    debug_handler = logging.handlers.RotatingFileHandler(
        SYMKDF_DEBUG_LOG_FILE, mode="a", maxBytes=1_000_000, backupCount=5, encoding="utf-8"
    )
    debug_handler.setFormatter(ColoredFormatter(colored=False))
    debug_handler.setLevel(logging.DEBUG)
    target_logger.addHandler(debug_handler)

    starter = f"* SYMKDF DEBUG LOGGING STARTED {datetime.now().strftime('%Y-%m-%d %H:%M:%S')} *"
    padding = len(starter) - 2
    target_logger.debug("*" * len(starter))
    target_logger.debug(starter)
    target_logger.debug(f"* SYMKDF version: {__version__}".ljust(padding) + " *")
    target_logger.debug(f"* Python version: {sys.version.split()[0]}".ljust(padding) + " *")
    target_logger.debug(f"* OS version: {platform.platform()}".ljust(padding) + " *")
    target_logger.debug(f"* Last command: {sys.argv}".ljust(padding) + " *")
    target_logger.debug("*" * len(starter))


def install(
    level: Optional[int] = None,
    stream: TextIO = sys.stderr,
    colored: Optional[bool] = None,
    logger: Optional[logging.Logger] = None,
    create_debug_logger: bool = True,
) -> None:
    """Install SYMKDF log handlers.

    :param level: Console logging level, defaults to logging.WARNING.
    :param stream: Stream to output logging, defaults to sys.stderr.
    :param colored: Force colored output on or off, detected from the stream if None.
    :param logger: Logger to install handlers to, defaults to the "symkdf" logger.
    :param create_debug_logger: Create rotating debug log file.
    """
    level = level or logging.WARNING
    target_logger = logger or logging.getLogger("symkdf")
    # console handler filters by level, debug file gets everything
    target_logger.setLevel(logging.DEBUG)

    color = colored
    if color is None:
        # For details see https://no-color.org/
        color = "NO_COLOR" not in os.environ and hasattr(stream, "isatty") and stream.isatty()

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter(color))
    target_logger.addHandler(handler)
    target_logger.propagate = True

    if create_debug_logger and not SYMKDF_DEBUG_LOGGING_DISABLED:
        try:
            _install_debug_handler(target_logger)
        except OSError as exc:
            target_logger.warning(f"Failed to initialize debug logging: {str(exc)}")
