#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2019-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SYMKDF exception classes and error handling utilities.

This module defines the hierarchy of custom exception classes used throughout
the SYMKDF library for consistent error handling and reporting.
"""

from typing import Optional

#######################################################################
# # Symmetric Key Derivation Framework Exceptions
#######################################################################


class SYMKDFError(Exception):
    """Symmetric Key Derivation Framework Base Exception.

    Base exception class for all SYMKDF-related errors and exceptions.
    This class provides consistent error formatting across the library.
    All SYMKDF-specific exceptions inherit from this base class.

    :cvar fmt: Default error message format template.
    """

    fmt = "SYMKDF: {description}"

    def __init__(self, desc: Optional[str] = None) -> None:
        """Initialize the base SYMKDF Exception.

        :param desc: Optional description of the exception.
        """
        super().__init__()
        self.description = desc

    def __str__(self) -> str:
        """Return string representation of the exception.

        If no description is provided, defaults to "Unknown Error".

        :return: Formatted exception message as string.
        """
        return self.fmt.format(description=self.description or "Unknown Error")


class SYMKDFKeyError(SYMKDFError, KeyError):
    """SYMKDF Key Error exception for missing dictionary keys or enum members."""


class SYMKDFValueError(SYMKDFError, ValueError):
    """SYMKDF standard value error exception.

    This exception is raised when an invalid value is provided to SYMKDF operations,
    combining SYMKDF-specific error handling with standard ValueError semantics.
    """


class SYMKDFTypeError(SYMKDFError, TypeError):
    """SYMKDF standard type error exception."""


class SYMKDFLengthError(SYMKDFError, ValueError):
    """SYMKDF length validation error for binary data operations.

    This exception is raised when loaded data does not have the length
    expected by the operation being performed.
    """


class SYMKDFFileNotFoundError(FileNotFoundError, SYMKDFError):
    """SYMKDF file not found exception.

    Exception raised when a required file cannot be found. This exception combines
    standard FileNotFoundError behavior with SYMKDF-specific error handling.
    """
