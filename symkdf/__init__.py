#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2019-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SYMKDF - Symmetric Key Derivation Framework.

Derive symmetric keys from high-entropy input keying material using HKDF (RFC 5869).

WHAT YOU GET:
    - A single call turning input keying material and a salt into a usable key handle
    - A small key provider (raw import, HKDF bit derivation, export) on top of `cryptography`
    - AES-GCM/CBC/CTR, AES key wrap and HMAC operations bound to the key usages

MULTIPLE INTERFACES:
    - Pure Python library for custom integrations
    - CLI tool for automation and scripting
"""

import os
from typing import Optional, Union

from packaging.version import Version, parse
from platformdirs import PlatformDirs


def get_symkdf_version() -> Version:
    """Get SYMKDF version information.

    :return: Parsed version object containing SYMKDF version information.
    """
    from .__version__ import __version__ as symkdf_version

    return parse(symkdf_version)


def value_to_bool(value: Optional[Union[bool, int, str]]) -> bool:
    """Convert value to boolean from various input formats.

    Supports conversion from string representations like "True", "true", "T", "1"
    and standard Python truthy/falsy values for other types.

    :param value: Value to convert to boolean (string, int, bool, or None).
    :return: Boolean representation of the input value.
    """
    if isinstance(value, str):
        return value in ("True", "true", "T", "1")
    return bool(value)


version = get_symkdf_version()

__author__ = "NXP"
__license__ = "BSD-3-Clause"
__version__ = str(version)
__release__ = "beta"


# The SYMKDF behavior settings
SYMKDF_VERSION_BASE = version.base_version
SYMKDF_PLATFORM_DIRS = PlatformDirs(
    appauthor="nxp",
    appname="symkdf",
    version=SYMKDF_VERSION_BASE,
)

SYMKDF_YML_INDENT = 2

SYMKDF_DEBUG_LOGGING_DISABLED = value_to_bool(os.environ.get("SYMKDF_DEBUG_LOGGING_DISABLED"))
SYMKDF_DEBUG_LOG_FILE = os.environ.get(
    "SYMKDF_DEBUG_LOG_FILE", os.path.join(SYMKDF_PLATFORM_DIRS.user_log_dir, "debug.log")
)
