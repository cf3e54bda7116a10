#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2023,2025-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SYMKDF cryptographic exceptions module.

The key provider reports every rejection through one of the classes below. Their names
follow the error names of the W3C Web Cryptography API, so a rejection raised here
means the same thing as the corresponding ``DOMException`` of a WebCrypto provider.
"""

from symkdf.exceptions import SYMKDFError


class SYMKDFCryptoError(SYMKDFError):
    """General SYMKDF Crypto Error.

    Base exception class for all rejections of the cryptographic provider.
    """


class SYMKDFNotSupportedError(SYMKDFCryptoError):
    """Requested algorithm, hash or key format is not supported."""


class SYMKDFSyntaxError(SYMKDFCryptoError):
    """Required parameter is missing or out of range.

    Raised for empty or not permitted key usages and for an extractable HKDF base key.
    """


class SYMKDFDataError(SYMKDFCryptoError):
    """Provided key data are not valid for the requested algorithm."""


class SYMKDFInvalidAccessError(SYMKDFCryptoError):
    """Requested operation is not valid for the provided key.

    Raised when the key was not created with the usage the operation needs, or when
    a non-extractable key is exported.
    """


class SYMKDFOperationError(SYMKDFCryptoError):
    """Operation failed for an operation-specific reason.

    Typical causes are an invalid output length, failed tag verification or
    invalid padding.
    """
