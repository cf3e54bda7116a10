#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2019-2023,2025-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SYMKDF cryptographic random number generation utilities.

Salts, initialization vectors and generated keys all come from the `secrets` module.
"""

# Used security modules


from secrets import token_bytes

# Recommended salt size in bytes, HKDF does not mandate any
DEFAULT_SALT_SIZE = 16


def random_bytes(length: int) -> bytes:
    """Generate cryptographically secure random bytes.

    :param length: The number of random bytes to generate.
    :raises ValueError: If length is negative.
    :return: Cryptographically secure random bytes of specified length.
    """
    return token_bytes(length)


def random_salt(length: int = DEFAULT_SALT_SIZE) -> bytes:
    """Generate a fresh salt for a single key derivation.

    Use a new salt for every derived key.

    :param length: Salt size in bytes, defaults to 16.
    :return: Random salt.
    """
    return random_bytes(length)
