#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2019-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SYMKDF HMAC utilities.

HMAC is the primitive under HKDF-Extract and the operation behind HMAC key handles.
"""

from typing import Union

from cryptography.exceptions import InvalidSignature

# Used security modules
from cryptography.hazmat.primitives import hmac as hmac_cls

from symkdf.crypto.hash import EnumHashAlgorithm, get_kdf_hash_algorithm


def hmac(
    key: bytes,
    data: bytes,
    algorithm: Union[str, EnumHashAlgorithm] = EnumHashAlgorithm.SHA256,
) -> bytes:
    """Compute HMAC from data with specified key and algorithm.

    :param key: The cryptographic key in bytes format.
    :param data: Input data to be authenticated in bytes format.
    :param algorithm: Hash algorithm for HMAC computation (SHA-1/256/384/512), defaults to SHA256.
    :raises SYMKDFNotSupportedError: Hash algorithm is not supported.
    :return: HMAC digest as bytes.
    """
    hmac_obj = hmac_cls.HMAC(key, get_kdf_hash_algorithm(algorithm))
    hmac_obj.update(data)
    return hmac_obj.finalize()


def hmac_validate(
    key: bytes,
    data: bytes,
    signature: bytes,
    algorithm: Union[str, EnumHashAlgorithm] = EnumHashAlgorithm.SHA256,
) -> bool:
    """Validate HMAC signature against provided data using specified key and algorithm.

    The comparison is done in constant time by the underlying provider.

    :param key: The key in bytes format used for HMAC generation.
    :param data: Input data in bytes format to validate against signature.
    :param signature: HMAC signature in bytes format to validate.
    :param algorithm: Algorithm type for HASH function (sha1, sha256, sha384, sha512).
    :return: True if signature is valid, False otherwise.
    """
    hmac_obj = hmac_cls.HMAC(key=key, algorithm=get_kdf_hash_algorithm(algorithm))
    hmac_obj.update(data)
    try:
        hmac_obj.verify(signature=signature)
        return True
    except InvalidSignature:
        return False
