#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2019-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SYMKDF cryptographic hash algorithms.

This module provides the enumeration of hash algorithms known to SYMKDF, lookup of
the matching `cryptography` hash classes, and the subset of algorithms HKDF and HMAC
keys accept.
"""

# Used security modules

from typing import Union

from cryptography.hazmat.primitives import hashes

from symkdf.crypto.exceptions import SYMKDFNotSupportedError
from symkdf.utils.symkdf_enum import SymkdfEnum


class EnumHashAlgorithm(SymkdfEnum):
    """Hash algorithm enumeration for cryptographic operations.

    Each algorithm is represented with its numeric identifier, label and display name.
    """

    SHA1 = (0, "sha1", "SHA-1")
    SHA256 = (1, "sha256", "SHA-256")
    SHA384 = (2, "sha384", "SHA-384")
    SHA512 = (3, "sha512", "SHA-512")
    MD5 = (4, "md5", "MD5")
    SHA3_256 = (6, "sha3_256", "SHA3-256")
    SHA3_384 = (7, "sha3_384", "SHA3-384")
    SHA3_512 = (8, "sha3_512", "SHA3-512")


# Hash algorithms accepted by HKDF base keys and HMAC keys
KDF_HASH_ALGORITHMS = (
    EnumHashAlgorithm.SHA1,
    EnumHashAlgorithm.SHA256,
    EnumHashAlgorithm.SHA384,
    EnumHashAlgorithm.SHA512,
)


def hash_algorithm_from_name(name: Union[str, EnumHashAlgorithm]) -> EnumHashAlgorithm:
    """Get hash algorithm enum member from its name.

    Both the label ("sha256") and the display form ("SHA-256") are accepted, case-insensitive.

    :param name: Name of the hash algorithm or the enum member itself.
    :raises SYMKDFNotSupportedError: Unknown hash algorithm name.
    :return: Hash algorithm enum member.
    """
    if isinstance(name, EnumHashAlgorithm):
        return name
    if not isinstance(name, str):
        raise SYMKDFNotSupportedError(f"Unsupported hash algorithm: {name}")
    for member in EnumHashAlgorithm:
        if name.upper() in (member.label.upper(), str(member.description).upper()):
            return member
    raise SYMKDFNotSupportedError(f"Unsupported hash algorithm: {name}")


def get_hash_algorithm(algorithm: EnumHashAlgorithm) -> hashes.HashAlgorithm:
    """Get hash algorithm instance for specified algorithm type.

    :param algorithm: Hash algorithm type enumeration value.
    :raises SYMKDFNotSupportedError: If the specified algorithm is not supported.
    :return: Instance of the corresponding hash algorithm class.
    """
    cls_name = algorithm.label.upper()
    algo_cls = getattr(hashes, cls_name, None)  # hack: get class object by name
    if algo_cls is None:
        raise SYMKDFNotSupportedError(f"Unsupported algorithm: hashes.{cls_name}")
    return algo_cls()  # pylint: disable=not-callable


def get_kdf_hash_algorithm(algorithm: Union[str, EnumHashAlgorithm]) -> hashes.HashAlgorithm:
    """Get hash algorithm instance usable for HKDF and HMAC keys.

    :param algorithm: Hash algorithm enum member or its name.
    :raises SYMKDFNotSupportedError: The algorithm is not allowed for key derivation.
    :return: Instance of the corresponding hash algorithm class.
    """
    hash_alg = hash_algorithm_from_name(algorithm)
    if hash_alg not in KDF_HASH_ALGORITHMS:
        raise SYMKDFNotSupportedError(
            f"Hash algorithm {hash_alg.description} is not supported for key derivation, "
            f"use one of: {', '.join(str(alg.description) for alg in KDF_HASH_ALGORITHMS)}"
        )
    return get_hash_algorithm(hash_alg)

