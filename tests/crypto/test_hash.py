#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2019-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause

"""SYMKDF hash algorithm tests.

Known digests of all hash algorithms, name lookup in both naming styles and the
restriction of key derivation to SHA-1 and SHA-2.
"""

from binascii import unhexlify

import pytest
from cryptography.hazmat.primitives import hashes

from symkdf.crypto.exceptions import SYMKDFNotSupportedError
from symkdf.crypto.hash import (
    KDF_HASH_ALGORITHMS,
    EnumHashAlgorithm,
    get_hash_algorithm,
    get_kdf_hash_algorithm,
    hash_algorithm_from_name,
)

# pylint: disable=line-too-long
EXPECTED_HASHES = {
    EnumHashAlgorithm.SHA1: "2fd4e1c67a2d28fced849ee1bb76e7391b93eb12",
    EnumHashAlgorithm.SHA256: "d7a8fbb307d7809469ca9abcb0082e4f8d5651e46d3cdb762d02d0bf37c9e592",
    EnumHashAlgorithm.SHA384: "ca737f1014a48f4c0b6dd43cb177b0afd9e5169367544c494011e3317dbf9a509cb1e5dc1e85a941bbee3d7f2afbc9b1",
    EnumHashAlgorithm.SHA512: "07e547d9586f6a73f73fbac0435ed76951218fb7d0c8d788a309d785436bbb642e93a252a954f23912547d1e8a3b5ed6e1bfd7097821233fa0538f3db854fee6",
    EnumHashAlgorithm.MD5: "9e107d9d372bb6826bd81d3542a419d6",
    EnumHashAlgorithm.SHA3_256: "69070dda01975c8c120c3aada1b282394e7f032fa9cf32f4cb2259a0897dfc04",
}


@pytest.mark.parametrize("algorithm,expected", EXPECTED_HASHES.items())
def test_get_hash_algorithm(algorithm: EnumHashAlgorithm, expected: str) -> None:
    """Test hash algorithm instances produce known digests."""
    hasher = hashes.Hash(get_hash_algorithm(algorithm))
    hasher.update(b"The quick brown fox jumps over the lazy dog")
    assert hasher.finalize() == unhexlify(expected)


@pytest.mark.parametrize(
    "name,expected",
    [
        ("sha256", EnumHashAlgorithm.SHA256),
        ("SHA-256", EnumHashAlgorithm.SHA256),
        ("Sha-512", EnumHashAlgorithm.SHA512),
        ("SHA1", EnumHashAlgorithm.SHA1),
        ("sha-1", EnumHashAlgorithm.SHA1),
        ("sha3-256", EnumHashAlgorithm.SHA3_256),
        (EnumHashAlgorithm.SHA384, EnumHashAlgorithm.SHA384),
    ],
)
def test_hash_algorithm_from_name(name: str, expected: EnumHashAlgorithm) -> None:
    """Test hash algorithm lookup by label and by display name."""
    assert hash_algorithm_from_name(name) == expected


@pytest.mark.parametrize("name", ["sha224", "SHA-999", "", 256])
def test_hash_algorithm_from_name_unknown(name: object) -> None:
    """Test unknown hash algorithm names are not supported."""
    with pytest.raises(SYMKDFNotSupportedError):
        hash_algorithm_from_name(name)  # type: ignore[arg-type]


def test_kdf_hash_algorithms() -> None:
    """Test only SHA-1 and SHA-2 hashes are usable for key derivation."""
    digest_sizes = [get_kdf_hash_algorithm(alg).digest_size for alg in KDF_HASH_ALGORITHMS]
    assert digest_sizes == [20, 32, 48, 64]
    assert get_kdf_hash_algorithm("SHA-384").name == "sha384"
    for algorithm in (EnumHashAlgorithm.MD5, EnumHashAlgorithm.SHA3_384):
        with pytest.raises(SYMKDFNotSupportedError):
            get_kdf_hash_algorithm(algorithm)
