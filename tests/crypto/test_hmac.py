#!/usr/bin/env python
# -*- coding: UTF-8 -*-
#
# Copyright 2019-2026 NXP
#
# SPDX-License-Identifier: BSD-3-Clause


"""SYMKDF HMAC tests."""

from binascii import unhexlify

import pytest

from symkdf.crypto.exceptions import SYMKDFNotSupportedError
from symkdf.crypto.hash import EnumHashAlgorithm
from symkdf.crypto.symkdf_hmac import hmac, hmac_validate
from symkdf.exceptions import SYMKDFError
from symkdf.utils.symkdf_enum import SymkdfEnum


def test_hmac() -> None:
    """Test HMAC SHA256 calculation against expected value."""
    key = b"12345678"
    plain_text = b"testestestestestestestestestestestestestestestestestestestest"
    text_hmac_sha256 = unhexlify("d785d886a750c999aa86802697dd4a9934facac72614cbfa66bbf657b74eb1d5")
    assert hmac(key, plain_text, EnumHashAlgorithm.SHA256) == text_hmac_sha256
    assert hmac(key, plain_text) == text_hmac_sha256
    assert hmac(key, plain_text, "SHA-256") == text_hmac_sha256


def test_hmac_rfc4231() -> None:
    """Test HMAC SHA-512 against RFC 4231 test case 2."""
    expected = unhexlify(
        "164b7a7bfcf819e2e395fbe73b56e0a387bd64222e831fd610270cd7ea250554"
        "9758bf75c05a994a6d034f65f8f0e6fdcaeab1a34d4a6b4b636e070a38bce737"
    )
    assert hmac(b"Jefe", b"what do ya want for nothing?", EnumHashAlgorithm.SHA512) == expected


def test_hmac_validate() -> None:
    """Test HMAC validation of correct and tampered signatures."""
    signature = hmac(b"key", b"data", EnumHashAlgorithm.SHA1)
    assert hmac_validate(b"key", b"data", signature, EnumHashAlgorithm.SHA1)
    assert not hmac_validate(b"key", b"data!", signature, EnumHashAlgorithm.SHA1)
    assert not hmac_validate(b"key", b"data", signature, EnumHashAlgorithm.SHA256)


def test_hmac_invalid() -> None:
    """Test HMAC with hash algorithm unknown to SYMKDF."""

    class TestEnumHashAlgorithm(SymkdfEnum):
        """Hash algorithm enumeration unknown to SYMKDF."""

        SHA256b = (0, "SHA256b", "SHA256b")

    with pytest.raises(SYMKDFError):
        hmac(key=b"1", data=b"t", algorithm=TestEnumHashAlgorithm.SHA256b)  # type: ignore


def test_hmac_unsupported_hash() -> None:
    """Test HMAC rejects hash algorithms outside of the key derivation set."""
    with pytest.raises(SYMKDFNotSupportedError):
        hmac(b"key", b"data", EnumHashAlgorithm.MD5)
